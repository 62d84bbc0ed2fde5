"""
Access errors - the outcome taxonomy of every authorized operation

Each error maps to exactly one HTTP status; the HTTP layer reads
`status_code` and `message` and never looks at `cause`.
"""


class AccessError(Exception):
    status_code = 500

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class InvalidArgument(AccessError):
    """Malformed or out-of-range input, detected before any store access"""
    status_code = 400


class Unauthorized(AccessError):
    """Authenticated, but not entitled to this resource"""
    status_code = 401


class NotFound(AccessError):
    """The resource or its required parent does not exist"""
    status_code = 404


class StorageError(AccessError):
    """The store failed; the original exception is kept in `cause`"""
    status_code = 500
