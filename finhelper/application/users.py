"""
User use cases - registration, login and the principal's own profile
"""
import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from finhelper.application.access import USER, ResourceAccess
from finhelper.application.errors import InvalidArgument, Unauthorized
from finhelper.auth import TokenMaker, TokenPayload, access_token_ttl, hash_password, verify_password
from finhelper.infrastructure.db.models import User
from finhelper.infrastructure.store import Store

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def _check_password(password: str) -> None:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise InvalidArgument(f"password must be at least {MIN_PASSWORD_LENGTH} characters")


class CreateUserUseCase:
    """
    Use case: register a user

    Username and e-mail are unique; the password is stored hashed only.
    """

    def __init__(self, db: Session):
        self.store = Store(db)
        self.access = ResourceAccess(self.store)

    def execute(
        self,
        username: str,
        email: str,
        password: str,
        currency: str,
        full_name: str = "",
    ) -> User:
        _check_password(password)

        if self.access.guard("load user", self.store.get_user, username) is not None:
            raise InvalidArgument("username is already taken")
        if self.access.guard("load user", self.store.get_user_by_email, email) is not None:
            raise InvalidArgument("email is already registered")

        user = self.access.guard(
            "create user", self.store.create_user,
            username=username,
            email=email,
            hashed_password=hash_password(password),
            currency=currency,
            full_name=full_name,
        )
        logger.info("User registered: %s", username)
        return user


@dataclass(frozen=True)
class LoginResult:
    user: User
    access_token: str
    payload: TokenPayload


class LoginUserUseCase:
    def __init__(self, db: Session, token_maker: TokenMaker):
        self.access = ResourceAccess(Store(db))
        self.token_maker = token_maker

    def execute(self, username: str, password: str) -> LoginResult:
        """
        Raises:
            NotFound: no such user
            Unauthorized: wrong password
        """
        user = self.access.load(USER, username)
        if not verify_password(password, user.hashed_password):
            logger.warning("Failed login for %s", username)
            raise Unauthorized("incorrect password")

        token, payload = self.token_maker.create_token(user.username, access_token_ttl())
        return LoginResult(user=user, access_token=token, payload=payload)


class GetUserUseCase:
    def __init__(self, db: Session):
        self.access = ResourceAccess(Store(db))

    def execute(self, principal: str) -> User:
        return self.access.load_owner(principal)


class UpdateUserUseCase:
    """Profile change; a new password resets password_changed_at"""

    def __init__(self, db: Session):
        self.store = Store(db)
        self.access = ResourceAccess(self.store)

    def execute(
        self,
        principal: str,
        email: str | None = None,
        full_name: str | None = None,
        password: str | None = None,
        currency: str | None = None,
    ) -> User:
        self.access.load_owner(principal)

        values = {}
        if email is not None:
            other = self.access.guard("load user", self.store.get_user_by_email, email)
            if other is not None and other.username != principal:
                raise InvalidArgument("email is already registered")
            values["email"] = email
        if full_name is not None:
            values["full_name"] = full_name
        if password is not None:
            _check_password(password)
            values["hashed_password"] = hash_password(password)
        if currency is not None:
            values["currency"] = currency

        return self.access.guard("update user", self.store.update_user, principal, **values)


class DeleteUserUseCase:
    """
    Delete the principal's own user. Users that still own wallets or
    categories are kept by the foreign keys (StorageError).
    """

    def __init__(self, db: Session):
        self.store = Store(db)
        self.access = ResourceAccess(self.store)

    def execute(self, principal: str) -> None:
        self.access.load_owner(principal)
        self.access.guard("delete user", self.store.delete_user, principal)
        logger.info("User deleted: %s", principal)
