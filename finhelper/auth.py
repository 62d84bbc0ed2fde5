"""
Password hashing and access tokens
"""
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from passlib.context import CryptContext

from finhelper.config import get_settings

pwd_context = CryptContext(schemes=["pbkdf2_sha256", "bcrypt"], deprecated=["bcrypt"])


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    return pwd_context.verify(password, hashed_password)


class InvalidToken(Exception):
    pass


class ExpiredToken(InvalidToken):
    pass


@dataclass(frozen=True)
class TokenPayload:
    id: str
    username: str
    issued_at: datetime
    expired_at: datetime


class TokenMaker:
    """
    Signed, timestamped bearer tokens

    The token carries the username and a random id; the signature timestamp
    is the issue time and expiry is checked against the ttl on verification.
    """

    def __init__(self, secret_key: str, salt: str):
        if len(secret_key) < 16:
            raise ValueError("secret key must be at least 16 characters")
        self._serializer = URLSafeTimedSerializer(secret_key, salt=salt)

    def create_token(self, username: str, ttl: timedelta) -> tuple[str, TokenPayload]:
        issued_at = datetime.now(timezone.utc)
        payload = TokenPayload(
            id=str(uuid.uuid4()),
            username=username,
            issued_at=issued_at,
            expired_at=issued_at + ttl,
        )
        token = self._serializer.dumps({"id": payload.id, "username": username})
        return token, payload

    def verify_token(self, token: str, ttl: timedelta) -> TokenPayload:
        """
        Raises:
            ExpiredToken: signature is valid but older than ttl
            InvalidToken: token is malformed or tampered with
        """
        try:
            data, issued_at = self._serializer.loads(
                token, max_age=ttl.total_seconds(), return_timestamp=True
            )
        except SignatureExpired as exc:
            raise ExpiredToken("token has expired") from exc
        except BadSignature as exc:
            raise InvalidToken("token is invalid") from exc

        if not isinstance(data, dict) or not data.get("username"):
            raise InvalidToken("token is invalid")

        return TokenPayload(
            id=data.get("id", ""),
            username=data["username"],
            issued_at=issued_at,
            expired_at=issued_at + ttl,
        )


@lru_cache
def get_token_maker() -> TokenMaker:
    """Token maker built from settings (singleton)"""
    settings = get_settings()
    return TokenMaker(settings.SECRET_KEY, settings.TOKEN_SALT)


def access_token_ttl() -> timedelta:
    return timedelta(minutes=get_settings().ACCESS_TOKEN_TTL_MINUTES)
