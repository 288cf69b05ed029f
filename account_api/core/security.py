# account_api/core/security.py
import logging
from datetime import datetime, timedelta, timezone

from jose import jwt, JWTError
from passlib.context import CryptContext

from account_api.core.config import settings
from account_api.core.exceptions import ErrorMessages, UnauthorizedError

logger = logging.getLogger(__name__)

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.PASSWORD_HASH_ROUNDS,
)


def hash_password(plain: str) -> str:
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        # 알 수 없는 해시 포맷
        return False


def _encode(payload: dict, secret: str, expires_in: timedelta) -> str:
    now = datetime.now(timezone.utc)
    payload = {**payload, "iat": now, "exp": now + expires_in}
    return jwt.encode(payload, secret, algorithm=settings.JWT_ALG)


def create_access_token(user_id: int, email: str) -> str:
    return _encode(
        {"sub": str(user_id), "email": email},
        settings.JWT_ACCESS_SECRET,
        timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )


def create_refresh_token(user_id: int) -> str:
    return _encode(
        {"sub": str(user_id)},
        settings.JWT_REFRESH_SECRET,
        timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
    )


def _subject(payload: dict) -> int:
    sub = payload.get("sub")
    if sub is None:
        raise JWTError("missing sub")
    try:
        return int(sub)
    except (TypeError, ValueError):
        raise JWTError("invalid sub")


def decode_access_token(token: str) -> int:
    """Verify an access token and return the user id it was issued for."""
    try:
        payload = jwt.decode(token, settings.JWT_ACCESS_SECRET, algorithms=[settings.JWT_ALG])
        return _subject(payload)
    except JWTError as e:
        logger.debug("access token rejected: %s", e)
        raise UnauthorizedError(ErrorMessages.INVALID_ACCESS_TOKEN, bearer=True)


def decode_refresh_token(token: str) -> int:
    """Verify a refresh token and return the user id it was issued for."""
    try:
        payload = jwt.decode(token, settings.JWT_REFRESH_SECRET, algorithms=[settings.JWT_ALG])
        return _subject(payload)
    except JWTError as e:
        logger.debug("refresh token rejected: %s", e)
        raise UnauthorizedError(ErrorMessages.INVALID_REFRESH_TOKEN)
