# account_api/services/auth.py
import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from account_api.core.exceptions import ErrorMessages, UnauthorizedError
from account_api.core.security import (
    create_access_token,
    create_refresh_token,
    decode_refresh_token,
    hash_password,
    verify_password,
)
from account_api.models.user import User
from account_api.services.mail import Mailer
from account_api.services.users import create_user, find_by_email, find_by_id
from account_api.services.verification import send_verification_email

logger = logging.getLogger(__name__)


@dataclass
class TokenPair:
    access_token: str
    refresh_token: Optional[str] = None


def generate_auth_tokens(user: User, include_refresh_token: bool = False) -> TokenPair:
    access = create_access_token(user.id, user.email)
    if not include_refresh_token:
        return TokenPair(access_token=access)
    return TokenPair(access_token=access, refresh_token=create_refresh_token(user.id))


def login(db: Session, email: str, password: str, remember_me: bool = False) -> TokenPair:
    user = find_by_email(db, email)

    # 존재하지 않는 이메일과 틀린 비밀번호를 구분하지 않음
    if not user or not verify_password(password, user.password):
        logger.info("Login rejected", extra={"email": email})
        raise UnauthorizedError(ErrorMessages.INVALID_CREDENTIALS)

    logger.info("User logged in", extra={"userId": user.id})
    return generate_auth_tokens(user, include_refresh_token=remember_me)


def refresh_access_token(db: Session, refresh_token: str) -> TokenPair:
    user_id = decode_refresh_token(refresh_token)

    user = find_by_id(db, user_id)
    if not user:
        raise UnauthorizedError(ErrorMessages.INVALID_REFRESH_TOKEN)

    return generate_auth_tokens(user, include_refresh_token=True)


def register(
    db: Session,
    mailer: Mailer,
    email: str,
    password: str,
    first_name: str,
    last_name: str,
) -> User:
    if find_by_email(db, email):
        raise UnauthorizedError(ErrorMessages.USER_ALREADY_EXISTS)

    user = create_user(
        db,
        email=email,
        password_hash=hash_password(password),
        first_name=first_name,
        last_name=last_name,
    )
    logger.info("User registered", extra={"userId": user.id})

    send_verification_email(db, mailer, user.email)
    return user
