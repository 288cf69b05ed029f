# account_api/services/verification.py
"""
Single-use, time-boxed verification tokens (email confirmation / password reset).

Lifecycle: created (unused, unexpired) -> used, or -> expired. Expiry is only
detected at validation time. Consumption marks the token used and applies the
user change in one transaction; a conditional update guarantees that of two
concurrent consumers only one succeeds.
"""
import logging
import secrets
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from account_api.core.db import utcnow
from account_api.core.exceptions import (
    BadRequestError,
    ErrorMessages,
    NotFoundError,
    UnprocessableError,
)
from account_api.core.security import hash_password
from account_api.models.user import User
from account_api.models.verification_token import VerificationToken, VerificationTokenType
from account_api.services.mail import Mailer
from account_api.services.users import find_by_email

logger = logging.getLogger(__name__)

EMAIL_VERIFICATION_EXPIRES_HOURS = 24
PASSWORD_RESET_EXPIRES_HOURS = 1
TOKEN_BYTES = 32


def create_verification_token(
    db: Session,
    user_id: int,
    token_type: VerificationTokenType,
    expires_in_hours: int,
) -> str:
    token = secrets.token_hex(TOKEN_BYTES)
    record = VerificationToken(
        token=token,
        type=token_type,
        expires_at=utcnow() + timedelta(hours=expires_in_hours),
        user_id=user_id,
    )
    db.add(record)
    db.commit()
    return token


def validate_token(
    db: Session,
    token: str,
    token_type: VerificationTokenType,
    now: Optional[datetime] = None,
) -> VerificationToken:
    record = db.query(VerificationToken).filter(VerificationToken.token == token).first()

    if not record:
        raise NotFoundError(ErrorMessages.VERIFICATION_TOKEN_NOT_FOUND)

    if record.type != token_type:
        raise BadRequestError(ErrorMessages.INVALID_TOKEN_TYPE)

    if record.is_used:
        raise UnprocessableError(ErrorMessages.TOKEN_ALREADY_USED)

    # 만료 시각과 정확히 같으면 아직 유효
    if record.expires_at < (now or utcnow()):
        raise UnprocessableError(ErrorMessages.TOKEN_EXPIRED)

    return record


def consume_token(db: Session, record: VerificationToken, user_changes: dict) -> None:
    """Mark the token used and apply user_changes to its owner atomically."""
    token_id, user_id = record.id, record.user_id
    try:
        result = db.execute(
            update(VerificationToken)
            .where(VerificationToken.id == token_id, VerificationToken.is_used == False)  # noqa: E712
            .values(is_used=True)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            raise UnprocessableError(ErrorMessages.TOKEN_ALREADY_USED)

        db.execute(
            update(User)
            .where(User.id == user_id)
            .values(**user_changes)
            .execution_options(synchronize_session=False)
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Verification token consumed", extra={"userId": user_id, "tokenId": token_id})


def send_verification_email(db: Session, mailer: Mailer, email: str) -> None:
    user = find_by_email(db, email)
    if not user:
        raise NotFoundError(ErrorMessages.USER_NOT_FOUND)

    if user.is_email_verified:
        raise BadRequestError(ErrorMessages.EMAIL_ALREADY_VERIFIED)

    token = create_verification_token(
        db,
        user_id=user.id,
        token_type=VerificationTokenType.EMAIL_VERIFICATION,
        expires_in_hours=EMAIL_VERIFICATION_EXPIRES_HOURS,
    )
    mailer.send_registration_confirmation(user.email, user.first_name, user.last_name, token)


def request_password_reset(db: Session, mailer: Mailer, email: str) -> None:
    user = find_by_email(db, email)
    if not user:
        raise NotFoundError(ErrorMessages.USER_NOT_FOUND)

    token = create_verification_token(
        db,
        user_id=user.id,
        token_type=VerificationTokenType.PASSWORD_RESET,
        expires_in_hours=PASSWORD_RESET_EXPIRES_HOURS,
    )
    mailer.send_password_reset(user.email, user.first_name, user.last_name, token)


def verify_email(db: Session, token: str) -> None:
    record = validate_token(db, token, VerificationTokenType.EMAIL_VERIFICATION)
    consume_token(db, record, {"is_email_verified": True})


def reset_password_with_token(db: Session, token: str, password: str) -> None:
    record = validate_token(db, token, VerificationTokenType.PASSWORD_RESET)
    consume_token(db, record, {"password": hash_password(password)})
