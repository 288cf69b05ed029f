# account_api/services/users.py
import logging
from typing import Optional

from sqlalchemy.orm import Session

from account_api.core.exceptions import ErrorMessages, NotFoundError, UnauthorizedError
from account_api.core.security import hash_password, verify_password
from account_api.models.user import User
from account_api.utils.files import get_user_logo_path, remove_file

logger = logging.getLogger(__name__)


def find_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def find_by_id(db: Session, user_id: int) -> Optional[User]:
    return db.get(User, user_id)


def create_user(
    db: Session,
    email: str,
    password_hash: str,
    first_name: str,
    last_name: str,
    logo: Optional[str] = None,
    is_email_verified: bool = False,
) -> User:
    u = User(
        email=email,
        password=password_hash,
        first_name=first_name,
        last_name=last_name,
        logo=logo,
        is_email_verified=is_email_verified,
    )
    db.add(u)
    db.commit()
    db.refresh(u)
    return u


def get_user_profile(db: Session, user_id: int) -> User:
    user = find_by_id(db, user_id)
    if not user:
        raise NotFoundError(ErrorMessages.USER_NOT_FOUND)
    return user


def update_user_info(
    db: Session,
    user_id: int,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
) -> User:
    user = get_user_profile(db, user_id)

    if first_name is not None:
        user.first_name = first_name
    if last_name is not None:
        user.last_name = last_name

    db.commit()
    db.refresh(user)
    return user


def change_password(db: Session, user_id: int, current_password: str, new_password: str) -> User:
    user = find_by_id(db, user_id)
    if not user:
        raise UnauthorizedError(ErrorMessages.USER_NOT_FOUND)

    if not verify_password(current_password, user.password):
        raise UnauthorizedError(ErrorMessages.INCORRECT_PASSWORD)

    user.password = hash_password(new_password)
    db.commit()
    db.refresh(user)
    logger.info("Password changed", extra={"userId": user.id})
    return user


def _discard_logo_file(filename: str) -> None:
    try:
        remove_file(get_user_logo_path(filename))
    except OSError as e:
        logger.warning("Failed to remove old logo file %s: %s", filename, e)


def update_user_logo(
    db: Session,
    user_id: int,
    logo_url: Optional[str],
    logo_file: Optional[str] = None,
) -> User:
    """
    Replace (or clear, when logo_url is None) the user's logo.
    The previous uploaded file is removed on a best-effort basis.
    """
    user = get_user_profile(db, user_id)

    old_file = user.logo_file
    user.logo = logo_url
    user.logo_file = logo_file
    db.commit()
    db.refresh(user)

    logger.info("Logo updated", extra={"userId": user.id, "removed": logo_url is None})

    if old_file and old_file != logo_file:
        _discard_logo_file(old_file)

    return user
