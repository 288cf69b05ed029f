# account_api/services/oauth.py
import logging
import secrets
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from account_api.core.security import hash_password
from account_api.models.oauth_profile import OAuthProfile
from account_api.models.user import User
from account_api.services.auth import TokenPair, generate_auth_tokens
from account_api.services.users import create_user, find_by_email

logger = logging.getLogger(__name__)


@dataclass
class OAuthUser:
    provider: str
    profile_id: str
    email: str
    first_name: str
    last_name: str
    profile_image: Optional[str] = None


def find_oauth_profile(db: Session, provider: str, profile_id: str) -> Optional[OAuthProfile]:
    return (
        db.query(OAuthProfile)
        .filter(OAuthProfile.provider == provider, OAuthProfile.profile_id == profile_id)
        .first()
    )


def _create_new_user(db: Session, oauth_user: OAuthUser) -> User:
    # 소셜 로그인 전용 계정: 임의 비밀번호, 이메일은 제공자가 확인한 것으로 간주
    return create_user(
        db,
        email=oauth_user.email,
        password_hash=hash_password(secrets.token_urlsafe(16)),
        first_name=oauth_user.first_name,
        last_name=oauth_user.last_name,
        logo=oauth_user.profile_image,
        is_email_verified=True,
    )


def _create_oauth_profile(db: Session, oauth_user: OAuthUser, user_id: int) -> OAuthProfile:
    profile = OAuthProfile(
        provider=oauth_user.provider,
        profile_id=oauth_user.profile_id,
        email=oauth_user.email,
        first_name=oauth_user.first_name,
        last_name=oauth_user.last_name,
        profile_image=oauth_user.profile_image,
        user_id=user_id,
    )
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


def _link_user(db: Session, oauth_user: OAuthUser) -> User:
    user = find_by_email(db, oauth_user.email)
    if not user:
        user = _create_new_user(db, oauth_user)
        logger.info("User created from OAuth profile", extra={"userId": user.id, "provider": oauth_user.provider})

    _create_oauth_profile(db, oauth_user, user.id)
    return user


def handle_oauth_login(db: Session, oauth_user: OAuthUser) -> tuple[TokenPair, User]:
    profile = find_oauth_profile(db, oauth_user.provider, oauth_user.profile_id)
    if profile:
        return generate_auth_tokens(profile.user, include_refresh_token=True), profile.user

    try:
        user = _link_user(db, oauth_user)
    except IntegrityError:
        # 같은 프로필의 다른 콜백이 먼저 저장한 경우 그 결과를 사용
        db.rollback()
        profile = find_oauth_profile(db, oauth_user.provider, oauth_user.profile_id)
        if not profile:
            raise
        logger.info("OAuth profile linked concurrently", extra={"userId": profile.user_id, "provider": oauth_user.provider})
        user = profile.user

    return generate_auth_tokens(user, include_refresh_token=True), user
