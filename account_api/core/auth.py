from dataclasses import dataclass
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from account_api.core.db import get_db
from account_api.core.exceptions import ErrorMessages, UnauthorizedError
from account_api.core.security import decode_access_token
from account_api.models.user import User

bearer = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CurrentUser:
    user_id: int
    email: str


def get_current_user(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    db: Session = Depends(get_db),
) -> CurrentUser:
    """
    Bearer 액세스 토큰을 검증하고 현재 사용자를 반환.
    헤더 누락, 서명/만료 오류, 삭제된 사용자 모두 401 INVALID_ACCESS_TOKEN.
    """
    if creds is None or (creds.scheme or "").lower() != "bearer":
        raise UnauthorizedError(ErrorMessages.INVALID_ACCESS_TOKEN, bearer=True)

    user_id = decode_access_token(creds.credentials)

    user = db.get(User, user_id)
    if not user:
        raise UnauthorizedError(ErrorMessages.INVALID_ACCESS_TOKEN, bearer=True)

    return CurrentUser(user_id=user.id, email=user.email)
