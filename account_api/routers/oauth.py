# account_api/routers/oauth.py
import secrets
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from account_api.core.config import settings
from account_api.core.db import get_db
from account_api.core.exceptions import ErrorMessages, UnauthorizedError
from account_api.services.google_oauth import GoogleOAuthClient, get_google_client
from account_api.services.oauth import handle_oauth_login
from account_api.utils.cookies import set_refresh_token_cookie

router = APIRouter(prefix="/oauth", tags=["oauth"])

STATE_COOKIE = "oauth_state"
STATE_MAX_AGE = 10 * 60


@router.get("/google")
def google_auth(google: GoogleOAuthClient = Depends(get_google_client)):
    state = secrets.token_urlsafe(16)
    res = RedirectResponse(url=google.authorization_url(state), status_code=302)
    res.set_cookie(
        key=STATE_COOKIE,
        value=state,
        max_age=STATE_MAX_AGE,
        httponly=True,
        secure=settings.JWT_REFRESH_COOKIE_SECURE,
        samesite="lax",
    )
    return res


@router.get("/google/callback", include_in_schema=False)
def google_auth_callback(
    request: Request,
    code: Optional[str] = None,
    state: Optional[str] = None,
    db: Session = Depends(get_db),
    google: GoogleOAuthClient = Depends(get_google_client),
):
    expected = request.cookies.get(STATE_COOKIE)
    if not code or not state or not expected or not secrets.compare_digest(state, expected):
        raise UnauthorizedError(ErrorMessages.OAUTH_FAILED)

    oauth_user = google.fetch_user(code)
    tokens, _ = handle_oauth_login(db, oauth_user)

    res = RedirectResponse(url=f"{settings.FRONTEND_URL}?token={tokens.access_token}", status_code=302)
    if tokens.refresh_token:
        set_refresh_token_cookie(res, tokens.refresh_token)
    res.delete_cookie(STATE_COOKIE)
    return res
