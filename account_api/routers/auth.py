from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from account_api.core.auth import CurrentUser, get_current_user
from account_api.core.config import settings
from account_api.core.db import get_db
from account_api.core.exceptions import ErrorMessages, UnauthorizedError
from account_api.schemas.auth import (
    LoginIn,
    RegistrationIn,
    RequestVerificationIn,
    ResetPasswordIn,
    TokenOut,
    VerifyEmailIn,
)
from account_api.services import auth as auth_service
from account_api.services import verification as verification_service
from account_api.services.mail import Mailer, get_mailer
from account_api.utils.cookies import clear_refresh_token_cookie, set_refresh_token_cookie

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenOut, status_code=status.HTTP_200_OK)
def login(payload: LoginIn, response: Response, db: Session = Depends(get_db)):
    tokens = auth_service.login(db, payload.email, payload.password, remember_me=payload.remember_me)

    # rememberMe 일 때만 refresh 토큰 쿠키 발급
    if tokens.refresh_token:
        set_refresh_token_cookie(response, tokens.refresh_token)

    return TokenOut(access_token=tokens.access_token)


@router.post("/logout", status_code=status.HTTP_200_OK)
def logout(response: Response, current: CurrentUser = Depends(get_current_user)):
    clear_refresh_token_cookie(response)
    return None


@router.post("/refresh", response_model=TokenOut, status_code=status.HTTP_200_OK)
def refresh(request: Request, db: Session = Depends(get_db)):
    token = request.cookies.get(settings.JWT_REFRESH_COOKIE_NAME)
    if not token:
        raise UnauthorizedError(ErrorMessages.REFRESH_TOKEN_REQUIRED)

    tokens = auth_service.refresh_access_token(db, token)
    return TokenOut(access_token=tokens.access_token)


@router.post("/registration", status_code=status.HTTP_201_CREATED)
def registration(payload: RegistrationIn, db: Session = Depends(get_db), mailer: Mailer = Depends(get_mailer)):
    auth_service.register(
        db,
        mailer,
        email=payload.email,
        password=payload.password,
        first_name=payload.first_name,
        last_name=payload.last_name,
    )
    return None


@router.post("/email/resend-confirmation", status_code=status.HTTP_200_OK)
def resend_confirmation(
    payload: RequestVerificationIn,
    db: Session = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
):
    verification_service.send_verification_email(db, mailer, payload.email)
    return None


@router.post("/password/request-reset", status_code=status.HTTP_200_OK)
def request_password_reset(
    payload: RequestVerificationIn,
    db: Session = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
):
    verification_service.request_password_reset(db, mailer, payload.email)
    return None


@router.post("/password/reset", status_code=status.HTTP_200_OK)
def reset_password(payload: ResetPasswordIn, db: Session = Depends(get_db)):
    verification_service.reset_password_with_token(db, payload.token, payload.password)
    return None


@router.post("/email/confirm", status_code=status.HTTP_200_OK)
def confirm_email(payload: VerifyEmailIn, db: Session = Depends(get_db)):
    verification_service.verify_email(db, payload.token)
    return None
