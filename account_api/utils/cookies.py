# account_api/utils/cookies.py
from fastapi import Response

from account_api.core.config import settings


def _base_cookie_options() -> dict:
    return {
        "httponly": settings.JWT_REFRESH_COOKIE_HTTP_ONLY,
        "secure": settings.JWT_REFRESH_COOKIE_SECURE,
        "samesite": settings.JWT_REFRESH_COOKIE_SAME_SITE,
        "path": settings.JWT_REFRESH_COOKIE_PATH,
    }


def refresh_cookie_max_age() -> int:
    """Cookie max-age in seconds."""
    return settings.JWT_REFRESH_COOKIE_MAX_AGE_DAYS * 24 * 60 * 60


def set_refresh_token_cookie(response: Response, refresh_token: str) -> None:
    response.set_cookie(
        key=settings.JWT_REFRESH_COOKIE_NAME,
        value=refresh_token,
        max_age=refresh_cookie_max_age(),
        **_base_cookie_options(),
    )


def clear_refresh_token_cookie(response: Response) -> None:
    response.delete_cookie(key=settings.JWT_REFRESH_COOKIE_NAME, **_base_cookie_options())
