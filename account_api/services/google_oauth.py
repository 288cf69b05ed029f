# account_api/services/google_oauth.py
import logging
from typing import Optional
from urllib.parse import urlencode

import httpx

from account_api.core.config import Settings, settings as default_settings
from account_api.core.exceptions import ErrorMessages, UnauthorizedError
from account_api.services.oauth import OAuthUser

logger = logging.getLogger(__name__)

AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
TOKEN_URL = "https://oauth2.googleapis.com/token"
USERINFO_URL = "https://www.googleapis.com/oauth2/v3/userinfo"
PROVIDER = "google"


class GoogleOAuthClient:
    def __init__(
        self,
        settings: Settings = default_settings,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.client_id = settings.GOOGLE_CLIENT_ID
        self.client_secret = settings.GOOGLE_CLIENT_SECRET
        self.redirect_uri = settings.GOOGLE_CALLBACK_URL
        self.timeout = timeout
        self.transport = transport

    def authorization_url(self, state: str) -> str:
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "response_type": "code",
            "scope": "openid email profile",
            "state": state,
        }
        return f"{AUTHORIZE_URL}?{urlencode(params)}"

    def fetch_user(self, code: str) -> OAuthUser:
        """Exchange an authorization code and map Google's userinfo to an OAuthUser."""
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                token_res = client.post(
                    TOKEN_URL,
                    data={
                        "client_id": self.client_id,
                        "client_secret": self.client_secret,
                        "code": code,
                        "grant_type": "authorization_code",
                        "redirect_uri": self.redirect_uri,
                    },
                    headers={"Accept": "application/json"},
                )
                token_res.raise_for_status()
                token_data = token_res.json()
                access_token = token_data.get("access_token") if isinstance(token_data, dict) else None
                if not access_token:
                    raise UnauthorizedError(ErrorMessages.OAUTH_FAILED)

                info_res = client.get(USERINFO_URL, headers={"Authorization": f"Bearer {access_token}"})
                info_res.raise_for_status()
                info = info_res.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Google OAuth exchange failed: %s", e)
            raise UnauthorizedError(ErrorMessages.OAUTH_FAILED)

        return profile_to_oauth_user(info)


def profile_to_oauth_user(info: dict) -> OAuthUser:
    if not isinstance(info, dict) or not info.get("sub") or not info.get("email"):
        raise UnauthorizedError(ErrorMessages.OAUTH_FAILED)

    return OAuthUser(
        provider=PROVIDER,
        profile_id=str(info["sub"]),
        email=info["email"],
        first_name=info.get("given_name") or "",
        last_name=info.get("family_name") or "",
        profile_image=info.get("picture"),
    )


def get_google_client() -> GoogleOAuthClient:
    return GoogleOAuthClient()
