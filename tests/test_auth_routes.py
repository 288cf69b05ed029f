"""Tests for /auth routes."""

from jose import jwt

from account_api.core.config import settings
from account_api.core.exceptions import ErrorMessages
from account_api.core.security import verify_password
from account_api.models.user import User
from account_api.models.verification_token import VerificationToken, VerificationTokenType
from account_api.services import auth as auth_service

from conftest import STRONG_PASSWORD


def _sub(token: str) -> str:
    return jwt.get_unverified_claims(token)["sub"]


class TestRegistration:
    def test_registration_creates_unverified_user_and_sends_confirmation(self, client, mailer, db):
        res = client.post(
            "/auth/registration",
            json={"email": "new@example.com", "password": STRONG_PASSWORD, "firstName": "New", "lastName": "User"},
        )

        assert res.status_code == 201
        assert res.json() is None

        user = db.query(User).filter(User.email == "new@example.com").one()
        assert user.is_email_verified is False
        assert verify_password(STRONG_PASSWORD, user.password)

        assert len(mailer.sent) == 1
        assert mailer.sent[0]["template"] == "registration_confirmation"
        assert mailer.last_token() in mailer.sent[0]["html"]

    def test_duplicate_email_is_rejected_without_hashing(self, client, registered_user, monkeypatch):
        calls = []

        def spy(password):
            calls.append(password)
            return "never-used"

        monkeypatch.setattr(auth_service, "hash_password", spy)

        res = client.post("/auth/registration", json=registered_user)

        assert res.status_code == 401
        assert res.json()["detail"] == ErrorMessages.USER_ALREADY_EXISTS
        assert calls == []

    def test_weak_password_is_a_validation_error(self, client):
        res = client.post(
            "/auth/registration",
            json={"email": "weak@example.com", "password": "password", "firstName": "W", "lastName": "K"},
        )
        assert res.status_code == 422

    def test_invalid_email_is_a_validation_error(self, client):
        res = client.post(
            "/auth/registration",
            json={"email": "not-an-email", "password": STRONG_PASSWORD, "firstName": "W", "lastName": "K"},
        )
        assert res.status_code == 422


class TestLogin:
    def test_login_returns_access_token_without_cookie_by_default(self, client, registered_user):
        res = client.post(
            "/auth/login",
            json={"email": registered_user["email"], "password": registered_user["password"]},
        )

        assert res.status_code == 200
        body = res.json()
        assert set(body) == {"accessToken"}
        assert settings.JWT_REFRESH_COOKIE_NAME not in res.cookies

    def test_login_with_remember_me_sets_refresh_cookie(self, client, registered_user):
        res = client.post(
            "/auth/login",
            json={**{k: registered_user[k] for k in ("email", "password")}, "rememberMe": True},
        )

        assert res.status_code == 200
        set_cookie = res.headers["set-cookie"]
        assert set_cookie.startswith(f"{settings.JWT_REFRESH_COOKIE_NAME}=")
        assert "HttpOnly" in set_cookie
        assert f"Max-Age={settings.JWT_REFRESH_COOKIE_MAX_AGE_DAYS * 86400}" in set_cookie

    def test_wrong_password_and_unknown_email_look_the_same(self, client, registered_user):
        wrong = client.post("/auth/login", json={"email": registered_user["email"], "password": "Wrong@pass1"})
        unknown = client.post("/auth/login", json={"email": "ghost@example.com", "password": "Wrong@pass1"})

        assert wrong.status_code == unknown.status_code == 401
        assert wrong.json() == unknown.json() == {"detail": ErrorMessages.INVALID_CREDENTIALS}


class TestRefreshAndLogout:
    def test_login_then_refresh_yields_token_for_same_user(self, client, registered_user):
        login = client.post(
            "/auth/login",
            json={"email": registered_user["email"], "password": registered_user["password"], "rememberMe": True},
        )
        first_access = login.json()["accessToken"]

        res = client.post("/auth/refresh")

        assert res.status_code == 200
        new_access = res.json()["accessToken"]
        assert _sub(new_access) == _sub(first_access)
        assert jwt.get_unverified_claims(new_access)["email"] == registered_user["email"]

    def test_refresh_without_cookie(self, client):
        res = client.post("/auth/refresh")

        assert res.status_code == 401
        assert res.json()["detail"] == ErrorMessages.REFRESH_TOKEN_REQUIRED

    def test_refresh_with_bad_token(self, client):
        client.cookies.set(settings.JWT_REFRESH_COOKIE_NAME, "garbage")

        res = client.post("/auth/refresh")

        assert res.status_code == 401
        assert res.json()["detail"] == ErrorMessages.INVALID_REFRESH_TOKEN

    def test_refresh_for_missing_user_is_uniform_401(self, client):
        from account_api.core.security import create_refresh_token

        client.cookies.set(settings.JWT_REFRESH_COOKIE_NAME, create_refresh_token(9999))

        res = client.post("/auth/refresh")

        assert res.status_code == 401
        assert res.json()["detail"] == ErrorMessages.INVALID_REFRESH_TOKEN

    def test_logout_requires_access_token(self, client):
        res = client.post("/auth/logout")

        assert res.status_code == 401
        assert res.json()["detail"] == ErrorMessages.INVALID_ACCESS_TOKEN
        assert res.headers["www-authenticate"] == "Bearer"

    def test_logout_clears_refresh_cookie(self, client, auth_headers):
        res = client.post("/auth/logout", headers=auth_headers)

        assert res.status_code == 200
        assert res.json() is None
        set_cookie = res.headers["set-cookie"]
        assert set_cookie.startswith(f"{settings.JWT_REFRESH_COOKIE_NAME}=")
        assert "Max-Age=0" in set_cookie


class TestEmailConfirmation:
    def test_confirm_email_with_token(self, client, registered_user, mailer, db):
        token = mailer.last_token()

        res = client.post("/auth/email/confirm", json={"token": token})

        assert res.status_code == 200
        user = db.query(User).filter(User.email == registered_user["email"]).one()
        assert user.is_email_verified is True

    def test_confirm_email_twice(self, client, registered_user, mailer):
        token = mailer.last_token()
        client.post("/auth/email/confirm", json={"token": token})

        res = client.post("/auth/email/confirm", json={"token": token})

        assert res.status_code == 422
        assert res.json()["detail"] == ErrorMessages.TOKEN_ALREADY_USED

    def test_confirm_email_unknown_token(self, client):
        res = client.post("/auth/email/confirm", json={"token": "deadbeef"})

        assert res.status_code == 404
        assert res.json()["detail"] == ErrorMessages.VERIFICATION_TOKEN_NOT_FOUND

    def test_confirm_email_with_reset_token(self, client, registered_user, mailer):
        client.post("/auth/password/request-reset", json={"email": registered_user["email"]})

        res = client.post("/auth/email/confirm", json={"token": mailer.last_token()})

        assert res.status_code == 400
        assert res.json()["detail"] == ErrorMessages.INVALID_TOKEN_TYPE

    def test_resend_confirmation(self, client, registered_user, mailer):
        res = client.post("/auth/email/resend-confirmation", json={"email": registered_user["email"]})

        assert res.status_code == 200
        assert len(mailer.sent) == 2
        assert mailer.sent[0]["context"]["confirm_url"] != mailer.sent[1]["context"]["confirm_url"]

    def test_resend_confirmation_for_verified_user(self, client, registered_user, mailer):
        client.post("/auth/email/confirm", json={"token": mailer.last_token()})

        res = client.post("/auth/email/resend-confirmation", json={"email": registered_user["email"]})

        assert res.status_code == 400
        assert res.json()["detail"] == ErrorMessages.EMAIL_ALREADY_VERIFIED

    def test_resend_confirmation_unknown_user(self, client):
        res = client.post("/auth/email/resend-confirmation", json={"email": "ghost@example.com"})

        assert res.status_code == 404
        assert res.json()["detail"] == ErrorMessages.USER_NOT_FOUND


class TestPasswordReset:
    def test_full_password_reset_flow(self, client, registered_user, mailer, db):
        res = client.post("/auth/password/request-reset", json={"email": registered_user["email"]})
        assert res.status_code == 200
        token = mailer.last_token()

        record = db.query(VerificationToken).filter(VerificationToken.token == token).one()
        assert record.type == VerificationTokenType.PASSWORD_RESET
        assert record.is_used is False

        res = client.post("/auth/password/reset", json={"token": token, "password": "Brand@new123"})
        assert res.status_code == 200

        db.expire_all()
        assert db.get(VerificationToken, record.id).is_used is True

        old_login = client.post("/auth/login", json={"email": registered_user["email"], "password": STRONG_PASSWORD})
        new_login = client.post("/auth/login", json={"email": registered_user["email"], "password": "Brand@new123"})
        assert old_login.status_code == 401
        assert new_login.status_code == 200

        reuse = client.post("/auth/password/reset", json={"token": token, "password": "Other@pass123"})
        assert reuse.status_code == 422
        assert reuse.json()["detail"] == ErrorMessages.TOKEN_ALREADY_USED

    def test_request_reset_unknown_email(self, client, mailer):
        res = client.post("/auth/password/request-reset", json={"email": "ghost@example.com"})

        assert res.status_code == 404
        assert mailer.sent == []

    def test_reset_with_weak_password(self, client, registered_user, mailer):
        client.post("/auth/password/request-reset", json={"email": registered_user["email"]})

        res = client.post("/auth/password/reset", json={"token": mailer.last_token(), "password": "short"})

        assert res.status_code == 422
