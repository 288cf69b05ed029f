import os
import tempfile

# settings are read at import time, so the environment has to be ready first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["FILE_UPLOAD_DIR"] = tempfile.mkdtemp(prefix="account-api-uploads-")
os.environ["PASSWORD_HASH_ROUNDS"] = "4"
os.environ["JWT_REFRESH_COOKIE_SECURE"] = "false"
os.environ["SMTP_HOST"] = ""
os.environ["FRONTEND_URL"] = "http://frontend.test"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from account_api.core.db import Base, get_db
from account_api.core.exceptions import ErrorMessages, UnauthorizedError
from account_api.main import app
from account_api.services.google_oauth import GoogleOAuthClient, get_google_client
from account_api.services.mail import Mailer, get_mailer
from account_api.services.oauth import OAuthUser

STRONG_PASSWORD = "Pass@word123"


class FakeMailer(Mailer):
    """Renders templates like the real mailer but keeps messages in memory."""

    def __init__(self):
        super().__init__()
        self.sent = []

    def send_mail(self, to, subject, template, context):
        html = self.render(template, context)
        self.sent.append({"to": to, "subject": subject, "template": template, "context": context, "html": html})

    def last_token(self) -> str:
        context = self.sent[-1]["context"]
        url = context.get("confirm_url") or context.get("reset_url")
        return url.split("token=", 1)[1]


class FakeGoogleClient(GoogleOAuthClient):
    def __init__(self):
        super().__init__()
        self.oauth_user = OAuthUser(
            provider="google",
            profile_id="google-123",
            email="oauth@example.com",
            first_name="Olivia",
            last_name="Auth",
            profile_image="https://lh3.googleusercontent.com/a/photo.jpg",
        )
        self.fail = False
        self.codes = []

    def fetch_user(self, code):
        self.codes.append(code)
        if self.fail:
            raise UnauthorizedError(ErrorMessages.OAUTH_FAILED)
        return self.oauth_user


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def mailer():
    return FakeMailer()


@pytest.fixture
def google():
    return FakeGoogleClient()


@pytest.fixture
def client(session_factory, mailer, google):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_mailer] = lambda: mailer
    app.dependency_overrides[get_google_client] = lambda: google
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def registered_user(client, mailer):
    """Register a user through the API and return its credentials."""
    payload = {
        "email": "jane@example.com",
        "password": STRONG_PASSWORD,
        "firstName": "Jane",
        "lastName": "Doe",
    }
    res = client.post("/auth/registration", json=payload)
    assert res.status_code == 201
    return payload


@pytest.fixture
def auth_headers(client, registered_user):
    res = client.post(
        "/auth/login",
        json={"email": registered_user["email"], "password": registered_user["password"]},
    )
    assert res.status_code == 200
    return {"Authorization": f"Bearer {res.json()['accessToken']}"}
