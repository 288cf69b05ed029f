# account_api/core/config.py
from typing import List, Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./app.db"
    API_PREFIX: str = ""
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]
    LOG_LEVEL: str = "INFO"

    JWT_ACCESS_SECRET: str = "change-this-secret"
    JWT_REFRESH_SECRET: str = "change-this-refresh-secret"
    JWT_ALG: str = "HS256"

    ACCESS_TOKEN_EXPIRE_MINUTES: int = 15
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    # refresh cookie
    JWT_REFRESH_COOKIE_NAME: str = "refresh_token"
    JWT_REFRESH_COOKIE_HTTP_ONLY: bool = True
    JWT_REFRESH_COOKIE_SECURE: bool = True
    JWT_REFRESH_COOKIE_SAME_SITE: Literal["lax", "strict", "none"] = "lax"
    JWT_REFRESH_COOKIE_PATH: str = "/"
    JWT_REFRESH_COOKIE_MAX_AGE_DAYS: int = 7

    PASSWORD_HASH_ROUNDS: int = 10

    FRONTEND_URL: str = "http://localhost:3000"

    FILE_UPLOAD_DIR: str = "uploads"
    # 디스크 경로와 무관한 공개 URL 경로
    FILE_UPLOAD_URL_PATH: str = "/uploads"
    MAX_LOGO_SIZE: int = 5 * 1024 * 1024

    GOOGLE_CLIENT_ID: str = ""
    GOOGLE_CLIENT_SECRET: str = ""
    GOOGLE_CALLBACK_URL: str = "http://localhost:8000/oauth/google/callback"

    # 메일 발송 (SMTP_HOST 비어 있으면 발송하지 않고 로그만 남김)
    SMTP_HOST: str = ""
    SMTP_PORT: int = 587
    SMTP_USER: str = ""
    SMTP_PASSWORD: str = ""
    SMTP_USE_TLS: bool = True
    SMTP_TIMEOUT: float = 10.0
    MAIL_FROM: str = "no-reply@example.com"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


settings = Settings()
