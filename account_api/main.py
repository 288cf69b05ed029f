# account_api/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from account_api.core.config import settings
from account_api.core.db import Base, engine
from account_api.core.logging_config import setup_logging
from account_api.utils.files import create_uploads_folder, get_upload_dir, get_upload_url_path

# create_all 이 테이블을 알 수 있도록 모델을 먼저 import
from account_api.models.user import User  # noqa: F401
from account_api.models.verification_token import VerificationToken  # noqa: F401
from account_api.models.oauth_profile import OAuthProfile  # noqa: F401

from account_api.routers.health import router as health_router
from account_api.routers.auth import router as auth_router
from account_api.routers.oauth import router as oauth_router
from account_api.routers.users import router as users_router

logger = logging.getLogger(__name__)

routers = [
    health_router,
    auth_router,
    oauth_router,
    users_router,
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    logger.info("Database ready (%s)", engine.url.get_backend_name())
    yield
    engine.dispose()


def create_app() -> FastAPI:
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(title="Account API", version="1.0.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for r in routers:
        app.include_router(r, prefix=settings.API_PREFIX)

    upload_dir = get_upload_dir()
    create_uploads_folder(upload_dir)
    app.mount(get_upload_url_path(), StaticFiles(directory=upload_dir), name="uploads")

    for r in app.routes:
        logger.debug("route %s %s", getattr(r, "methods", None), getattr(r, "path", None))

    return app


app = create_app()
