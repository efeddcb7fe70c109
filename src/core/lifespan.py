from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger
from sqlalchemy.engine import make_url

from core.config import settings
from model.database import create_db_and_tables


def _masked_database_url() -> str:
    return make_url(settings.DATABASE_URL).render_as_string(hide_password=True)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # === 시작 ===
    logger.info(f"{settings.APP_NAME} v{settings.APP_VERSION} ({settings.ENVIRONMENT})")

    create_db_and_tables()
    logger.info(f"Database ready ({_masked_database_url()})")

    integrations = {
        "gemini": settings.gemini_configured,
        "google_oauth": settings.google_oauth_configured,
        "imgbb": settings.imgbb_configured,
        "medusa": settings.medusa_configured,
    }
    for name, configured in integrations.items():
        if configured:
            logger.info(f"{name}: configured")
        else:
            logger.warning(f"{name}: not configured")
    if not settings.ADMIN_PASSWORD_HASH:
        logger.warning("ADMIN_PASSWORD_HASH is empty, admin login is disabled")

    app.state.settings = settings

    yield

    # === 종료 ===
    logger.info("Shutting down")
