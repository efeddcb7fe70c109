import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from core.config import settings
from core.error_handlers import (
    app_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from core.exceptions import AppException
from core.lifespan import lifespan
from core.middleware import RequestLoggingMiddleware
from router.admin_router import router as admin_router
from router.auth_router import router as auth_router
from router.catalog_router import router as catalog_router
from router.medusa_router import router as medusa_router
from router.transform_router import router as transform_router
from utility.logger import setup_logger
import model.user  # noqa: F401  (테이블 등록)
import model.session  # noqa: F401  (테이블 등록)
import model.transformation  # noqa: F401  (테이블 등록)

setup_logger("DEBUG" if settings.DEBUG else "INFO")

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Art & See: 사진을 유화·수채화 등 손그림 스타일로 변환하고 Medusa로 판매",
    lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware)
app.add_exception_handler(AppException, app_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

app.include_router(auth_router)
app.include_router(transform_router)
app.include_router(admin_router)
app.include_router(medusa_router)
app.include_router(catalog_router)


@app.get("/health")
async def health():
    return {
        "status": "ok",
        "version": settings.APP_VERSION,
        "gemini": settings.gemini_configured,
        "medusa": settings.medusa_configured,
    }


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        access_log=False,
    )
