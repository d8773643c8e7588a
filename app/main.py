"""
Accounts Backend - FastAPI Application
Main entry point for the accounts backend service.
Handles signup and login, user profiles, avatars, roles and user preferences.
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse

from app.api.dto.common_dto import OperationStatus
from app.core.config import settings
from app.core.exceptions import AccountsException, get_exception_status_code
from app.core.logging import get_logger, log_error, log_request, setup_logging
from app.domain.repositories.preferences_repository import preferences_repository
from app.domain.repositories.user_repository import user_repository

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    # Startup
    setup_logging()
    if settings.MONGO_CREATE_INDEXES:
        await user_repository.ensure_indexes()
        await preferences_repository.ensure_indexes()
        logger.info("MongoDB indexes ensured")
    yield
    # Shutdown
    await user_repository.disconnect()
    await preferences_repository.disconnect()


async def accounts_exception_handler(request: Request, exc: AccountsException) -> JSONResponse:
    """Render domain errors as an error envelope."""
    return JSONResponse(
        status_code=get_exception_status_code(exc),
        content={
            "status": OperationStatus.ERROR.value,
            "message": exc.message,
            "data": {"error_code": exc.error_code, "details": exc.details},
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected errors and hide their details from the caller."""
    log_error(exc, {"method": request.method, "url": str(request.url)})
    return JSONResponse(
        status_code=500,
        content={
            "status": OperationStatus.ERROR.value,
            "message": "Internal server error",
            "data": {},
        },
    )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.APP_NAME,
        description="User accounts, authentication and preferences API",
        version="1.0.0",
        docs_url="/docs" if settings.ENVIRONMENT != "production" else None,
        redoc_url="/redoc" if settings.ENVIRONMENT != "production" else None,
        openapi_url="/openapi.json" if settings.ENVIRONMENT != "production" else None,
        lifespan=lifespan,
    )

    logger.info(f"CORS configured with origins: {settings.ALLOWED_ORIGINS}")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if settings.ENVIRONMENT == "production":
        logger.info(
            f"TrustedHost middleware enabled with hosts: {settings.ALLOWED_HOSTS}"
        )
        app.add_middleware(
            TrustedHostMiddleware,
            allowed_hosts=settings.ALLOWED_HOSTS,
        )

    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        log_request(
            request.method,
            str(request.url),
            response.status_code,
            round(time.perf_counter() - start, 4),
        )
        return response

    app.add_exception_handler(AccountsException, accounts_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    from app.api.routers import auth_router, preferences_router, users_router

    app.include_router(auth_router.router, prefix="/api/v1/auth", tags=["Auth"])
    app.include_router(users_router.router, prefix="/api/v1/users", tags=["Users"])
    app.include_router(
        preferences_router.router, prefix="/api/v1/preferences", tags=["Preferences"]
    )

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "environment": settings.ENVIRONMENT,
            "features_enabled": {
                "avatar_uploads": bool(settings.CLOUDINARY_CLOUD_NAME),
            },
        }

    return app


# Create the FastAPI app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.ENVIRONMENT == "development",
        log_level="info",
    )
