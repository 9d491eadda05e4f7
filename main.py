"""
Storefront CMS API - Main Application Entry Point
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.api.core.logger import setup_logging
from app.api.v1.routes import auth, chat, products, registration
from app.api.db.database import init_db
from app.api.utils.exceptions import StorefrontException
from app.api.utils.handlers import storefront_exception_handler, validation_exception_handler
from app.api.utils.redis_client import close_redis_client
from app.web import cms
from app.web.auth import CmsAuthRedirect, cms_auth_redirect_handler
from config import settings

setup_logging()
logger = logging.getLogger("app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan - startup and shutdown events.

    Args:
        app (FastAPI): FastAPI application instance

    Yields:
        None
    """
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    try:
        await init_db()
        logger.info("Database initialization completed")
    except Exception as e:
        logger.error(f"Database initialization failed: {str(e)}", exc_info=True)
        raise

    yield

    await close_redis_client()
    logger.info(f"Shutting down {settings.APP_NAME}")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Storefront CMS API: product catalog, accounts, and the admin CMS",
    debug=settings.DEBUG,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL, settings.DEV_URL, settings.APP_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(StorefrontException, storefront_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(CmsAuthRedirect, cms_auth_redirect_handler)


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Health check endpoint for service monitoring.

    Returns:
        dict: Service status and version information
    """
    return {
        "status": "healthy",
        "app_name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
    }


@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint providing API information.

    Returns:
        dict: API name and documentation links
    """
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "redoc": "/redoc",
        "cms": f"/{settings.DEFAULT_LOCALE}/cms/products",
    }

app.include_router(auth.router, prefix=settings.API_V1_PREFIX)
app.include_router(registration.router, prefix=settings.API_V1_PREFIX)
app.include_router(products.router, prefix=settings.API_V1_PREFIX)
app.include_router(chat.router, prefix=settings.API_V1_PREFIX)
app.include_router(cms.router)

if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting server on 0.0.0.0:{settings.APP_PORT}")
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.APP_PORT,
        reload=settings.DEBUG,
        log_config=None,
    )
