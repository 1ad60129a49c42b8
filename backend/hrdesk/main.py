"""
HR Desk Core - FastAPI application

Serves the role management API and the Ask AI assistant. Permission
checks run as route dependencies; see ``api/deps.py``.
"""

from contextlib import asynccontextmanager
from typing import Any, Dict

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config.settings import settings
from .api.routes import api_router
from .api.middleware import CorrelationIdMiddleware, register_error_handlers
from .engine.permission_resolver import LEGACY_UNRESTRICTED_ROLES
from .repositories.async_mongo import close_async_connection
from .repositories.mongo_client import (
    close_connection,
    create_indexes,
    health_check,
    roles_without_document,
)
from .utils.logger import setup_logging, get_logger

APP_NAME = "HR Desk Core"
APP_VERSION = "1.0.0"

setup_logging()
logger = get_logger(__name__)


def _prepare_database() -> None:
    """Indexes, then a report of legacy roles still running unrestricted"""
    create_indexes()

    unrestricted = roles_without_document(LEGACY_UNRESTRICTED_ROLES)
    if unrestricted:
        logger.warning(
            f"Legacy roles without a role document have full access: {', '.join(unrestricted)}"
        )


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {APP_NAME} ({settings.environment})")
    try:
        _prepare_database()
    except Exception as e:
        logger.error(f"Database preparation failed: {e}")

    yield

    await close_async_connection()
    close_connection()
    logger.info(f"{APP_NAME} stopped")


def create_app() -> FastAPI:
    """Build the application with middleware, error handlers and routes"""
    docs_enabled = settings.debug
    application = FastAPI(
        title=APP_NAME,
        description="Role permission resolution and the Ask AI assistant for the HR platform",
        version=APP_VERSION,
        lifespan=lifespan,
        docs_url="/api/docs" if docs_enabled else None,
        redoc_url="/api/redoc" if docs_enabled else None,
        openapi_url="/api/openapi.json" if docs_enabled else None,
    )

    # allow_credentials must be False when every origin is allowed
    allow_all = settings.cors_origins.strip() == "*"
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_origins_list,
        allow_credentials=not allow_all,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Correlation-Id"],
    )
    application.add_middleware(CorrelationIdMiddleware)

    register_error_handlers(application)
    application.include_router(api_router, prefix="/api/v1")

    @application.get("/health", tags=["Health"])
    def health() -> Dict[str, Any]:
        """Database connectivity plus the legacy roles still lacking a role document"""
        mongo = health_check()
        report: Dict[str, Any] = {
            "status": "healthy" if mongo.get("status") == "healthy" else "degraded",
            "version": APP_VERSION,
            "environment": settings.environment,
            "mongo": mongo,
        }
        if mongo.get("status") == "healthy":
            report["legacy_unrestricted_roles"] = roles_without_document(LEGACY_UNRESTRICTED_ROLES)
        return report

    @application.get("/", tags=["Health"])
    def root() -> Dict[str, Any]:
        return {
            "name": APP_NAME,
            "version": APP_VERSION,
            "docs": "/api/docs" if docs_enabled else None,
        }

    return application


app = create_app()
