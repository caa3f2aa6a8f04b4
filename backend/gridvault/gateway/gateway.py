"""
API Gateway

Main gateway class that orchestrates middleware, exception handling,
rate limiting and routing. Acts as the single entry point for all requests.
"""
from typing import List, Optional

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from ..api.exceptions import GridVaultError, handle_business_exception
from ..core.config import Settings
from ..core.logging_config import get_logger
from .middleware import (
    ErrorHandlingMiddleware,
    RequestIDMiddleware,
    RequestLoggingMiddleware,
)

logger = get_logger(__name__)


class APIGateway:
    """
    API Gateway that manages middleware, error handling and routing.

    Responsibilities:
    - Initialize FastAPI application
    - Register middleware (CORS, rate limiting, logging, error handling)
    - Convert business exceptions to HTTP responses
    - Register routers
    - Provide health check endpoints
    """

    def __init__(
        self,
        settings: Settings,
        title: str = "GridVault",
        description: str = "File upload, listing and full-text search on MongoDB GridFS",
        version: str = "1.0.0",
    ):
        self.settings = settings
        self.title = title
        self.description = description
        self.version = version
        enable_docs = not settings.is_production

        self.app = FastAPI(
            title=self.title,
            description=self.description,
            version=self.version,
            docs_url="/docs" if enable_docs else None,
            redoc_url="/redoc" if enable_docs else None,
        )

        self.limiter = Limiter(
            key_func=get_remote_address,
            default_limits=[f"{settings.rate_limit_per_minute}/minute"],
            enabled=settings.rate_limit_enabled,
        )
        self.app.state.limiter = self.limiter
        self.app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

        logger.info("API Gateway initialized")

    def setup_middleware(self):
        """Configure all middleware. The last one added runs first."""
        logger.info("Setting up middleware...")

        self.app.add_middleware(ErrorHandlingMiddleware, is_production=self.settings.is_production)
        logger.debug("  → Error handling middleware added")

        self.app.add_middleware(SlowAPIMiddleware)
        logger.debug("  → Rate limit middleware added")

        self.app.add_middleware(RequestLoggingMiddleware)
        logger.debug("  → Request logging middleware added")

        self.app.add_middleware(RequestIDMiddleware)
        logger.debug("  → Request ID middleware added")

        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=self.settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
        logger.debug(f"  → CORS middleware added (origins: {', '.join(self.settings.cors_origins)})")

        logger.info("All middleware configured")

    def register_exception_handlers(self):
        """Map business exceptions to their public status and message."""

        @self.app.exception_handler(GridVaultError)
        async def business_exception_handler(request: Request, exc: GridVaultError):
            log = logger.error if exc.status_code >= 500 else logger.warning
            log(
                f"{type(exc).__name__} for {request.method} {request.url.path}: {exc} "
                f"→ {exc.status_code} {exc.public_message!r}"
            )
            return handle_business_exception(exc)

        logger.info("Exception handlers registered")

    def register_router(self, router: APIRouter, prefix: str = "", tags: Optional[List[str]] = None):
        """
        Register a router with the gateway.

        Args:
            router: FastAPI router instance
            prefix: URL prefix for the router
            tags: OpenAPI tags for documentation
        """
        self.app.include_router(router, prefix=prefix, tags=tags or [])
        logger.info(f"Registered router {tags or []} at prefix '{prefix}'")

    def register_health_endpoints(self):
        """Register health check endpoints."""

        @self.app.get("/health")
        async def health_check(request: Request):
            """
            Liveness probe.

            Returns 200 once the application context exists, 503 before.
            """
            if getattr(request.app.state, "context", None) is None:
                logger.warning("Health check failed: application context not initialized")
                return JSONResponse(
                    {"status": "unhealthy", "reason": "Services not initialized"},
                    status_code=503,
                )
            return {"status": "healthy", "version": self.version}

        @self.app.get("/ready")
        async def readiness_check(request: Request):
            """
            Readiness probe.

            Pings the blob store; 503 when it cannot be reached.
            """
            context = getattr(request.app.state, "context", None)
            if context is None:
                return JSONResponse(
                    {"ready": False, "reason": "Services not initialized"},
                    status_code=503,
                )
            try:
                await context.blob_store.ping()
            except Exception as e:
                logger.error(f"Readiness check failed: {e}")
                return JSONResponse({"ready": False, "reason": "Database unreachable"}, status_code=503)
            return {"ready": True}

        logger.info("Health check endpoints registered")

    def get_app(self) -> FastAPI:
        return self.app
