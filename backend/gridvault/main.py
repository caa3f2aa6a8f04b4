import sys
from typing import Optional

from . import __version__
from .core.config import Settings
from .core.context import AppContext
from .core.logging_config import get_logger, setup_logging
from .gateway import APIGateway
from .routers import files, pages, search

logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None, context: Optional[AppContext] = None):
    """
    Build the FastAPI application.

    Args:
        settings: Application settings (read from the environment if None)
        context: Pre-built application context; when None one is created
                 from ``settings`` on startup
    """
    settings = settings or (context.settings if context else Settings.from_env())
    setup_logging(settings.log_level, settings.log_file)

    gateway = APIGateway(settings, version=__version__)
    gateway.setup_middleware()
    gateway.register_exception_handlers()

    gateway.register_router(pages.router, tags=["Pages"])
    gateway.register_router(files.router, tags=["Files"])
    gateway.register_router(search.router, tags=["Search"])
    gateway.register_health_endpoints()

    app = gateway.get_app()
    app.state.settings = settings
    app.state.context = context

    @app.on_event("startup")
    async def startup_event():
        logger.info("=" * 60)
        logger.info("Starting GridVault...")
        logger.info("=" * 60)
        logger.info(f"  → Python Version: {sys.version.split()[0]}")
        logger.info(f"  → Environment: {settings.environment}")
        logger.info(f"  → Storage: {settings.storage_type} (bucket '{settings.gridfs_bucket}', db '{settings.db_name}')")
        logger.info(f"  → Search index: '{settings.search_index}' (limit {settings.search_limit})")
        logger.info(f"  → Docs URL: {app.docs_url or 'Disabled (production)'}")
        logger.info(
            f"  → Rate limiting: {'enabled' if settings.rate_limit_enabled else 'disabled'}"
            f" ({settings.rate_limit_per_minute}/minute)"
        )

        if app.state.context is None:
            app.state.context = await AppContext.create(settings)
        logger.info("GridVault ready")

    @app.on_event("shutdown")
    async def shutdown_event():
        if app.state.context is not None:
            await app.state.context.close()
        logger.info("GridVault stopped")

    return app


app = create_app()


def run():
    """Run the server with uvicorn on the configured host and port."""
    import uvicorn

    settings: Settings = app.state.settings
    logger.info(f"Server listening at http://{settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)
