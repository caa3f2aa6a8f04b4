"""
Shared dependencies for routers.

The application context is built at startup and stored on ``app.state``;
these helpers hand its services to request handlers through ``Depends``.
"""
from fastapi import Depends, Request

from ..core.context import AppContext
from ..core.config import Settings
from ..services.file_service import FileService
from ..services.search_service import SearchService
from ..services.upload_service import UploadService


def get_context(request: Request) -> AppContext:
    """Get the application context (dependency injection)."""
    context = getattr(request.app.state, "context", None)
    if context is None:
        raise RuntimeError("Application context not initialized")
    return context


def get_settings(context: AppContext = Depends(get_context)) -> Settings:
    return context.settings


def get_file_service(context: AppContext = Depends(get_context)) -> FileService:
    return context.file_service


def get_upload_service(context: AppContext = Depends(get_context)) -> UploadService:
    return context.upload_service


def get_search_service(context: AppContext = Depends(get_context)) -> SearchService:
    return context.search_service
