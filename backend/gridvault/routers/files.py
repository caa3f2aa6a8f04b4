"""
Files Router - JSON listing and downloads by identifier.
"""
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from .dependencies import get_file_service, get_settings
from .downloads import download_response
from ..api.exceptions import FileListingFailedError, ListingFailedError
from ..api.mappers import FilePageMapper
from ..core.config import Settings
from ..services.file_service import FileService
from ..utils.pagination import parse_positive_int

router = APIRouter()


@router.get("/files")
async def list_files(
    page: Optional[str] = None,
    pageSize: Optional[str] = None,
    settings: Settings = Depends(get_settings),
    file_service: FileService = Depends(get_file_service),
):
    """One page of stored files as JSON."""
    try:
        listing = await file_service.list_page(
            parse_positive_int(page, 1),
            parse_positive_int(pageSize, settings.default_page_size),
        )
    except ListingFailedError as e:
        raise FileListingFailedError(str(e)) from e

    dto = FilePageMapper.to_dto(listing)
    return JSONResponse(dto.model_dump(by_alias=True, exclude_none=True, mode="json"))


@router.get("/files/{file_id}")
async def download_file(file_id: str, file_service: FileService = Depends(get_file_service)):
    """Stream a stored file as an attachment."""
    return await download_response(file_service, file_id)
