"""
Pages Router - Upload form and paginated file listing (HTML).
"""
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from fastapi.responses import HTMLResponse, RedirectResponse

from .dependencies import get_file_service, get_settings, get_upload_service
from ..core.config import Settings
from ..services.file_service import FileService
from ..services.upload_service import UploadForm, UploadService
from ..utils.pagination import parse_positive_int
from ..web.templating import templates

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def index(
    request: Request,
    page: Optional[str] = None,
    pageSize: Optional[str] = None,
    settings: Settings = Depends(get_settings),
    file_service: FileService = Depends(get_file_service),
):
    """Upload form plus one page of stored files, newest first."""
    listing = await file_service.list_page(
        parse_positive_int(page, 1),
        parse_positive_int(pageSize, settings.default_page_size),
    )
    return templates.TemplateResponse(request, "index.html", {"listing": listing})


@router.post("/upload")
async def upload(
    file: Optional[UploadFile] = File(None),
    displayName: Optional[str] = Form(None),
    type: Optional[str] = Form(None),
    keywords: Optional[str] = Form(None),
    briefing: Optional[str] = Form(None),
    upload_service: UploadService = Depends(get_upload_service),
):
    """Store an uploaded file with its metadata and go back to the listing."""
    form = UploadForm(display_name=displayName, type=type, keywords=keywords, briefing=briefing)
    await upload_service.ingest(file, form)
    return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)
