"""
Search Router - Full-text search page and result downloads.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from .dependencies import get_file_service, get_search_service
from .downloads import download_response
from ..services.file_service import FileService
from ..services.search_service import SearchService
from ..web.templating import templates

router = APIRouter()


@router.get("/search", response_class=HTMLResponse)
async def search(
    request: Request,
    q: Optional[str] = None,
    search_service: SearchService = Depends(get_search_service),
):
    """
    Search stored files and render the results with highlights.

    A missing or blank query renders the empty page without searching.
    """
    query = (q or "").strip()
    results = await search_service.search(query)
    return templates.TemplateResponse(
        request,
        "search.html",
        {"query": query, "results": results},
    )


@router.get("/search/download/{file_id}")
async def download_search_result(file_id: str, file_service: FileService = Depends(get_file_service)):
    return await download_response(file_service, file_id)
