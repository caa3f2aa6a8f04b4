"""
Streaming download responses shared by the file and search routers.
"""
import re
from urllib.parse import quote

from fastapi.responses import StreamingResponse

from ..services.file_service import FileService

_UNSAFE_FALLBACK_CHARS = re.compile(r"[\x00-\x1f\x7f\\]")


def content_disposition(filename: str) -> str:
    """
    Build an attachment Content-Disposition header.

    Names that are not plain printable ASCII get an RFC 5987 ``filename*``
    parameter next to an ASCII fallback. The fallback drops control
    characters and backslashes.
    """
    fallback = filename.encode("ascii", "replace").decode("ascii").replace('"', "'")
    fallback = _UNSAFE_FALLBACK_CHARS.sub("", fallback)
    header = f'attachment; filename="{fallback}"'
    if fallback != filename:
        header += f"; filename*=UTF-8''{quote(filename, safe='')}"
    return header


async def download_response(file_service: FileService, file_id: str) -> StreamingResponse:
    """Stream a stored file with its recorded content type and filename."""
    stored, chunks = await file_service.open_download(file_id)
    return StreamingResponse(
        chunks,
        media_type=stored.download_content_type,
        headers={
            "Content-Disposition": content_disposition(stored.filename),
            "Content-Length": str(stored.length),
        },
    )
