"""
Content-type detection for uploads.
"""
import mimetypes
from typing import Optional

from ..domain.value_objects import DOCX_MIME_TYPE, normalize_mime_type

GENERIC_MIME_TYPE = "application/octet-stream"

# Not every platform's mime.types knows these
mimetypes.add_type(DOCX_MIME_TYPE, ".docx")
mimetypes.add_type("application/json", ".json")
mimetypes.add_type("application/xml", ".xml")


def detect_mime_type(declared: Optional[str], filename: Optional[str]) -> str:
    """
    Resolve the MIME type of an upload.

    The client's declared type wins; when it is missing or generic the type
    is guessed from the filename extension. Returns "" when nothing is known.
    """
    mime_type = normalize_mime_type(declared or "")
    if mime_type and mime_type != GENERIC_MIME_TYPE:
        return mime_type

    guessed, _ = mimetypes.guess_type(filename or "")
    if guessed:
        return guessed.lower()
    return mime_type
