"""
Custom exceptions for API layer.
Separates business exceptions from HTTP exceptions.
"""
from fastapi import status
from fastapi.responses import JSONResponse, PlainTextResponse, Response


class GridVaultError(Exception):
    """
    Base class for business errors.

    ``public_message`` is the only text sent to the client; the
    exception's own message carries the detail that gets logged.
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    public_message = "Internal server error"
    json_body = False

    def __init__(self, detail: str = ""):
        super().__init__(detail or self.public_message)


class MissingUploadError(GridVaultError):
    """Raised when the upload form carries no file."""
    status_code = status.HTTP_400_BAD_REQUEST
    public_message = "No file uploaded"


class UploadFailedError(GridVaultError):
    """Raised when writing the file to the blob store fails."""
    public_message = "Upload failed"


class ExtractionError(GridVaultError):
    """Raised when text extraction fails. Recovered locally by ingestion."""
    public_message = "Content extraction failed"


class SearchFailedError(GridVaultError):
    """Raised when the search service call fails."""
    public_message = "Search error"


class StoredFileNotFoundError(GridVaultError):
    """Raised when no stored file matches the identifier."""
    status_code = status.HTTP_404_NOT_FOUND
    public_message = "File not found"


class DownloadFailedError(GridVaultError):
    public_message = "Download error"


class ListingFailedError(GridVaultError):
    public_message = "Error loading page"


class FileListingFailedError(ListingFailedError):
    """Listing failure on the JSON API."""
    public_message = "Error listing files"
    json_body = True


def handle_business_exception(e: GridVaultError) -> Response:
    """
    Convert business exceptions to HTTP responses.
    This keeps business logic clean of HTTP concerns.
    """
    if e.json_body:
        return JSONResponse(status_code=e.status_code, content={"error": e.public_message})
    return PlainTextResponse(e.public_message, status_code=e.status_code)
