"""
Upload Service - Handles the ingestion path.

This service encapsulates all upload-related business logic:
- MIME type detection
- Optional text extraction (JSON, XML, DOCX up to a size ceiling)
- Metadata document construction from form fields and file properties
- Streaming the file plus metadata into the blob store as one unit

Architecture:
- Uses dependency injection for the blob store and extractor registry
- Extraction failures are logged and never abort the upload

Example Usage:
    service = UploadService(blob_store, TextExtractorFactory())
    file_id = await service.ingest(file, UploadForm(display_name="Q1 Report"))
"""
import os
from dataclasses import dataclass
from typing import Optional

from fastapi import UploadFile

from .storage.base import BlobStoreInterface
from .text_extractors import TextExtractorFactory
from ..api.exceptions import MissingUploadError, UploadFailedError
from ..core.config import TEN_MB
from ..core.logging_config import get_logger
from ..domain.entities import MetadataDocument, parse_keywords
from ..domain.value_objects import ExtractionKind
from ..utils.content_type import detect_mime_type

logger = get_logger(__name__)


@dataclass(frozen=True)
class UploadForm:
    """User-supplied form fields accompanying an upload."""
    display_name: Optional[str] = None
    type: Optional[str] = None
    keywords: Optional[str] = None
    briefing: Optional[str] = None


def build_metadata(
    form: UploadForm,
    original_name: str,
    mime_type: str,
    size: int,
    content: Optional[str],
) -> MetadataDocument:
    """Create the metadata document for an upload."""
    return MetadataDocument(
        name=form.display_name or original_name,
        type=form.type or mime_type,
        keywords=parse_keywords(form.keywords),
        briefing=form.briefing or "",
        size_bytes=size,
        source_path=original_name,
        content=content or None,
    )


class UploadService:
    """
    Service for handling file uploads.

    Attributes:
        blob_store: Blob store receiving file bytes and metadata
        extractors: Text extractor registry
        max_extract_bytes: Files larger than this are stored without content
    """

    def __init__(
        self,
        blob_store: BlobStoreInterface,
        extractors: TextExtractorFactory,
        max_extract_bytes: int = TEN_MB,
    ):
        self.blob_store = blob_store
        self.extractors = extractors
        self.max_extract_bytes = max_extract_bytes

    async def ingest(self, file: Optional[UploadFile], form: UploadForm) -> str:
        """
        Store an uploaded file with its metadata.

        Args:
            file: The uploaded file (None when the form had no file part)
            form: Accompanying form fields

        Returns:
            Identifier of the stored file

        Raises:
            MissingUploadError: If no file was uploaded
            UploadFailedError: If the blob store write fails
        """
        if file is None or not file.filename:
            raise MissingUploadError()

        original_name = file.filename
        mime_type = detect_mime_type(file.content_type, original_name)
        size = await self._measure(file)

        content = await self._extract_content(file, mime_type, size)
        metadata = build_metadata(form, original_name, mime_type, size, content)

        try:
            await file.seek(0)
            file_id = await self.blob_store.store(
                original_name,
                file,
                mime_type,
                metadata.to_document(),
            )
        except Exception as e:
            logger.error(f"Upload error for '{original_name}': {e}", exc_info=True)
            raise UploadFailedError(str(e)) from e

        logger.info(
            f"Stored '{original_name}' as {file_id} "
            f"({size} bytes, {mime_type or 'unknown type'}, content={'yes' if metadata.has_content else 'no'})"
        )
        return file_id

    @staticmethod
    async def _measure(file: UploadFile) -> int:
        if file.size is not None:
            return file.size
        file.file.seek(0, os.SEEK_END)
        size = file.file.tell()
        await file.seek(0)
        return size

    async def _extract_content(self, file: UploadFile, mime_type: str, size: int) -> Optional[str]:
        kind = ExtractionKind.from_mime_type(mime_type)
        if not kind.is_extractable:
            return None
        if size > self.max_extract_bytes:
            logger.info(
                f"Skipping content extraction for '{file.filename}': "
                f"{size} bytes exceeds {self.max_extract_bytes}"
            )
            return None

        try:
            await file.seek(0)
            data = await file.read()
            text = await self.extractors.extract_text(kind, data)
        except Exception as e:
            # Don't fail the upload, just skip content
            logger.error(f"Content extraction failed for '{file.filename}': {e}", exc_info=True)
            return None

        return text or None
