"""
File service implementation.
Handles the listing and download paths on top of a blob store.
"""
from typing import AsyncIterator, Tuple

from .storage.base import BlobStoreInterface
from ..api.exceptions import DownloadFailedError, ListingFailedError, StoredFileNotFoundError
from ..api.mappers import StoredFileMapper
from ..core.logging_config import get_logger
from ..domain.entities import FilePage, StoredFile
from ..utils.pagination import total_pages

logger = get_logger(__name__)


class FileService:
    """
    File service implementation.
    Paginated listing (newest first) and streaming downloads.
    """

    def __init__(self, blob_store: BlobStoreInterface):
        self.blob_store = blob_store

    async def list_page(self, page: int, page_size: int) -> FilePage:
        """
        Get one page of stored files sorted by upload date, newest first.

        Args:
            page: 1-based page number
            page_size: Files per page

        Raises:
            ListingFailedError: If the blob store cannot be queried or returns
                unreadable file documents
        """
        try:
            total_docs = await self.blob_store.count()
            docs = await self.blob_store.list_files(skip=(page - 1) * page_size, limit=page_size)
            files = StoredFileMapper.from_documents(docs)
        except Exception as e:
            logger.error(f"Error listing files (page={page}, pageSize={page_size}): {e}", exc_info=True)
            raise ListingFailedError(str(e)) from e

        return FilePage(
            page=page,
            page_size=page_size,
            total_docs=total_docs,
            total_pages=total_pages(total_docs, page_size),
            files=files,
        )

    async def open_download(self, file_id: str) -> Tuple[StoredFile, AsyncIterator[bytes]]:
        """
        Open a stored file for streaming.

        Raises:
            StoredFileNotFoundError: Unknown or malformed identifier
            DownloadFailedError: Any other blob store failure
        """
        try:
            doc, chunks = await self.blob_store.open_download(file_id)
            stored = StoredFileMapper.from_document(doc)
        except KeyError:
            logger.info(f"Download requested for unknown file id {file_id!r}")
            raise StoredFileNotFoundError(f"No stored file with id {file_id!r}")
        except Exception as e:
            logger.error(f"Download error for {file_id!r}: {e}", exc_info=True)
            raise DownloadFailedError(str(e)) from e

        return stored, chunks
