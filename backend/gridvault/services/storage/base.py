"""
Abstract base class for blob store adapters.
All storage implementations must inherit from this class.
"""
from abc import ABC, abstractmethod
from typing import Any, AsyncIterator, Dict, List, Mapping, Optional, Protocol, Tuple

# Size of each read from the upload source when streaming into the store
UPLOAD_CHUNK_SIZE = 255 * 1024


class AsyncReadable(Protocol):
    """Anything with an awaitable ``read(size)``, e.g. FastAPI's UploadFile."""

    async def read(self, size: int = -1) -> bytes:
        ...


class BlobStoreInterface(ABC):
    """
    Abstract interface for blob storage operations.

    A blob store keeps file bytes together with a files collection of
    documents shaped like GridFS file documents: ``_id``, ``filename``,
    ``contentType``, ``length``, ``uploadDate`` and ``metadata``.
    This allows plug-and-play storage support (GridFS, in-memory) without
    changing business logic.
    """

    @abstractmethod
    async def store(
        self,
        filename: str,
        source: AsyncReadable,
        content_type: str,
        metadata: Mapping[str, Any],
    ) -> str:
        """
        Stream ``source`` into the store as a single file.

        The file document becomes visible only once every chunk is written.

        Returns:
            Identifier of the stored file
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """Total number of stored files."""
        pass

    @abstractmethod
    async def list_files(self, skip: int, limit: int) -> List[Dict[str, Any]]:
        """File documents sorted by upload date, newest first."""
        pass

    @abstractmethod
    async def find(self, file_id: str) -> Optional[Dict[str, Any]]:
        """
        Get a file document by identifier.

        Returns None for unknown and for malformed identifiers.
        """
        pass

    @abstractmethod
    async def open_download(self, file_id: str) -> Tuple[Dict[str, Any], AsyncIterator[bytes]]:
        """
        Open a stored file for reading.

        Returns:
            The file document and an async iterator over its bytes

        Raises:
            KeyError: If no file matches the identifier
        """
        pass

    @abstractmethod
    async def ping(self) -> bool:
        """Check that the backing store is reachable."""
        pass

    @abstractmethod
    async def initialize(self):
        """Initialize storage (verify connections, etc.)."""
        pass

    @abstractmethod
    async def close(self):
        """Close storage connection."""
        pass
