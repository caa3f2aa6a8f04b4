"""
In-memory adapter implementing BlobStoreInterface.
Perfect for demos and testing - stores file documents and bytes in Python dicts.
Data is lost on restart.
"""
import copy
import itertools
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Dict, List, Mapping, Optional, Tuple

from bson import ObjectId

from .base import UPLOAD_CHUNK_SIZE, AsyncReadable, BlobStoreInterface
from .gridfs_storage import to_object_id


class MemoryBlobStore(BlobStoreInterface):
    """
    In-memory blob store using Python dictionaries.
    File documents mirror the GridFS layout so the rest of the
    application cannot tell the difference.
    """

    def __init__(self, chunk_size: int = UPLOAD_CHUNK_SIZE):
        self.chunk_size = chunk_size
        self._files: Dict[ObjectId, Dict[str, Any]] = {}
        self._blobs: Dict[ObjectId, bytes] = {}
        # Insertion sequence breaks ties between identical upload dates
        self._sequence = itertools.count()
        self._order: Dict[ObjectId, int] = {}

    async def initialize(self):
        """Initialize storage (clears any existing data)."""
        self._files.clear()
        self._blobs.clear()
        self._order.clear()

    async def close(self):
        """Close storage (no-op for in-memory)."""
        pass

    async def ping(self) -> bool:
        return True

    async def store(
        self,
        filename: str,
        source: AsyncReadable,
        content_type: str,
        metadata: Mapping[str, Any],
        upload_date: Optional[datetime] = None,
    ) -> str:
        buffer = bytearray()
        while True:
            chunk = await source.read(self.chunk_size)
            if not chunk:
                break
            buffer.extend(chunk)

        oid = ObjectId()
        self._blobs[oid] = bytes(buffer)
        self._files[oid] = {
            "_id": oid,
            "filename": filename,
            "contentType": content_type,
            "length": len(buffer),
            "chunkSize": self.chunk_size,
            "uploadDate": upload_date or datetime.now(timezone.utc),
            "metadata": copy.deepcopy(dict(metadata)),
        }
        self._order[oid] = next(self._sequence)
        return str(oid)

    def file_documents(self) -> List[Dict[str, Any]]:
        """All file documents, newest first (deep copies)."""
        ordered = sorted(
            self._files.values(),
            key=lambda doc: (doc["uploadDate"], self._order[doc["_id"]]),
            reverse=True,
        )
        return [copy.deepcopy(doc) for doc in ordered]

    async def count(self) -> int:
        return len(self._files)

    async def list_files(self, skip: int, limit: int) -> List[Dict[str, Any]]:
        return self.file_documents()[skip:skip + limit]

    async def find(self, file_id: str) -> Optional[Dict[str, Any]]:
        oid = to_object_id(file_id)
        if oid is None or oid not in self._files:
            return None
        return copy.deepcopy(self._files[oid])

    async def open_download(self, file_id: str) -> Tuple[Dict[str, Any], AsyncIterator[bytes]]:
        doc = await self.find(file_id)
        if doc is None:
            raise KeyError(file_id)
        data = self._blobs[doc["_id"]]

        async def _chunks() -> AsyncIterator[bytes]:
            for start in range(0, len(data), self.chunk_size):
                yield data[start:start + self.chunk_size]

        return doc, _chunks()
