"""
MongoDB GridFS storage adapter implementing BlobStoreInterface.
Files are written in chunks to ``<bucket>.chunks`` and described by a
document in ``<bucket>.files`` that carries the metadata.
"""
from typing import Any, AsyncIterator, Dict, List, Mapping, Optional, Tuple

from bson import ObjectId
from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorGridFSBucket,
    AsyncIOMotorGridIn,
)

from .base import UPLOAD_CHUNK_SIZE, AsyncReadable, BlobStoreInterface
from ...core.logging_config import get_logger

logger = get_logger(__name__)


def to_object_id(file_id: str) -> Optional[ObjectId]:
    """Parse an identifier, returning None when it is not a valid ObjectId."""
    if not isinstance(file_id, str) or not ObjectId.is_valid(file_id):
        return None
    return ObjectId(file_id)


class GridFSBlobStore(BlobStoreInterface):
    """
    GridFS storage adapter backed by motor.

    The client is created once at startup and shared by every request.
    """

    def __init__(self, client: AsyncIOMotorClient, db_name: str, bucket_name: str):
        self._client = client
        self._db = client[db_name]
        self.bucket_name = bucket_name
        self._bucket = AsyncIOMotorGridFSBucket(self._db, bucket_name=bucket_name)
        self._files = self._db[f"{bucket_name}.files"]

    @property
    def files_collection(self):
        """The ``<bucket>.files`` collection, also the target of Atlas Search queries."""
        return self._files

    async def initialize(self):
        """Verify the connection so startup fails fast on a bad URI."""
        await self.ping()
        logger.info(f"Connected to GridFS bucket '{self.bucket_name}' in database '{self._db.name}'")

    async def close(self):
        self._client.close()

    async def ping(self) -> bool:
        await self._client.admin.command("ping")
        return True

    async def store(
        self,
        filename: str,
        source: AsyncReadable,
        content_type: str,
        metadata: Mapping[str, Any],
    ) -> str:
        grid_in = AsyncIOMotorGridIn(
            self._db[self.bucket_name],
            filename=filename,
            contentType=content_type,
            metadata=dict(metadata),
        )
        try:
            while True:
                chunk = await source.read(UPLOAD_CHUNK_SIZE)
                if not chunk:
                    break
                await grid_in.write(chunk)
            # The files document is only written here, after the last chunk
            await grid_in.close()
        except Exception:
            try:
                await grid_in.abort()
            except Exception as abort_error:
                logger.warning(f"Could not abort partial upload of '{filename}': {abort_error}")
            raise

        file_id = str(grid_in._id)
        logger.debug(f"Stored '{filename}' as {file_id}")
        return file_id

    async def count(self) -> int:
        return await self._files.count_documents({})

    async def list_files(self, skip: int, limit: int) -> List[Dict[str, Any]]:
        cursor = (
            self._files.find({})
            .sort("uploadDate", -1)
            .skip(skip)
            .limit(limit)
        )
        return await cursor.to_list(length=limit)

    async def find(self, file_id: str) -> Optional[Dict[str, Any]]:
        oid = to_object_id(file_id)
        if oid is None:
            return None
        return await self._files.find_one({"_id": oid})

    async def open_download(self, file_id: str) -> Tuple[Dict[str, Any], AsyncIterator[bytes]]:
        doc = await self.find(file_id)
        if doc is None:
            raise KeyError(file_id)

        grid_out = await self._bucket.open_download_stream(doc["_id"])

        async def _chunks() -> AsyncIterator[bytes]:
            while True:
                chunk = await grid_out.readchunk()
                if not chunk:
                    break
                yield chunk

        return doc, _chunks()
