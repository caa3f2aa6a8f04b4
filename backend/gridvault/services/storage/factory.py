"""
Blob Store Factory for creating storage adapters.
Implements Factory Pattern for plug-and-play storage support.
"""
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient

from .base import BlobStoreInterface
from .gridfs_storage import GridFSBlobStore
from .memory_storage import MemoryBlobStore
from ...core.config import Settings
from ...core.logging_config import get_logger

logger = get_logger(__name__)


class BlobStoreFactory:
    """
    Factory for creating blob store adapters.
    Supports GridFS (MongoDB) and Memory (in-memory) backends.
    """

    @staticmethod
    def create(settings: Settings, storage_type: Optional[str] = None) -> BlobStoreInterface:
        """
        Create a blob store adapter instance.

        Args:
            settings: Application settings (connection string, database, bucket)
            storage_type: 'gridfs', 'memory', or None to use settings.storage_type

        Examples:
            store = BlobStoreFactory.create(settings, 'gridfs')
            store = BlobStoreFactory.create(settings, 'memory')
        """
        storage_type = (storage_type or settings.storage_type).lower()

        if storage_type == "gridfs":
            return BlobStoreFactory._create_gridfs(settings)
        elif storage_type == "memory":
            return MemoryBlobStore()
        else:
            raise ValueError(
                f"Unsupported storage type: {storage_type}. "
                f"Supported types: 'gridfs', 'memory'"
            )

    @staticmethod
    def _create_gridfs(settings: Settings) -> GridFSBlobStore:
        client = AsyncIOMotorClient(settings.mongodb_uri)
        return GridFSBlobStore(client, settings.db_name, settings.gridfs_bucket)

    @staticmethod
    async def create_and_initialize(settings: Settings, storage_type: Optional[str] = None) -> BlobStoreInterface:
        """Create a blob store adapter and initialize it."""
        store = BlobStoreFactory.create(settings, storage_type)
        await store.initialize()
        return store
