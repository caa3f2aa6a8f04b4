"""
Application context.

Holds the long-lived handles (blob store, search backend) and the services
built on them. Created once at startup, stored on ``app.state.context`` and
handed to request handlers through FastAPI dependencies.
"""
from dataclasses import dataclass, field
from typing import Optional

from .config import Settings
from .logging_config import get_logger
from ..services.file_service import FileService
from ..services.search import AtlasSearchBackend, MemorySearchBackend, SearchBackendInterface
from ..services.search_service import SearchService
from ..services.storage import BlobStoreFactory, BlobStoreInterface, GridFSBlobStore, MemoryBlobStore
from ..services.text_extractors import TextExtractorFactory
from ..services.upload_service import UploadService

logger = get_logger(__name__)


def search_backend_for(store: BlobStoreInterface) -> SearchBackendInterface:
    """Pick the search backend matching a blob store."""
    if isinstance(store, GridFSBlobStore):
        return AtlasSearchBackend(store.files_collection)
    if isinstance(store, MemoryBlobStore):
        return MemorySearchBackend(store)
    raise ValueError(f"No search backend for {type(store).__name__}")


@dataclass
class AppContext:
    settings: Settings
    blob_store: BlobStoreInterface
    search_backend: SearchBackendInterface
    extractors: TextExtractorFactory = field(default_factory=TextExtractorFactory)
    file_service: FileService = field(init=False)
    upload_service: UploadService = field(init=False)
    search_service: SearchService = field(init=False)

    def __post_init__(self):
        self.file_service = FileService(self.blob_store)
        self.upload_service = UploadService(
            self.blob_store,
            self.extractors,
            max_extract_bytes=self.settings.max_extract_bytes,
        )
        self.search_service = SearchService(
            self.search_backend,
            index=self.settings.search_index,
            limit=self.settings.search_limit,
        )

    @classmethod
    async def create(cls, settings: Settings, blob_store: Optional[BlobStoreInterface] = None) -> "AppContext":
        """
        Connect to the configured backends and build the services.

        Args:
            settings: Application settings
            blob_store: Pre-built store to use instead of the configured one
        """
        if blob_store is None:
            logger.info(f"Initializing blob store: {settings.storage_type}")
            blob_store = await BlobStoreFactory.create_and_initialize(settings)
        search_backend = search_backend_for(blob_store)
        logger.info(
            f"Services initialized (store={type(blob_store).__name__}, "
            f"search={type(search_backend).__name__}, index='{settings.search_index}')"
        )
        return cls(settings=settings, blob_store=blob_store, search_backend=search_backend)

    async def close(self):
        await self.blob_store.close()
