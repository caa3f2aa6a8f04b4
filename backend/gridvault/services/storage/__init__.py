"""
Blob storage abstraction layer.
Supports GridFS and in-memory backends without changing business logic.
"""
from .base import BlobStoreInterface
from .factory import BlobStoreFactory
from .gridfs_storage import GridFSBlobStore
from .memory_storage import MemoryBlobStore

__all__ = [
    "BlobStoreInterface",
    "BlobStoreFactory",
    "GridFSBlobStore",
    "MemoryBlobStore",
]
