"""
Search layer: query construction plus pluggable backends
(Atlas Search on MongoDB, in-memory emulation for demos and tests).
"""
from .atlas_backend import AtlasSearchBackend
from .base import SearchBackendInterface
from .memory_backend import MemorySearchBackend
from .query_builder import build_search_pipeline

__all__ = [
    "AtlasSearchBackend",
    "MemorySearchBackend",
    "SearchBackendInterface",
    "build_search_pipeline",
]
