import asyncio
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from gridvault.core.config import Settings
from gridvault.core.context import AppContext
from gridvault.main import create_app
from gridvault.services.search import MemorySearchBackend, SearchBackendInterface
from gridvault.services.storage import MemoryBlobStore

BASE_DATE = datetime(2024, 1, 1, tzinfo=timezone.utc)


class BytesSource:
    """Minimal async reader over bytes, like an UploadFile."""

    def __init__(self, data: bytes):
        self._data = data
        self._position = 0

    async def read(self, size: int = -1) -> bytes:
        if size < 0:
            size = len(self._data) - self._position
        chunk = self._data[self._position:self._position + size]
        self._position += len(chunk)
        return chunk


class RecordingSearchBackend(SearchBackendInterface):
    """Delegates to the memory backend and records every pipeline it runs."""

    def __init__(self, store: MemoryBlobStore):
        self.pipelines = []
        self._inner = MemorySearchBackend(store)

    async def run(self, pipeline):
        self.pipelines.append(pipeline)
        return await self._inner.run(pipeline)


class FailingSearchBackend(SearchBackendInterface):
    async def run(self, pipeline):
        raise RuntimeError("index 'default' not found")


def seed_file(store, filename, data=b"payload", content_type="text/plain", metadata=None, minutes=0):
    """Store a file directly, bypassing ingestion; later ``minutes`` means newer."""
    metadata = metadata or {
        "name": filename,
        "type": content_type,
        "keywords": [],
        "briefing": "",
        "sizeBytes": len(data),
        "sourcePath": filename,
    }
    return asyncio.run(store.store(
        filename,
        BytesSource(data),
        content_type,
        metadata,
        upload_date=BASE_DATE + timedelta(minutes=minutes),
    ))


@pytest.fixture
def settings():
    return Settings(storage_type="memory", rate_limit_enabled=False, log_level="WARNING")


@pytest.fixture
def store():
    return MemoryBlobStore(chunk_size=4)


@pytest.fixture
def search_backend(store):
    return RecordingSearchBackend(store)


@pytest.fixture
def context(settings, store, search_backend):
    return AppContext(settings=settings, blob_store=store, search_backend=search_backend)


@pytest.fixture
def seed(store):
    """Store files straight into the memory store."""
    return lambda filename, **kwargs: seed_file(store, filename, **kwargs)


@pytest.fixture
def client(context):
    return TestClient(create_app(context=context))


@pytest.fixture
def failing_search_client(settings, store):
    context = AppContext(settings=settings, blob_store=store, search_backend=FailingSearchBackend())
    return TestClient(create_app(context=context))
