import asyncio
import copy
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, call, patch

import pytest
from bson import ObjectId

from gridvault.services.search import AtlasSearchBackend, build_search_pipeline
from gridvault.services.storage import GridFSBlobStore
from gridvault.services.storage.base import UPLOAD_CHUNK_SIZE
from gridvault.services.storage.gridfs_storage import to_object_id

MODULE = "gridvault.services.storage.gridfs_storage"


def reader(*chunks):
    """Upload source whose reads return ``chunks`` in turn (exceptions are raised)."""
    source = MagicMock()
    source.read = AsyncMock(side_effect=list(chunks))
    return source


@pytest.fixture
def motor():
    root = MagicMock(name="abc_uploads")
    files = MagicMock(name="abc_uploads.files")
    db = MagicMock(name="abc_demo")
    db.name = "abc_demo"
    db.__getitem__.side_effect = lambda name: files if name == "abc_uploads.files" else root
    client = MagicMock(name="client")
    client.__getitem__.return_value = db
    client.admin.command = AsyncMock(return_value={"ok": 1})

    with patch(f"{MODULE}.AsyncIOMotorGridFSBucket") as bucket_cls, \
            patch(f"{MODULE}.AsyncIOMotorGridIn") as grid_in_cls:
        events = []
        grid_in = grid_in_cls.return_value
        grid_in._id = ObjectId()
        grid_in.write = AsyncMock(side_effect=lambda chunk: events.append(("write", chunk)))
        grid_in.close = AsyncMock(side_effect=lambda: events.append(("close",)))
        grid_in.abort = AsyncMock(side_effect=lambda: events.append(("abort",)))

        yield SimpleNamespace(
            store=GridFSBlobStore(client, "abc_demo", "abc_uploads"),
            client=client,
            db=db,
            root=root,
            files=files,
            bucket_cls=bucket_cls,
            bucket=bucket_cls.return_value,
            grid_in_cls=grid_in_cls,
            grid_in=grid_in,
            events=events,
        )


def test_bucket_is_bound_to_database(motor):
    motor.bucket_cls.assert_called_once_with(motor.db, bucket_name="abc_uploads")
    assert motor.store.files_collection is motor.files


def test_store_streams_chunks_then_closes(motor):
    source = reader(b"abc", b"de", b"")

    file_id = asyncio.run(motor.store.store(
        "report.json", source, "application/json", {"name": "Q1 Report"},
    ))

    assert file_id == str(motor.grid_in._id)
    motor.grid_in_cls.assert_called_once_with(
        motor.root,
        filename="report.json",
        contentType="application/json",
        metadata={"name": "Q1 Report"},
    )
    assert source.read.await_args_list == [call(UPLOAD_CHUNK_SIZE)] * 3
    # the files document is only written by close(), after the last chunk
    assert motor.events == [("write", b"abc"), ("write", b"de"), ("close",)]
    motor.grid_in.abort.assert_not_awaited()


def test_failed_read_aborts_partial_upload(motor):
    source = reader(b"abc", OSError("client disconnected"))

    with pytest.raises(OSError):
        asyncio.run(motor.store.store("big.iso", source, "application/octet-stream", {}))

    assert motor.events == [("write", b"abc"), ("abort",)]
    motor.grid_in.close.assert_not_awaited()


def test_failed_abort_keeps_original_error(motor):
    motor.grid_in.abort.side_effect = RuntimeError("abort failed")
    source = reader(ConnectionError("primary stepped down"))

    with pytest.raises(ConnectionError):
        asyncio.run(motor.store.store("big.iso", source, "application/octet-stream", {}))

    motor.grid_in.abort.assert_awaited_once()


def test_count_and_list_newest_first(motor):
    motor.files.count_documents = AsyncMock(return_value=15)
    cursor = motor.files.find.return_value.sort.return_value.skip.return_value.limit.return_value
    cursor.to_list = AsyncMock(return_value=[{"_id": ObjectId(), "filename": "a.txt"}])

    assert asyncio.run(motor.store.count()) == 15
    docs = asyncio.run(motor.store.list_files(skip=10, limit=5))

    assert docs[0]["filename"] == "a.txt"
    motor.files.count_documents.assert_awaited_once_with({})
    motor.files.find.assert_called_once_with({})
    motor.files.find.return_value.sort.assert_called_once_with("uploadDate", -1)
    motor.files.find.return_value.sort.return_value.skip.assert_called_once_with(10)
    motor.files.find.return_value.sort.return_value.skip.return_value.limit.assert_called_once_with(5)
    cursor.to_list.assert_awaited_once_with(length=5)


@pytest.mark.parametrize("file_id", ["not-an-object-id", "123", "", None])
def test_malformed_id_is_not_looked_up(motor, file_id):
    motor.files.find_one = AsyncMock()

    assert to_object_id(file_id) is None
    assert asyncio.run(motor.store.find(file_id)) is None
    motor.files.find_one.assert_not_awaited()


def test_find_by_object_id(motor):
    oid = ObjectId()
    motor.files.find_one = AsyncMock(return_value={"_id": oid})

    assert asyncio.run(motor.store.find(str(oid))) == {"_id": oid}
    motor.files.find_one.assert_awaited_once_with({"_id": oid})


def test_open_download_reads_chunks(motor):
    oid = ObjectId()
    motor.files.find_one = AsyncMock(return_value={"_id": oid, "filename": "a.bin"})
    grid_out = MagicMock()
    grid_out.readchunk = AsyncMock(side_effect=[b"ab", b"cd", b""])
    motor.bucket.open_download_stream = AsyncMock(return_value=grid_out)

    async def download():
        doc, chunks = await motor.store.open_download(str(oid))
        return doc, [chunk async for chunk in chunks]

    doc, chunks = asyncio.run(download())

    assert doc["filename"] == "a.bin"
    assert chunks == [b"ab", b"cd"]
    motor.bucket.open_download_stream.assert_awaited_once_with(oid)


def test_open_download_unknown_id(motor):
    motor.files.find_one = AsyncMock(return_value=None)
    motor.bucket.open_download_stream = AsyncMock()

    with pytest.raises(KeyError):
        asyncio.run(motor.store.open_download(str(ObjectId())))
    motor.bucket.open_download_stream.assert_not_awaited()


def test_ping_initialize_and_close(motor):
    assert asyncio.run(motor.store.ping()) is True
    asyncio.run(motor.store.initialize())
    motor.client.admin.command.assert_awaited_with("ping")

    asyncio.run(motor.store.close())
    motor.client.close.assert_called_once_with()


def test_atlas_backend_sends_pipeline_unchanged():
    rows = [{"_id": ObjectId(), "score": 2.5, "highlights": []}]
    collection = MagicMock()
    collection.aggregate.return_value.to_list = AsyncMock(return_value=rows)
    pipeline = build_search_pipeline("quarterly", index="files_idx", limit=7)
    expected = copy.deepcopy(pipeline)

    result = asyncio.run(AtlasSearchBackend(collection).run(pipeline))

    assert result == rows
    collection.aggregate.assert_called_once_with(expected)
    assert pipeline == expected
    collection.aggregate.return_value.to_list.assert_awaited_once_with(length=None)
