import json

from fastapi.testclient import TestClient

from gridvault.core.context import AppContext
from gridvault.domain.value_objects import DOCX_MIME_TYPE
from gridvault.main import create_app
from gridvault.services.search import MemorySearchBackend
from gridvault.services.storage import MemoryBlobStore

REPORT = json.dumps({"quarter": "Q1", "revenue": [1200, 1350, 1410], "notes": "x" * 1900}).encode()


class BrokenBlobStore(MemoryBlobStore):
    async def store(self, filename, source, content_type, metadata, upload_date=None):
        raise ConnectionError("connection reset by peer")


def upload(client, filename, data, content_type, **fields):
    return client.post(
        "/upload",
        files={"file": (filename, data, content_type)},
        data=fields,
        follow_redirects=False,
    )


def only_document(store):
    docs = store.file_documents()
    assert len(docs) == 1
    return docs[0]


def test_upload_json_stores_metadata_and_content(client, store):
    response = upload(
        client, "report.json", REPORT, "application/json",
        displayName="Q1 Report", keywords="finance, q1", briefing="quarterly summary",
    )

    assert response.status_code == 303
    assert response.headers["location"] == "/"

    doc = only_document(store)
    assert doc["filename"] == "report.json"
    assert doc["contentType"] == "application/json"
    assert doc["length"] == len(REPORT)
    assert doc["metadata"] == {
        "name": "Q1 Report",
        "type": "application/json",
        "keywords": ["finance", "q1"],
        "briefing": "quarterly summary",
        "sizeBytes": len(REPORT),
        "sourcePath": "report.json",
        "content": REPORT.decode(),
    }


def test_uploaded_file_appears_in_listing(client):
    upload(
        client, "report.json", REPORT, "application/json",
        displayName="Q1 Report", keywords="finance, q1", briefing="quarterly summary",
    )

    html = client.get("/").text
    assert "Q1 Report" in html
    assert "report.json" in html
    assert "finance, q1" in html
    assert "quarterly summary" in html


def test_form_fields_default_to_file_properties(client, store):
    upload(client, "feed.xml", b"<feed/>", "application/octet-stream")

    metadata = only_document(store)["metadata"]
    assert metadata["name"] == "feed.xml"
    assert metadata["type"] == "application/xml"
    assert metadata["keywords"] == []
    assert metadata["briefing"] == ""
    assert metadata["content"] == "<feed/>"


def test_unsupported_type_has_no_content(client, store):
    upload(client, "notes.txt", b"plain text", "text/plain", type="txt")

    metadata = only_document(store)["metadata"]
    assert metadata["type"] == "txt"
    assert "content" not in metadata


def test_file_over_extraction_limit_has_no_content(settings):
    settings.max_extract_bytes = 16
    store = MemoryBlobStore()
    context = AppContext(settings=settings, blob_store=store, search_backend=MemorySearchBackend(store))
    client = TestClient(create_app(context=context))

    upload(client, "small.json", b'{"a": 1}', "application/json")
    upload(client, "large.json", b'{"a": "' + b"y" * 32 + b'"}', "application/json")

    by_name = {doc["filename"]: doc["metadata"] for doc in store.file_documents()}
    assert by_name["small.json"]["content"] == '{"a": 1}'
    assert "content" not in by_name["large.json"]
    assert by_name["large.json"]["sizeBytes"] == 41


def test_extraction_failure_does_not_block_upload(client, store):
    response = upload(client, "broken.docx", b"not really a docx", DOCX_MIME_TYPE, displayName="Broken")

    assert response.status_code == 303
    metadata = only_document(store)["metadata"]
    assert metadata["name"] == "Broken"
    assert "content" not in metadata


def test_missing_file_is_rejected(client, store):
    response = client.post("/upload", data={"displayName": "nothing"}, follow_redirects=False)

    assert response.status_code == 400
    assert response.text == "No file uploaded"
    assert store.file_documents() == []


def test_store_failure_returns_generic_error(settings):
    store = BrokenBlobStore()
    context = AppContext(settings=settings, blob_store=store, search_backend=MemorySearchBackend(store))
    client = TestClient(create_app(context=context))

    response = upload(client, "report.json", REPORT, "application/json")

    assert response.status_code == 500
    assert response.text == "Upload failed"
    assert "connection reset" not in response.text


def test_extraction_limit_is_inclusive(settings):
    settings.max_extract_bytes = 16
    store = MemoryBlobStore()
    context = AppContext(settings=settings, blob_store=store, search_backend=MemorySearchBackend(store))
    client = TestClient(create_app(context=context))
    at_limit = b'{"k": "1234567"}'
    over_limit = b'{"k": "12345678"}'
    assert len(at_limit) == 16 and len(over_limit) == 17

    upload(client, "at-limit.json", at_limit, "application/json")
    upload(client, "over-limit.json", over_limit, "application/json")

    by_name = {doc["filename"]: doc["metadata"] for doc in store.file_documents()}
    assert by_name["at-limit.json"]["content"] == at_limit.decode()
    assert by_name["at-limit.json"]["sizeBytes"] == 16
    assert "content" not in by_name["over-limit.json"]
    assert by_name["over-limit.json"]["sizeBytes"] == 17
