"""
Mappers between stored documents, domain entities and DTOs.
Separates domain layer from persistence and API layers.
"""
from typing import Any, List, Mapping

from ..domain.entities import FilePage, HighlightEntry, MetadataDocument, StoredFile
from ..domain.value_objects import FileId
from .dto import FileListPageDTO, MetadataDTO, StoredFileDTO


class StoredFileMapper:
    """Maps between GridFS file documents, StoredFile entities and DTOs."""

    @staticmethod
    def from_document(doc: Mapping[str, Any]) -> StoredFile:
        """Convert a GridFS files-collection document (or search row) to an entity."""
        highlights = doc.get("highlights")
        return StoredFile(
            id=FileId(str(doc["_id"])),
            filename=doc.get("filename") or "",
            content_type=doc.get("contentType"),
            length=int(doc.get("length") or 0),
            upload_date=doc.get("uploadDate"),
            metadata=MetadataDocument.from_document(doc.get("metadata")),
            score=doc.get("score"),
            highlights=[
                HighlightEntry.from_document(h) for h in highlights
            ] if isinstance(highlights, list) else [],
        )

    @staticmethod
    def from_documents(docs: List[Mapping[str, Any]]) -> List[StoredFile]:
        return [StoredFileMapper.from_document(doc) for doc in docs]

    @staticmethod
    def to_dto(stored: StoredFile) -> StoredFileDTO:
        """Convert domain entity to DTO."""
        md = stored.metadata
        return StoredFileDTO(
            id=str(stored.id),
            filename=stored.filename,
            content_type=stored.content_type,
            length=stored.length,
            upload_date=stored.upload_date,
            metadata=MetadataDTO(
                name=md.name,
                type=md.type,
                keywords=list(md.keywords),
                briefing=md.briefing,
                content=md.content,
                size_bytes=md.size_bytes,
                source_path=md.source_path,
            ),
        )


class FilePageMapper:
    """Maps a FilePage to the JSON listing DTO."""

    @staticmethod
    def to_dto(page: FilePage) -> FileListPageDTO:
        return FileListPageDTO(
            page=page.page,
            page_size=page.page_size,
            total_docs=page.total_docs,
            total_pages=page.total_pages,
            files=[StoredFileMapper.to_dto(f) for f in page.files],
        )
