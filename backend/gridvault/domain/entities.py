"""
Domain entities - Core business objects.
These represent the business concepts, not database documents.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from .value_objects import FileId, SegmentKind


def parse_keywords(raw: Optional[str]) -> List[str]:
    """Split a comma-separated keyword string, trimming and dropping empties."""
    if not raw:
        return []
    return [keyword.strip() for keyword in raw.split(",") if keyword.strip()]


def format_keywords(keywords: List[str]) -> str:
    return ", ".join(keywords)


def _as_int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


@dataclass(frozen=True)
class MetadataDocument:
    """
    Metadata attached to every stored file.

    ``content`` is present only when text was extracted from the upload;
    ``None`` means "not extracted" and is never persisted as an empty string.
    """
    name: str
    type: str
    keywords: List[str] = field(default_factory=list)
    briefing: str = ""
    size_bytes: int = 0
    source_path: str = ""
    content: Optional[str] = None

    def __post_init__(self):
        if self.content == "":
            object.__setattr__(self, "content", None)

    @property
    def has_content(self) -> bool:
        return self.content is not None

    @property
    def keywords_display(self) -> str:
        return format_keywords(self.keywords)

    def to_document(self) -> Dict[str, Any]:
        """Serialize to the camelCase sub-document stored with the file."""
        doc: Dict[str, Any] = {
            "name": self.name,
            "type": self.type,
            "keywords": list(self.keywords),
            "briefing": self.briefing,
            "sizeBytes": self.size_bytes,
            "sourcePath": self.source_path,
        }
        if self.content is not None:
            doc["content"] = self.content
        return doc

    @classmethod
    def from_document(cls, doc: Optional[Mapping[str, Any]]) -> "MetadataDocument":
        """Build from a stored sub-document; unreadable sizes count as 0."""
        doc = doc or {}
        keywords = doc.get("keywords") or []
        if isinstance(keywords, str):
            keywords = parse_keywords(keywords)
        return cls(
            name=doc.get("name") or "",
            type=doc.get("type") or "",
            keywords=[str(k) for k in keywords],
            briefing=doc.get("briefing") or "",
            size_bytes=_as_int(doc.get("sizeBytes")),
            source_path=doc.get("sourcePath") or "",
            content=doc.get("content") or None,
        )


@dataclass(frozen=True)
class HighlightSegment:
    value: str
    kind: SegmentKind = SegmentKind.TEXT

    @property
    def is_hit(self) -> bool:
        return self.kind is SegmentKind.HIT


@dataclass(frozen=True)
class HighlightEntry:
    """Highlighted spans the search service returned for one field path."""
    path: str
    texts: List[HighlightSegment] = field(default_factory=list)
    score: Optional[float] = None

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "HighlightEntry":
        texts = doc.get("texts") if isinstance(doc.get("texts"), list) else []
        return cls(
            path=str(doc.get("path") or ""),
            texts=[
                HighlightSegment(
                    value=str(t.get("value") or ""),
                    kind=SegmentKind.parse(t.get("type")),
                )
                for t in texts
            ],
            score=doc.get("score"),
        )


@dataclass
class StoredFile:
    """
    A file stored in the blob store together with its metadata.

    ``score`` and ``highlights`` are only populated for search results.
    """
    id: FileId
    filename: str
    content_type: Optional[str]
    length: int
    upload_date: Optional[datetime]
    metadata: MetadataDocument
    score: Optional[float] = None
    highlights: List[HighlightEntry] = field(default_factory=list)

    @property
    def display_name(self) -> str:
        return self.metadata.name or self.filename

    @property
    def display_type(self) -> str:
        return self.metadata.type or self.content_type or ""

    @property
    def download_content_type(self) -> str:
        return self.content_type or "application/octet-stream"


@dataclass(frozen=True)
class FilePage:
    """One page of the file listing."""
    page: int
    page_size: int
    total_docs: int
    total_pages: int
    files: List[StoredFile]

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages
