"""
Value Objects - Immutable objects that represent domain concepts.
These have no identity and are compared by value.
"""
from enum import Enum
from typing import NewType

FileId = NewType("FileId", str)

DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

_JSON_MIME_TYPES = frozenset({"application/json", "text/json"})
_XML_MIME_TYPES = frozenset({"application/xml", "text/xml"})


def normalize_mime_type(mime_type: str) -> str:
    """Lowercase a MIME type and drop any parameters (``; charset=...``)."""
    return (mime_type or "").split(";", 1)[0].strip().lower()


class ExtractionKind(str, Enum):
    """Content-extraction variants recognised at upload time."""
    JSON = "json"
    XML = "xml"
    DOCX = "docx"
    UNSUPPORTED = "unsupported"

    @classmethod
    def from_mime_type(cls, mime_type: str) -> "ExtractionKind":
        mt = normalize_mime_type(mime_type)
        if mt in _JSON_MIME_TYPES:
            return cls.JSON
        # XML, including +xml variants like application/rss+xml
        if mt in _XML_MIME_TYPES or mt.endswith("+xml"):
            return cls.XML
        if mt == DOCX_MIME_TYPE:
            return cls.DOCX
        return cls.UNSUPPORTED

    @property
    def is_extractable(self) -> bool:
        return self is not ExtractionKind.UNSUPPORTED


class SegmentKind(str, Enum):
    """Tag carried by each text segment of a search highlight."""
    HIT = "hit"
    TEXT = "text"

    @classmethod
    def parse(cls, value: str) -> "SegmentKind":
        # Anything the search service tags other than "hit" is context text
        return cls.HIT if value == cls.HIT.value else cls.TEXT
