"""
Domain layer - Contains business entities and domain logic.
This layer is independent of infrastructure and frameworks.
"""
from .entities import (
    FilePage,
    HighlightEntry,
    HighlightSegment,
    MetadataDocument,
    StoredFile,
    format_keywords,
    parse_keywords,
)
from .value_objects import ExtractionKind, FileId, SegmentKind

__all__ = [
    "ExtractionKind",
    "FileId",
    "FilePage",
    "HighlightEntry",
    "HighlightSegment",
    "MetadataDocument",
    "SegmentKind",
    "StoredFile",
    "format_keywords",
    "parse_keywords",
]
