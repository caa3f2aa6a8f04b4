"""
Text Extractors Module - content extraction for the search index.

To support a new format:
1. Add a member to ExtractionKind and teach ``from_mime_type`` about it
2. Create an extractor inheriting from BaseTextExtractor
3. Register it in ``default_extractors``
"""
from .base import BaseTextExtractor
from .docx_extractor import DOCXExtractor
from .factory import TextExtractorFactory, default_extractors
from .text_extractor import TextExtractor

__all__ = [
    "BaseTextExtractor",
    "DOCXExtractor",
    "TextExtractor",
    "TextExtractorFactory",
    "default_extractors",
]
