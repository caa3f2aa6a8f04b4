"""
Plain Text Extractor.

Stores JSON and XML documents as their raw UTF-8 text.
"""
from .base import BaseTextExtractor


class TextExtractor(BaseTextExtractor):
    """Extractor for text-based formats (JSON, XML)."""

    def extract(self, file_bytes: bytes) -> str:
        # Invalid byte sequences become U+FFFD rather than failing the upload
        return file_bytes.decode("utf-8", errors="replace")
