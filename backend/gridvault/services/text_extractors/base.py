"""
Base Text Extractor Interface.

All text extractors must inherit from this base class and implement
the extract() method.
"""
from abc import ABC, abstractmethod

from ...domain.value_objects import ExtractionKind


class BaseTextExtractor(ABC):
    """
    Abstract base class for text extractors.

    Each extraction kind has its own extractor class that inherits
    from this base class and implements the extract() method.
    """

    def __init__(self, kind: ExtractionKind, format_name: str):
        """
        Initialize the extractor.

        Args:
            kind: Extraction kind handled by this extractor
            format_name: Human-readable format name (e.g., 'JSON', 'DOCX')
        """
        self.kind = kind
        self.format_name = format_name

    @abstractmethod
    def extract(self, file_bytes: bytes) -> str:
        """
        Extract text from file bytes.

        Args:
            file_bytes: Raw file content as bytes

        Returns:
            Extracted text content (may be empty)

        Raises:
            ExtractionError: If the file cannot be read
        """
        pass
