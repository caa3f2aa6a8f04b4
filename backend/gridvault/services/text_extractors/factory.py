"""
Text Extractor Factory.

Maps each extractable ExtractionKind to its extractor and runs extraction
off the event loop.
"""
import asyncio
from typing import Dict, Optional

from .base import BaseTextExtractor
from .docx_extractor import DOCXExtractor
from .text_extractor import TextExtractor
from ...core.logging_config import get_logger
from ...domain.value_objects import ExtractionKind

logger = get_logger(__name__)


def default_extractors() -> Dict[ExtractionKind, BaseTextExtractor]:
    return {
        ExtractionKind.JSON: TextExtractor(ExtractionKind.JSON, "JSON"),
        ExtractionKind.XML: TextExtractor(ExtractionKind.XML, "XML"),
        ExtractionKind.DOCX: DOCXExtractor(),
    }


class TextExtractorFactory:
    """
    Registry of text extractors keyed by ExtractionKind.

    Every extractable kind must have an extractor; UNSUPPORTED never does.
    """

    def __init__(self, extractors: Optional[Dict[ExtractionKind, BaseTextExtractor]] = None):
        self._extractors = dict(extractors) if extractors is not None else default_extractors()

        missing = [k for k in ExtractionKind if k.is_extractable and k not in self._extractors]
        if missing:
            raise ValueError(f"No extractor registered for: {', '.join(k.value for k in missing)}")
        if ExtractionKind.UNSUPPORTED in self._extractors:
            raise ValueError("UNSUPPORTED content cannot have an extractor")

        logger.debug(f"TextExtractorFactory initialized with {len(self._extractors)} extractors")

    def get_extractor(self, kind: ExtractionKind) -> Optional[BaseTextExtractor]:
        return self._extractors.get(kind)

    async def extract_text(self, kind: ExtractionKind, file_bytes: bytes) -> Optional[str]:
        """
        Extract text for ``kind`` in the default executor.

        Returns:
            Extracted text, or None for UNSUPPORTED content

        Raises:
            ExtractionError: Propagated from the extractor
        """
        extractor = self.get_extractor(kind)
        if extractor is None:
            return None

        loop = asyncio.get_running_loop()
        text = await loop.run_in_executor(None, extractor.extract, file_bytes)
        logger.debug(f"Extracted {len(text)} characters ({extractor.format_name})")
        return text
