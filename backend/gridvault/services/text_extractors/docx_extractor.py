"""
DOCX Text Extractor.

Extracts text from DOCX files using python-docx library.
"""
import io

from docx import Document as DocxDocument

from .base import BaseTextExtractor
from ...api.exceptions import ExtractionError
from ...core.logging_config import get_logger
from ...domain.value_objects import ExtractionKind

logger = get_logger(__name__)


class DOCXExtractor(BaseTextExtractor):
    """Extractor for DOCX files."""

    def __init__(self):
        super().__init__(ExtractionKind.DOCX, "DOCX")

    def extract(self, file_bytes: bytes) -> str:
        """
        Extract raw text from a DOCX file.

        Paragraphs are separated by blank lines; table rows follow the
        paragraphs with cells joined by " | ".
        """
        try:
            doc = DocxDocument(io.BytesIO(file_bytes))
        except Exception as e:
            raise ExtractionError(f"Error opening DOCX file: {e}") from e

        blocks = [p.text for p in doc.paragraphs if p.text.strip()]

        for table in doc.tables:
            for row in table.rows:
                cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
                if cells:
                    blocks.append(" | ".join(cells))

        return "\n\n".join(blocks)
