"""
Abstract base class for search backends.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List


class SearchBackendInterface(ABC):
    """
    Executes a search aggregation pipeline and returns the projected rows.
    Ranking, tokenization and fuzzy matching are the backend's business.
    """

    @abstractmethod
    async def run(self, pipeline: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Run ``pipeline`` and return every resulting row, in ranked order."""
        pass
