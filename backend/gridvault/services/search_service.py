"""
Search Service - Runs full-text searches against the search backend.
"""
from typing import List, Optional

from .search.base import SearchBackendInterface
from .search.query_builder import DEFAULT_INDEX, DEFAULT_LIMIT, build_search_pipeline
from ..api.exceptions import SearchFailedError
from ..api.mappers import StoredFileMapper
from ..core.logging_config import get_logger
from ..domain.entities import StoredFile

logger = get_logger(__name__)


class SearchService:
    """
    Service for metadata and content search.
    Ranking is left entirely to the backend; results keep its order.
    """

    def __init__(
        self,
        backend: SearchBackendInterface,
        index: str = DEFAULT_INDEX,
        limit: int = DEFAULT_LIMIT,
    ):
        self.backend = backend
        self.index = index
        self.limit = limit

    async def search(self, q: Optional[str]) -> List[StoredFile]:
        """
        Search stored files.

        Args:
            q: Free-text search string. Blank strings return no results
               without contacting the backend.

        Returns:
            Ranked results carrying score and highlights

        Raises:
            SearchFailedError: If the backend call fails
        """
        query = (q or "").strip()
        if not query:
            return []

        pipeline = build_search_pipeline(query, index=self.index, limit=self.limit)
        try:
            rows = await self.backend.run(pipeline)
            results = StoredFileMapper.from_documents(rows)
        except Exception as e:
            logger.error(f"Search error for q={query!r}: {e}", exc_info=True)
            raise SearchFailedError(str(e)) from e

        logger.info(f"Search q={query!r} returned {len(results)} results")
        for i, result in enumerate(results, 1):
            logger.debug(
                f"  Doc #{i} _id={result.id} highlight paths={[h.path for h in result.highlights]}"
            )
        return results
