"""
MongoDB Atlas Search backend.

Requires an Atlas Search index (named "default" unless configured otherwise)
on the GridFS files collection mapping:
    metadata.name        -> autocomplete
    metadata.briefing    -> nGram or string
    metadata.content, metadata.keywords, metadata.type, metadata.sourcePath -> string
"""
from typing import Any, Dict, List

from .base import SearchBackendInterface


class AtlasSearchBackend(SearchBackendInterface):
    """Runs ``$search`` pipelines on a motor collection."""

    def __init__(self, collection):
        self._collection = collection

    async def run(self, pipeline: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        cursor = self._collection.aggregate(pipeline)
        return await cursor.to_list(length=None)
