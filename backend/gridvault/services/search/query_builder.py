"""
Atlas Search query construction.

Turns one free-text search string into a ``$search`` aggregation pipeline
over the GridFS files collection:

- autocomplete on ``metadata.name`` (typo tolerant prefix match)
- boosted fuzzy text match on keywords, type, source path and extracted content
- boosted fuzzy text match on the briefing

Clauses are combined with ``should`` semantics and ``minimumShouldMatch: 1``
so a document matching any one of them is returned.
"""
from typing import Any, Dict, List

DEFAULT_INDEX = "default"
DEFAULT_LIMIT = 50

FUZZY = {"maxEdits": 1, "prefixLength": 2}
BOOST = 2

NAME_PATH = "metadata.name"
BRIEFING_PATH = "metadata.briefing"
TEXT_PATHS = [
    "metadata.keywords",
    "metadata.type",
    "metadata.sourcePath",
    "metadata.content",
]
HIGHLIGHT_PATHS = [
    "metadata.name",
    "metadata.type",
    "metadata.keywords",
    "metadata.briefing",
    "metadata.sourcePath",
    "metadata.content",
]


def _boosted(value: int) -> Dict[str, Any]:
    return {"boost": {"value": value}}


def build_compound_query(q: str) -> Dict[str, Any]:
    return {
        "should": [
            {
                "autocomplete": {
                    "query": q,
                    "path": NAME_PATH,
                    "fuzzy": dict(FUZZY),
                }
            },
            {
                "text": {
                    "query": q,
                    "path": list(TEXT_PATHS),
                    "score": _boosted(BOOST),
                    "fuzzy": dict(FUZZY),
                }
            },
            {
                "text": {
                    "query": q,
                    "path": BRIEFING_PATH,
                    "score": _boosted(BOOST),
                    "fuzzy": dict(FUZZY),
                }
            },
        ],
        "minimumShouldMatch": 1,
    }


def build_search_pipeline(
    q: str,
    index: str = DEFAULT_INDEX,
    limit: int = DEFAULT_LIMIT,
) -> List[Dict[str, Any]]:
    """
    Build the aggregation pipeline for a search string.

    Args:
        q: Non-blank search string
        index: Name of the Atlas Search index
        limit: Maximum number of ranked results

    Raises:
        ValueError: If ``q`` is empty or whitespace
    """
    if not q or not q.strip():
        raise ValueError("Search query must not be empty")

    return [
        {
            "$search": {
                "index": index,
                "compound": build_compound_query(q),
                "highlight": {"path": list(HIGHLIGHT_PATHS)},
            }
        },
        {"$limit": limit},
        {
            "$project": {
                "_id": 1,
                "filename": 1,
                "uploadDate": 1,
                "length": 1,
                "metadata": 1,
                "score": {"$meta": "searchScore"},
                "highlights": {"$meta": "searchHighlights"},
            }
        },
    ]
