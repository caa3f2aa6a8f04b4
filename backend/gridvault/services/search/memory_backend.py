"""
In-memory search backend for demos and testing.

Interprets the subset of Atlas Search used by the query builder over the
documents of a MemoryBlobStore:
- compound ``should`` clauses with ``minimumShouldMatch``
- ``autocomplete`` (prefix) and ``text`` (whole token) operators
- ``fuzzy`` with ``maxEdits`` / ``prefixLength``
- ``score.boost.value``
- ``highlight.path`` producing Atlas-shaped hit/text segments
- ``$limit`` and ``$project``

Scores are simple hit counts weighted by boost; they only need to be
ordered sensibly, not to match Atlas' BM25 values.
"""
import re
from typing import Any, Callable, Dict, List, Optional

from .base import SearchBackendInterface
from ..storage.memory_storage import MemoryBlobStore

_TOKEN_RE = re.compile(r"\w+", re.UNICODE)


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance between two strings."""
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, 1):
        current = [i]
        for j, cb in enumerate(b, 1):
            current.append(min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + (ca != cb),
            ))
        previous = current
    return previous[-1]


def term_matches(term: str, token: str, fuzzy: Optional[Dict[str, int]], prefix: bool) -> bool:
    """
    Check one query term against one field token.

    Args:
        term: Lowercased query term
        token: Field token (any case)
        fuzzy: Atlas fuzzy options or None
        prefix: True for autocomplete semantics
    """
    token = token.lower()
    if token == term or (prefix and token.startswith(term)):
        return True

    max_edits = (fuzzy or {}).get("maxEdits", 0)
    if not max_edits:
        return False
    prefix_length = (fuzzy or {}).get("prefixLength", 0)
    if term[:prefix_length] != token[:prefix_length]:
        return False

    if not prefix:
        return edit_distance(term, token) <= max_edits
    lengths = range(max(len(term) - max_edits, 1), len(term) + max_edits + 1)
    return any(edit_distance(term, token[:n]) <= max_edits for n in lengths if n <= len(token))


def field_values(doc: Dict[str, Any], path: str) -> List[str]:
    """Resolve a dotted path; arrays yield one value per element."""
    value: Any = doc
    for part in path.split("."):
        value = value.get(part) if isinstance(value, dict) else None
    if value is None:
        return []
    if isinstance(value, list):
        return [str(v) for v in value if v is not None]
    return [str(value)]


class _Clause:
    def __init__(self, operator: str, spec: Dict[str, Any]):
        self.operator = operator
        self.terms = [t.lower() for t in _TOKEN_RE.findall(spec.get("query", ""))]
        path = spec.get("path", [])
        self.paths = list(path) if isinstance(path, list) else [path]
        self.fuzzy = spec.get("fuzzy")
        self.boost = float(spec.get("score", {}).get("boost", {}).get("value", 1))

    @property
    def prefix(self) -> bool:
        return self.operator == "autocomplete"

    def matcher(self) -> Callable[[str], bool]:
        return lambda token: any(
            term_matches(term, token, self.fuzzy, self.prefix) for term in self.terms
        )

    def hit_count(self, doc: Dict[str, Any]) -> int:
        matches = self.matcher()
        return sum(
            1
            for path in self.paths
            for value in field_values(doc, path)
            for token in _TOKEN_RE.findall(value)
            if matches(token)
        )


def highlight_segments(text: str, matches: Callable[[str], bool]) -> List[Dict[str, str]]:
    """Split ``text`` into hit/text segments; empty when nothing matches."""
    segments: List[Dict[str, str]] = []
    position = 0
    for match in _TOKEN_RE.finditer(text):
        if not matches(match.group()):
            continue
        if match.start() > position:
            segments.append({"value": text[position:match.start()], "type": "text"})
        segments.append({"value": match.group(), "type": "hit"})
        position = match.end()
    if not segments:
        return []
    if position < len(text):
        segments.append({"value": text[position:], "type": "text"})
    return segments


class MemorySearchBackend(SearchBackendInterface):
    """Evaluates search pipelines against a MemoryBlobStore."""

    def __init__(self, store: MemoryBlobStore):
        self._store = store

    async def run(self, pipeline: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        rows: List[Dict[str, Any]] = []
        for stage in pipeline:
            if "$search" in stage:
                rows = self._search(stage["$search"])
            elif "$limit" in stage:
                rows = rows[:stage["$limit"]]
            elif "$project" in stage:
                rows = [self._project(row, stage["$project"]) for row in rows]
            else:
                raise ValueError(f"Unsupported pipeline stage: {list(stage)}")
        return rows

    def _search(self, search: Dict[str, Any]) -> List[Dict[str, Any]]:
        compound = search.get("compound", {})
        clauses = [
            _Clause(operator, spec)
            for clause in compound.get("should", [])
            for operator, spec in clause.items()
        ]
        minimum = max(int(compound.get("minimumShouldMatch", 1)), 1)
        highlight_paths = search.get("highlight", {}).get("path", [])

        rows = []
        for doc in self._store.file_documents():
            matched = 0
            score = 0.0
            for clause in clauses:
                hits = clause.hit_count(doc)
                if hits:
                    matched += 1
                    score += clause.boost * hits
            if matched < minimum:
                continue
            doc["searchScore"] = score
            doc["searchHighlights"] = self._highlights(doc, clauses, highlight_paths)
            rows.append(doc)

        # sorted() is stable, ties keep newest-first order
        return sorted(rows, key=lambda row: row["searchScore"], reverse=True)

    @staticmethod
    def _highlights(
        doc: Dict[str, Any],
        clauses: List[_Clause],
        paths: List[str],
    ) -> List[Dict[str, Any]]:
        highlights = []
        for path in paths:
            covering = [clause.matcher() for clause in clauses if path in clause.paths]
            if not covering:
                continue
            for value in field_values(doc, path):
                segments = highlight_segments(value, lambda token: any(m(token) for m in covering))
                if segments:
                    hits = sum(1 for s in segments if s["type"] == "hit")
                    highlights.append({"path": path, "texts": segments, "score": float(hits)})
        return highlights

    @staticmethod
    def _project(row: Dict[str, Any], projection: Dict[str, Any]) -> Dict[str, Any]:
        projected = {}
        for key, rule in projection.items():
            if isinstance(rule, dict) and "$meta" in rule:
                projected[key] = row.get(rule["$meta"])
            elif rule and key in row:
                projected[key] = row[key]
        return projected
