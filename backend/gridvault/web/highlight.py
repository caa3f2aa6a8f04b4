"""
Highlight rendering for search results.

Each highlight entry becomes one row of a sub-table: the field path and a
snippet built from the entry's segments. Hits are kept whole and wrapped
in <mark>; context text longer than CONTEXT_CHARS keeps only its tail so the
row stays short and the text nearest the following hit stays visible.
"""
from typing import Iterable, List

from markupsafe import Markup, escape

from ..domain.entities import HighlightEntry, HighlightSegment

CONTEXT_CHARS = 80
ELLIPSIS = "…"

_ROW = Markup("<tr><td>{path}</td><td>{snippet}</td></tr>")
_TABLE = Markup(
    '<table class="subhl">'
    "<thead><tr><th>Field</th><th>Snippet</th></tr></thead>"
    "<tbody>{rows}</tbody>"
    "</table>"
)


def render_segment(segment: HighlightSegment) -> Markup:
    if segment.is_hit:
        return Markup("<mark>{}</mark>").format(segment.value)

    value = segment.value
    if len(value) > CONTEXT_CHARS:
        value = ELLIPSIS + value[-CONTEXT_CHARS:]
    return escape(value)


def render_snippet(entry: HighlightEntry) -> Markup:
    """Concatenate the rendered segments of one entry, in order."""
    return Markup("").join(render_segment(segment) for segment in entry.texts)


def render_highlight_rows(entries: Iterable[HighlightEntry]) -> List[Markup]:
    return [
        _ROW.format(path=entry.path, snippet=render_snippet(entry))
        for entry in entries
    ]


def render_highlight_table(entries: Iterable[HighlightEntry]) -> Markup:
    """Sub-table of every highlighted field; empty markup when there are none."""
    rows = render_highlight_rows(entries or [])
    if not rows:
        return Markup("")
    return _TABLE.format(rows=Markup("").join(rows))
