"""
Pagination helpers - Pure functions.
"""
import math
import re
from typing import Optional

_LEADING_INT = re.compile(r"\s*[-+]?\d+")


def parse_positive_int(raw: Optional[str], default: int) -> int:
    """
    Parse a page number or page size from a query parameter.

    Only the leading integer is read, so "10abc" is 10 and "2.5" is 2.
    Values without one, and zero, fall back to ``default``; anything
    below 1 is clamped to 1.
    """
    match = _LEADING_INT.match(raw or "")
    value = int(match.group()) if match else 0
    if value == 0:
        value = default
    return max(value, 1)


def total_pages(total_docs: int, page_size: int) -> int:
    """Number of pages needed for ``total_docs``; at least one."""
    return max(math.ceil(total_docs / page_size), 1)
