"""
Utility functions - Pure functions with no dependencies.
These can be used across all layers.
"""
from .content_type import detect_mime_type
from .pagination import parse_positive_int, total_pages

__all__ = [
    "detect_mime_type",
    "parse_positive_int",
    "total_pages",
]
