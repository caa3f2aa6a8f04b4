"""
Routers for the HTML pages and the JSON/download endpoints.
"""
from . import files, pages, search

__all__ = ["files", "pages", "search"]
