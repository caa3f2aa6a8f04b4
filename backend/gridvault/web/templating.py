"""
Jinja2 templates and display filters for the HTML pages.
Autoescaping is on, so every value placed in a template is HTML-escaped
unless it is already Markup.
"""
from datetime import datetime
from pathlib import Path
from typing import Optional

from fastapi.templating import Jinja2Templates

from .highlight import render_highlight_table

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


def format_size_kb(length: Optional[int]) -> str:
    return f"{(length or 0) / 1024:.2f} KB"


def format_datetime(value: Optional[datetime]) -> str:
    if value is None:
        return ""
    return value.strftime("%Y-%m-%d %H:%M:%S")


def format_score(score: Optional[float]) -> str:
    return f"{score:.2f}" if score is not None else ""


templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["size_kb"] = format_size_kb
templates.env.filters["datetime"] = format_datetime
templates.env.filters["score"] = format_score
templates.env.globals["highlight_table"] = render_highlight_table
