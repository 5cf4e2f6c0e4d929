"""Common infrastructure utilities."""

from __future__ import annotations

from .html_selectors import SoupMarkupQuery, extract_attr, parse_html

__all__ = [
    "SoupMarkupQuery",
    "extract_attr",
    "parse_html",
]
