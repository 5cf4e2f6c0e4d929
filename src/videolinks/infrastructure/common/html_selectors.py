"""CSS-selector-based HTML queries backed by BeautifulSoup."""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag


def parse_html(html: str) -> BeautifulSoup:
    """Parse an HTML string into a BeautifulSoup tree (lxml parser)."""
    return BeautifulSoup(html, "lxml")


def extract_attr(root: BeautifulSoup | Tag, selector: str, attr: str) -> str | None:
    """Read *attr* from the first element matching *selector*."""
    match = root.select_one(selector)
    if match is None:
        return None
    val = match.get(attr)
    if isinstance(val, list):
        val = " ".join(val)
    return None if val is None else str(val)


class SoupMarkupQuery:
    """``MarkupQueryPort`` implementation over BeautifulSoup."""

    def first_attr(self, html: str, selector: str, attr: str) -> str | None:
        if not html:
            return None
        return extract_attr(parse_html(html), selector, attr)
