"""Port for querying HTML markup with CSS selectors."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MarkupQueryPort(Protocol):
    """Parses markup and extracts attributes of matched elements."""

    def first_attr(self, html: str, selector: str, attr: str) -> str | None:
        """Return *attr* of the first element matching *selector*, or None."""
        ...
