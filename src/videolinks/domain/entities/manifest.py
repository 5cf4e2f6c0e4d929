"""Pure scanning helpers for player links and HLS manifest URLs.

Everything here works on plain strings so it can be tested without a
network or a browser.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

MANIFEST_MARKER = ".m3u8"
MASTER_MARKER = "master.m3u8"
PLAYER_HANDLER_MARKER = "player_iframe.location.href"

# Same pattern is used by the in-browser inspection script.
MANIFEST_URL_RE = re.compile(r"""https?://[^\s"'<>]+?\.m3u8[^\s"'<>]*""", re.IGNORECASE)

# Any absolute URL; paired with configured CDN markers.
HTTP_URL_RE = re.compile(r"""https?://[^\s"'<>]+""", re.IGNORECASE)

_PLAYER_LINK_RE = re.compile(r"player_iframe\.location\.href\s*=\s*'(.*?)'")


def find_manifest_urls(text: str, extra_markers: Iterable[str] = ()) -> list[str]:
    """Return every distinct manifest URL in *text*, first-seen order.

    Besides ``.m3u8`` URLs, any absolute URL containing one of
    *extra_markers* (CDN hostnames, path fragments) is returned too.
    """
    if not text:
        return []
    hits = [(m.start(), m.group(0)) for m in MANIFEST_URL_RE.finditer(text)]
    markers = [marker for marker in extra_markers if marker]
    if markers:
        hits.extend(
            (m.start(), m.group(0))
            for m in HTTP_URL_RE.finditer(text)
            if any(marker in m.group(0) for marker in markers)
        )
        hits.sort(key=lambda hit: hit[0])
    return list(dict.fromkeys(url for _, url in hits))


def parse_player_link(handler: str | None) -> str | None:
    """Extract the quoted URL from an ``onclick`` player handler."""
    if not handler:
        return None
    match = _PLAYER_LINK_RE.search(handler)
    if match and match.group(1):
        return match.group(1)
    return None


def is_manifest_url(url: str | None, extra_markers: Iterable[str] = ()) -> bool:
    """Manifest-shape filter applied before anything is stored."""
    if not url:
        return False
    if MANIFEST_MARKER in url:
        return True
    return any(marker and marker in url for marker in extra_markers)


def is_master_url(url: str) -> bool:
    return MASTER_MARKER in url
