from .browser import BrowserEnginePort, BrowsingContextPort
from .markup_query import MarkupQueryPort
from .page_fetcher import PageFetcherPort

__all__ = [
    "BrowserEnginePort",
    "BrowsingContextPort",
    "MarkupQueryPort",
    "PageFetcherPort",
]
