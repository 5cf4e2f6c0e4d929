from .page_fetcher import HttpxPageFetcher

__all__ = ["HttpxPageFetcher"]
