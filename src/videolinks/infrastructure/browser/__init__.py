from .playwright_engine import PlaywrightBrowserEngine, PlaywrightBrowsingContext

__all__ = ["PlaywrightBrowserEngine", "PlaywrightBrowsingContext"]
