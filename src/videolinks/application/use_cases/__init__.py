from .dynamic_resolve import DynamicResolver
from .extract_links import ExtractionSettings, VideoLinkExtractor
from .static_resolve import StaticResolver

__all__ = [
    "DynamicResolver",
    "ExtractionSettings",
    "StaticResolver",
    "VideoLinkExtractor",
]
