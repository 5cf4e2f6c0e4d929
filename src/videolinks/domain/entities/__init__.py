from .extraction import (
    ExtractionResult,
    SourceFetchError,
    StageOutcome,
    StageStatus,
    StaticResolution,
)
from .link_collector import LinkCollector
from .manifest import (
    find_manifest_urls,
    is_manifest_url,
    is_master_url,
    parse_player_link,
)

__all__ = [
    "ExtractionResult",
    "LinkCollector",
    "SourceFetchError",
    "StageOutcome",
    "StageStatus",
    "StaticResolution",
    "find_manifest_urls",
    "is_manifest_url",
    "is_master_url",
    "parse_player_link",
]
