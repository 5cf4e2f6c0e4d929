"""Extraction domain models: result record, stage outcomes, errors."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


class StageStatus(str, enum.Enum):
    """Outcome tag for a single pipeline stage."""

    OK = "ok"
    DEGRADED = "degraded"
    FAILED = "failed"


def _error_text(error: BaseException | str) -> str:
    message = str(error)
    if not message and isinstance(error, BaseException):
        return type(error).__name__
    return message


@dataclass(frozen=True)
class StageOutcome:
    """Tagged outcome of a pipeline stage.

    ``DEGRADED`` marks a stage that failed in a way the pipeline tolerates
    (player page unreachable, browser navigation timed out).  ``FAILED`` marks
    an attempt that was aborted and is retried.
    """

    status: StageStatus = StageStatus.OK
    error: str | None = None
    recorded: int = 0

    @property
    def ok(self) -> bool:
        return self.status is StageStatus.OK

    @classmethod
    def degraded(cls, error: BaseException | str) -> StageOutcome:
        return cls(status=StageStatus.DEGRADED, error=_error_text(error))

    @classmethod
    def failed(cls, error: BaseException | str) -> StageOutcome:
        return cls(status=StageStatus.FAILED, error=_error_text(error))


@dataclass(frozen=True)
class StaticResolution:
    """What the static stage learned about one source page."""

    player_link: str | None = None
    player_page: StageOutcome = field(default_factory=StageOutcome)
    manifests_found: int = 0


class SourceFetchError(Exception):
    """The source page itself could not be fetched.

    The orchestrator catches it and retries the whole attempt.
    """

    def __init__(self, url: str, cause: BaseException) -> None:
        super().__init__(f"Failed to fetch source page {url}: {cause}")
        self.url = url
        self.cause = cause


def format_date(moment: datetime) -> str:
    """``M/D/YYYY`` without zero padding."""
    return f"{moment.month}/{moment.day}/{moment.year}"


def format_time(moment: datetime) -> str:
    """12-hour clock, ``H:MM:SS AM``."""
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d}:{moment.second:02d} {suffix}"


def format_duration(seconds: float) -> str:
    return f"{seconds:.2f} seconds"


@dataclass(frozen=True)
class ExtractionResult:
    """Externally visible record for one source URL.

    Built once per ``extract()`` call and never mutated afterwards.
    """

    master_link: str | None
    plyr_link: str | None
    date: str
    time: str
    duration: str

    @property
    def found_anything(self) -> bool:
        return self.master_link is not None or self.plyr_link is not None

    @classmethod
    def build(
        cls,
        *,
        master_link: str | None,
        plyr_link: str | None,
        elapsed_seconds: float,
        now: datetime | None = None,
    ) -> ExtractionResult:
        moment = now or datetime.now()
        return cls(
            master_link=master_link,
            plyr_link=plyr_link,
            date=format_date(moment),
            time=format_time(moment),
            duration=format_duration(elapsed_seconds),
        )

    @classmethod
    def empty(cls, now: datetime | None = None) -> ExtractionResult:
        """All-null result returned once every retry is exhausted."""
        return cls.build(
            master_link=None, plyr_link=None, elapsed_seconds=0.0, now=now
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "masterLink": self.master_link,
            "plyrLink": self.plyr_link,
            "date": self.date,
            "time": self.time,
            "duration": self.duration,
        }
