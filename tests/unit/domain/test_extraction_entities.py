"""Tests for ExtractionResult and stage outcome models."""

from __future__ import annotations

from datetime import datetime

import pytest

from videolinks.domain.entities.extraction import (
    ExtractionResult,
    SourceFetchError,
    StageOutcome,
    StageStatus,
    format_date,
    format_time,
)


class TestFormatting:
    def test_date_has_no_zero_padding(self) -> None:
        assert format_date(datetime(2026, 3, 7)) == "3/7/2026"

    @pytest.mark.parametrize(
        ("moment", "expected"),
        [
            (datetime(2026, 1, 1, 0, 5, 9), "12:05:09 AM"),
            (datetime(2026, 1, 1, 9, 0, 0), "9:00:00 AM"),
            (datetime(2026, 1, 1, 12, 30, 1), "12:30:01 PM"),
            (datetime(2026, 1, 1, 23, 59, 59), "11:59:59 PM"),
        ],
    )
    def test_time_is_12_hour(self, moment: datetime, expected: str) -> None:
        assert format_time(moment) == expected


class TestExtractionResult:
    def test_build_formats_duration(self) -> None:
        result = ExtractionResult.build(
            master_link="https://cdn.example/master.m3u8",
            plyr_link="https://p.example/embed1",
            elapsed_seconds=1.23456,
            now=datetime(2026, 3, 7, 14, 5, 9),
        )
        assert result.duration == "1.23 seconds"
        assert result.date == "3/7/2026"
        assert result.time == "2:05:09 PM"

    def test_empty(self) -> None:
        result = ExtractionResult.empty(datetime(2026, 3, 7, 14, 5, 9))
        assert result.master_link is None
        assert result.plyr_link is None
        assert result.duration == "0.00 seconds"
        assert not result.found_anything

    def test_to_dict_uses_wire_names(self) -> None:
        result = ExtractionResult.build(
            master_link=None,
            plyr_link="https://p.example/embed1",
            elapsed_seconds=0.5,
            now=datetime(2026, 3, 7, 14, 5, 9),
        )
        assert result.to_dict() == {
            "masterLink": None,
            "plyrLink": "https://p.example/embed1",
            "date": "3/7/2026",
            "time": "2:05:09 PM",
            "duration": "0.50 seconds",
        }
        assert result.found_anything

    def test_is_frozen(self) -> None:
        result = ExtractionResult.empty()
        with pytest.raises(AttributeError):
            result.master_link = "x"  # type: ignore[misc]


class TestStageOutcome:
    def test_default_is_ok(self) -> None:
        assert StageOutcome().ok

    def test_degraded_from_exception(self) -> None:
        outcome = StageOutcome.degraded(ConnectionError("boom"))
        assert outcome.status is StageStatus.DEGRADED
        assert outcome.error == "boom"
        assert not outcome.ok

    def test_degraded_uses_type_name_for_empty_message(self) -> None:
        assert StageOutcome.degraded(TimeoutError()).error == "TimeoutError"

    def test_failed_from_exception(self) -> None:
        outcome = StageOutcome.failed(ValueError("parser blew up"))
        assert outcome.status is StageStatus.FAILED
        assert outcome.error == "parser blew up"
        assert not outcome.ok

    def test_failed_uses_type_name_for_empty_message(self) -> None:
        assert StageOutcome.failed(ConnectionError()).error == "ConnectionError"


def test_source_fetch_error_keeps_cause() -> None:
    cause = ConnectionError("refused")
    err = SourceFetchError("https://site.example", cause)
    assert err.cause is cause
    assert err.url == "https://site.example"
    assert "refused" in str(err)
