"""Shared fixtures for integration tests.

These tests use real infrastructure components (config loader, httpx
fetcher, BeautifulSoup markup query) with mocked HTTP via respx.
"""

from __future__ import annotations

from pathlib import Path

import pytest
import respx


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop VIDEOLINKS_* variables leaking in from the developer shell."""
    import os

    for name in list(os.environ):
        if name.upper().startswith("VIDEOLINKS_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def respx_mock() -> respx.MockRouter:
    """Explicit respx mock router for request interception."""
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture()
def write_yaml(tmp_path: Path):
    """Write a YAML document into tmp_path and return its path."""
    import yaml

    def _write(data: object, name: str = "config.yaml") -> Path:
        path = tmp_path / name
        path.write_text(yaml.dump(data), encoding="utf-8")
        return path

    return _write
