"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

from .schema import DEFAULT_USER_AGENT

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "videolinks",
    "environment": "dev",
    "http": {
        "timeout_seconds": 5.0,
        "follow_redirects": True,
        "user_agent": DEFAULT_USER_AGENT,
    },
    "playwright": {
        "headless": True,
        "navigation_timeout_ms": 4_000,
        "settle_ms": 500,
        "max_contexts": 2,
        "stealth": False,
        "block_resources": True,
    },
    "extraction": {
        "max_retries": 2,
        "dynamic_timeout_seconds": 15.0,
        "request_timeout_seconds": 60.0,
        "manifest_markers": [],
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
}
