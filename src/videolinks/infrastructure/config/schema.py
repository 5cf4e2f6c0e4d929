"""Pydantic configuration models with validation."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


def _section(flat: str, *path: str | int) -> AliasChoices:
    return AliasChoices(flat, AliasPath(*path))


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    Note:
    - YAML is expected to be sectioned (http/playwright/extraction/logging).
    - Environment variables are handled by EnvOverrides(BaseSettings) to allow strict
      precedence control (defaults < YAML < ENV < CLI) in load.py.
    """

    # General
    app_name: str = Field(default="videolinks", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # HTTP transport (YAML section: http.*)
    http_timeout_seconds: float = Field(
        default=5.0,
        validation_alias=_section("http_timeout_seconds", "http", "timeout_seconds"),
        description="Timeout in seconds for each page fetch.",
    )
    http_follow_redirects: bool = Field(
        default=True,
        validation_alias=_section(
            "http_follow_redirects", "http", "follow_redirects"
        ),
        description="Whether the HTTP client follows redirects.",
    )
    http_user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        validation_alias=_section("http_user_agent", "http", "user_agent"),
        description="User-Agent for outgoing page fetches.",
    )

    # Playwright (YAML section: playwright.*)
    playwright_headless: bool = Field(
        default=True,
        validation_alias=_section("playwright_headless", "playwright", "headless"),
        description="Run Chromium headless.",
    )
    playwright_navigation_timeout_ms: int = Field(
        default=4_000,
        validation_alias=_section(
            "playwright_navigation_timeout_ms", "playwright", "navigation_timeout_ms"
        ),
        description="Timeout for navigating to the player page.",
    )
    playwright_settle_ms: int = Field(
        default=500,
        validation_alias=_section("playwright_settle_ms", "playwright", "settle_ms"),
        description="Pause after navigation so deferred scripts can run.",
    )
    playwright_max_contexts: int = Field(
        default=2,
        validation_alias=_section(
            "playwright_max_contexts", "playwright", "max_contexts"
        ),
        description="Max browsing contexts open at the same time.",
    )
    playwright_stealth: bool = Field(
        default=False,
        validation_alias=_section("playwright_stealth", "playwright", "stealth"),
        description="Apply playwright-stealth evasions to every context.",
    )
    playwright_block_resources: bool = Field(
        default=True,
        validation_alias=_section(
            "playwright_block_resources", "playwright", "block_resources"
        ),
        description="Abort image/font/stylesheet/media requests.",
    )

    # Extraction pipeline (YAML section: extraction.*)
    max_retries: int = Field(
        default=2,
        validation_alias=_section("max_retries", "extraction", "max_retries"),
        description="Extra attempts after a failed source-page fetch.",
    )
    dynamic_timeout_seconds: float = Field(
        default=15.0,
        validation_alias=_section(
            "dynamic_timeout_seconds", "extraction", "dynamic_timeout_seconds"
        ),
        description="Upper bound for one dynamic (browser) resolution.",
    )
    request_timeout_seconds: float = Field(
        default=60.0,
        validation_alias=_section(
            "request_timeout_seconds", "extraction", "request_timeout_seconds"
        ),
        description="Deadline for a whole /api/extract request.",
    )
    manifest_markers: list[str] = Field(
        default_factory=list,
        validation_alias=_section(
            "manifest_markers", "extraction", "manifest_markers"
        ),
        description="Extra substrings (CDN markers) accepted as manifest URLs.",
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=_section("log_level", "logging", "level"),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=_section("log_format", "logging", "format"),
        description=(
            "Log renderer format (console/json). If unset, derived from environment."
        ),
    )

    @field_validator(
        "http_timeout_seconds", "dynamic_timeout_seconds", "request_timeout_seconds"
    )
    @classmethod
    def _validate_positive_seconds(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeouts must be > 0")
        return v

    @field_validator("playwright_navigation_timeout_ms")
    @classmethod
    def _validate_navigation_timeout(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("playwright_navigation_timeout_ms must be > 0")
        return v

    @field_validator("playwright_settle_ms")
    @classmethod
    def _validate_settle(cls, v: int) -> int:
        if not 0 <= v < 1000:
            raise ValueError("playwright_settle_ms must be in [0, 1000)")
        return v

    @field_validator("playwright_max_contexts")
    @classmethod
    def _validate_max_contexts(cls, v: int) -> int:
        if v < 1:
            raise ValueError("playwright_max_contexts must be >= 1")
        return v

    @field_validator("max_retries")
    @classmethod
    def _validate_retries(cls, v: int) -> int:
        if v < 0:
            raise ValueError("max_retries must be >= 0")
        return v

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    def to_sectioned_dict(self) -> dict[str, Any]:
        """
        Dump configuration in the sectioned shape used by config.yaml/docs.
        """
        return {
            "app_name": self.app_name,
            "environment": self.environment,
            "http": {
                "timeout_seconds": self.http_timeout_seconds,
                "follow_redirects": self.http_follow_redirects,
                "user_agent": self.http_user_agent,
            },
            "playwright": {
                "headless": self.playwright_headless,
                "navigation_timeout_ms": self.playwright_navigation_timeout_ms,
                "settle_ms": self.playwright_settle_ms,
                "max_contexts": self.playwright_max_contexts,
                "stealth": self.playwright_stealth,
                "block_resources": self.playwright_block_resources,
            },
            "extraction": {
                "max_retries": self.max_retries,
                "dynamic_timeout_seconds": self.dynamic_timeout_seconds,
                "request_timeout_seconds": self.request_timeout_seconds,
                "manifest_markers": list(self.manifest_markers),
            },
            "logging": {"level": self.log_level, "format": self.log_format},
        }


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    load.py reads VIDEOLINKS_* variables through this model, keeps only the
    values that were set, and merges them over YAML/defaults.

    Supported env var examples:
    - VIDEOLINKS_HTTP_TIMEOUT_SECONDS
    - VIDEOLINKS_PLAYWRIGHT_HEADLESS
    - VIDEOLINKS_MAX_RETRIES
    - VIDEOLINKS_LOG_LEVEL
    """

    model_config = SettingsConfigDict(
        env_prefix="VIDEOLINKS_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    http_timeout_seconds: Optional[float] = None
    http_follow_redirects: Optional[bool] = None
    http_user_agent: Optional[str] = None

    playwright_headless: Optional[bool] = None
    playwright_navigation_timeout_ms: Optional[int] = None
    playwright_settle_ms: Optional[int] = None
    playwright_max_contexts: Optional[int] = None
    playwright_stealth: Optional[bool] = None
    playwright_block_resources: Optional[bool] = None

    max_retries: Optional[int] = None
    dynamic_timeout_seconds: Optional[float] = None
    request_timeout_seconds: Optional[float] = None
    manifest_markers: Optional[list[str]] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    def to_update_dict(self) -> dict[str, Any]:
        """
        Return only values that were actually provided (non-None), for merging.
        """
        return self.model_dump(exclude_none=True)
