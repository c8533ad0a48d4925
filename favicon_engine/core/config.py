"""Engine configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Settings are validated at load time; components never
read them directly but receive the explicit FaviconConfig built by
Settings.favicon_config().
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Annotated

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from favicon_engine.domain.value_objects.core import HexColor

DEFAULT_TYPE_COLORS: dict[str, str] = {
    "prod": "#FF6B6B",
    "dev": "#4ECDC4",
    "staging": "#FFEAA7",
    "test": "#A29BFE",
    "demo": "#74B9FF",
    "research": "#00B894",
}

DEFAULT_PALETTE: list[str] = [
    "#FF6B6B",
    "#4ECDC4",
    "#45B7D1",
    "#96CEB4",
    "#FFEAA7",
    "#FD79A8",
    "#A29BFE",
    "#6C5CE7",
]


@dataclass(frozen=True)
class ScanLimits:
    """Budget for the bounded full-project scan."""

    max_results: int = 1000
    max_directories: int = 50
    max_depth: int = 5
    timeout_seconds: float = 5.0


@dataclass(frozen=True)
class RetryPolicy:
    """Capped exponential backoff for transient file errors."""

    max_retries: int = 3
    initial_delay_seconds: float = 0.1
    backoff_multiplier: float = 2.0
    max_delay_seconds: float = 2.0

    def delay_for(self, attempt: int) -> float:
        """Delay before retry number attempt (0-based), capped at max_delay_seconds."""
        return min(
            self.initial_delay_seconds * (self.backoff_multiplier**attempt),
            self.max_delay_seconds,
        )


@dataclass(frozen=True)
class FaviconConfig:
    """Explicit configuration passed to every engine component at construction."""

    type_colors: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_TYPE_COLORS))
    palette: tuple[str, ...] = tuple(DEFAULT_PALETTE)
    default_project_type: str = "dev"
    port_label_type: str = "dev"
    favicon_cache_max_size: int = 100
    color_cache_max_size: int = 50
    negative_cache_max_size: int = 200
    negative_cache_ttl_seconds: float = 300.0
    scan_limits: ScanLimits = field(default_factory=ScanLimits)
    retry_policy: RetryPolicy = field(default_factory=RetryPolicy)
    warm_timeout_seconds: float = 5.0
    warm_concurrency: int = 4


class Settings(BaseSettings):
    """Engine settings loaded from environment and .env.

    Colors accept JSON (TYPE_COLORS='{"dev": "#00ACC1"}') and DEFAULT_COLORS
    also accepts a comma-separated list.
    """

    # App
    app_name: str = "favicon-engine"
    app_version: str = "1.0.0"
    debug: bool = False

    # Badge colors
    type_colors: dict[str, str] = dict(DEFAULT_TYPE_COLORS)
    default_colors: Annotated[list[str], NoDecode] = list(DEFAULT_PALETTE)
    default_project_type: str = "dev"
    # Only projects of this type get the port label on their badge
    port_label_type: str = "dev"

    # In-memory caches
    favicon_cache_max_size: int = 100
    color_cache_max_size: int = 50
    negative_cache_max_size: int = 200
    negative_cache_ttl_seconds: float = 300.0

    # Full-scan budget
    scan_max_results: int = 1000
    scan_max_directories: int = 50
    scan_max_depth: int = 5
    scan_timeout_seconds: float = 5.0

    # Transient file error retry
    file_retry_max_retries: int = 3
    file_retry_initial_delay_seconds: float = 0.1
    file_retry_backoff_multiplier: float = 2.0
    file_retry_max_delay_seconds: float = 2.0

    # Cache warming
    warm_on_startup: bool = True
    warm_timeout_seconds: float = 5.0
    warm_concurrency: int = 4

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @field_validator("default_colors", mode="before")
    @classmethod
    def split_default_colors(cls, value: object) -> object:
        """Accept DEFAULT_COLORS as a comma-separated string."""
        if isinstance(value, str):
            return [c.strip() for c in value.split(",") if c.strip()]
        return value

    @model_validator(mode="after")
    def validate_colors_and_limits(self) -> "Settings":
        """Validate color formats and that every size/limit is positive."""
        if not self.default_colors:
            raise ValueError("DEFAULT_COLORS must contain at least one color.")
        for color in self.default_colors:
            if not HexColor.is_valid(color):
                raise ValueError(
                    f"DEFAULT_COLORS entries must be #RRGGBB hex colors, got {color!r}"
                )
        for project_type, color in self.type_colors.items():
            if not HexColor.is_valid(color):
                raise ValueError(
                    f"TYPE_COLORS[{project_type!r}] must be a #RRGGBB hex color, got {color!r}"
                )
        positive = {
            "FAVICON_CACHE_MAX_SIZE": self.favicon_cache_max_size,
            "COLOR_CACHE_MAX_SIZE": self.color_cache_max_size,
            "NEGATIVE_CACHE_MAX_SIZE": self.negative_cache_max_size,
            "SCAN_MAX_RESULTS": self.scan_max_results,
            "SCAN_MAX_DIRECTORIES": self.scan_max_directories,
            "SCAN_MAX_DEPTH": self.scan_max_depth,
            "SCAN_TIMEOUT_SECONDS": self.scan_timeout_seconds,
            "WARM_TIMEOUT_SECONDS": self.warm_timeout_seconds,
            "WARM_CONCURRENCY": self.warm_concurrency,
        }
        for env_name, value in positive.items():
            if value <= 0:
                raise ValueError(f"{env_name} must be positive, got {value!r}")
        if self.file_retry_max_retries < 0:
            raise ValueError("FILE_RETRY_MAX_RETRIES must not be negative.")
        return self

    def favicon_config(self) -> FaviconConfig:
        """Build the explicit component configuration from these settings."""
        return FaviconConfig(
            type_colors=dict(self.type_colors),
            palette=tuple(self.default_colors),
            default_project_type=self.default_project_type,
            port_label_type=self.port_label_type,
            favicon_cache_max_size=self.favicon_cache_max_size,
            color_cache_max_size=self.color_cache_max_size,
            negative_cache_max_size=self.negative_cache_max_size,
            negative_cache_ttl_seconds=self.negative_cache_ttl_seconds,
            scan_limits=ScanLimits(
                max_results=self.scan_max_results,
                max_directories=self.scan_max_directories,
                max_depth=self.scan_max_depth,
                timeout_seconds=self.scan_timeout_seconds,
            ),
            retry_policy=RetryPolicy(
                max_retries=self.file_retry_max_retries,
                initial_delay_seconds=self.file_retry_initial_delay_seconds,
                backoff_multiplier=self.file_retry_backoff_multiplier,
                max_delay_seconds=self.file_retry_max_delay_seconds,
            ),
            warm_timeout_seconds=self.warm_timeout_seconds,
            warm_concurrency=self.warm_concurrency,
        )


@lru_cache
def get_settings() -> Settings:
    """Return cached engine settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
