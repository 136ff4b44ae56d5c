"""Environment configuration for the harness.

Settings are read once per process from ``<config_dir>/<env>.yaml`` and may be
overridden by ``E2E_*`` environment variables. The resulting
:class:`HarnessSettings` is frozen and shared read-only by every scenario.
"""

import os
from pathlib import Path
from typing import Any, Literal, Mapping

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from e2e_harness.core.logging import ErrorIds, logError, logForDebugging

DEFAULT_ENV = "dev"
DEFAULT_CONFIG_DIR = Path("config")

BrowserName = Literal["chromium", "firefox", "webkit"]


class ConfigurationError(ValueError):
    """Raised when the harness configuration is missing or invalid."""


class BrowserSettings(BaseModel):
    """Browser launch options.

    Attributes:
        name: Playwright browser type.
        channel: Optional branded channel ("chrome", "msedge") for chromium.
        headless: Launch without a visible window.
        viewport_width: Viewport width in pixels.
        viewport_height: Viewport height in pixels.
    """

    model_config = ConfigDict(frozen=True)

    name: BrowserName = "chromium"
    channel: str | None = None
    headless: bool = True
    viewport_width: int = 1366
    viewport_height: int = 768


class TimeoutSettings(BaseModel):
    """The three named timeout tiers plus polling and page-load limits (seconds)."""

    model_config = ConfigDict(frozen=True)

    default_seconds: float = 15.0
    quick_seconds: float = 5.0
    extended_seconds: float = 30.0
    poll_interval_seconds: float = 0.5
    page_load_seconds: float = 60.0

    @field_validator(
        "default_seconds",
        "quick_seconds",
        "extended_seconds",
        "poll_interval_seconds",
        "page_load_seconds",
    )
    @classmethod
    def must_be_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"must be positive, got {v}")
        return v

    @model_validator(mode="after")
    def tiers_must_be_ordered(self) -> "TimeoutSettings":
        if not self.quick_seconds <= self.default_seconds <= self.extended_seconds:
            raise ValueError(
                "timeout tiers must satisfy quick <= default <= extended, got "
                f"{self.quick_seconds} / {self.default_seconds} / {self.extended_seconds}"
            )
        return self


class EvidenceSettings(BaseModel):
    """Where and when failure evidence is written."""

    model_config = ConfigDict(frozen=True)

    directory: Path = Path("build/evidence")
    screenshot_on_failure: bool = True
    keep_days: int = 7


class NavigationSettings(BaseModel):
    """Retry policy for top-level navigation."""

    model_config = ConfigDict(frozen=True)

    retries: int = 3
    backoff_seconds: float = 2.0

    @field_validator("retries")
    @classmethod
    def at_least_one_attempt(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"must be at least 1, got {v}")
        return v


class HarnessSettings(BaseModel):
    """Process-wide configuration for one environment."""

    model_config = ConfigDict(frozen=True)

    environment: str = DEFAULT_ENV
    base_url: str
    api_url: str
    browser: BrowserSettings = BrowserSettings()
    timeouts: TimeoutSettings = TimeoutSettings()
    evidence: EvidenceSettings = EvidenceSettings()
    navigation: NavigationSettings = NavigationSettings()

    @field_validator("base_url", "api_url")
    @classmethod
    def must_be_http_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"must be an http(s) URL, got {v!r}")
        return v.rstrip("/")


# Environment variable -> (section, key); section None means top level.
_ENV_OVERRIDES: dict[str, tuple[str | None, str]] = {
    "E2E_BASE_URL": (None, "base_url"),
    "E2E_API_URL": (None, "api_url"),
    "E2E_BROWSER": ("browser", "name"),
    "E2E_HEADLESS": ("browser", "headless"),
    "E2E_DEFAULT_TIMEOUT": ("timeouts", "default_seconds"),
    "E2E_QUICK_TIMEOUT": ("timeouts", "quick_seconds"),
    "E2E_EXTENDED_TIMEOUT": ("timeouts", "extended_seconds"),
}


def apply_env_overrides(raw: dict[str, Any], environ: Mapping[str, str]) -> dict[str, Any]:
    """Return a copy of ``raw`` with ``E2E_*`` variables applied on top."""
    merged: dict[str, Any] = {
        key: dict(value) if isinstance(value, dict) else value for key, value in raw.items()
    }
    for env_name, (section, key) in _ENV_OVERRIDES.items():
        if env_name not in environ:
            continue
        value = environ[env_name]
        if section is None:
            merged[key] = value
        else:
            merged.setdefault(section, {})[key] = value
        logForDebugging(f"Config override from {env_name}", extra={"key": key})
    return merged


def load_settings(
    env: str | None = None,
    config_dir: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> HarnessSettings:
    """Load the settings for one environment.

    Args:
        env: Environment name; falls back to ``E2E_ENV`` then "dev".
        config_dir: Directory holding ``<env>.yaml``; falls back to
                    ``E2E_CONFIG_DIR`` then ``./config``.
        environ: Mapping used for overrides (defaults to ``os.environ``).

    Returns:
        The validated, frozen HarnessSettings.

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid.
    """
    environ = os.environ if environ is None else environ
    env = env or environ.get("E2E_ENV") or DEFAULT_ENV
    directory = Path(config_dir or environ.get("E2E_CONFIG_DIR") or DEFAULT_CONFIG_DIR)
    path = directory / f"{env}.yaml"

    if not path.is_file():
        logError(ErrorIds.CONFIG_MISSING, f"Config file not found: {path}")
        raise ConfigurationError(f"Config file not found: {path}")

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        logError(ErrorIds.CONFIG_INVALID, f"Config file is not valid YAML: {path}")
        raise ConfigurationError(f"Config file is not valid YAML: {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigurationError(f"Config file must contain a mapping: {path}")

    raw.setdefault("environment", env)
    merged = apply_env_overrides(raw, environ)

    try:
        settings = HarnessSettings.model_validate(merged)
    except ValidationError as e:
        logError(ErrorIds.CONFIG_INVALID, f"Configuration validation failed for {path}")
        raise ConfigurationError(f"Configuration validation failed for {path}: {e}") from e

    logForDebugging(f"Loaded {settings.environment} environment", level="info", extra={"file": path})
    return settings


def describe_settings(settings: HarnessSettings) -> list[tuple[str, str]]:
    """Flatten settings into (label, value) rows for printing."""
    browser = settings.browser
    timeouts = settings.timeouts
    return [
        ("Environment", settings.environment),
        ("Base URL", settings.base_url),
        ("API URL", settings.api_url),
        ("Browser", browser.name + (f" ({browser.channel})" if browser.channel else "")),
        ("Headless", str(browser.headless)),
        ("Viewport", f"{browser.viewport_width}x{browser.viewport_height}"),
        (
            "Timeouts",
            f"quick {timeouts.quick_seconds:g}s / default {timeouts.default_seconds:g}s"
            f" / extended {timeouts.extended_seconds:g}s",
        ),
        ("Poll interval", f"{timeouts.poll_interval_seconds:g}s"),
        ("Screenshot on failure", str(settings.evidence.screenshot_on_failure)),
        ("Evidence directory", str(settings.evidence.directory)),
    ]
