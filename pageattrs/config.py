"""Process-wide settings and logging setup.

Settings are resolved from (lowest to highest precedence):

    defaults → YAML file → ``PAGEATTRS_*`` environment variables → keyword overrides

Usage::

    from pageattrs.config import configure, get_settings

    configure(image_strategy="ranked", min_image_width=300)
    settings = get_settings()

A :class:`~pageattrs.page.Page` snapshots the current settings when it is
constructed, so later calls to :func:`configure` never affect a page that is
already resolving attributes.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"

ENV_PREFIX = "PAGEATTRS_"


class Settings(BaseModel):
    """Read-only extraction settings."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    # Ranked image strategy
    min_image_width: int = Field(default=100, ge=0)
    min_image_height: int = Field(default=100, ge=0)
    image_strategy: Literal["reader", "ranked"] = "reader"

    # SoundCloud resolve lookup (the only outbound call)
    soundcloud_client_id: str | None = None
    lookup_timeout: int = Field(default=10, gt=0)

    # Logging sink
    log_level: str = "WARNING"
    log_file: str | None = None

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("soundcloud_client_id", "log_file", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


def _from_yaml(path: str | Path) -> dict[str, Any]:
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        return {}
    # Accept either a flat mapping or one nested under "pageattrs:"
    nested = data.get("pageattrs")
    return dict(nested) if isinstance(nested, dict) else dict(data)


def _from_env(environ: dict[str, str] | None = None) -> dict[str, Any]:
    env = os.environ if environ is None else environ
    values: dict[str, Any] = {}
    for name in Settings.model_fields:
        raw = env.get(ENV_PREFIX + name.upper())
        if raw is not None:
            values[name] = raw
    return values


def load_settings(
    path: str | Path | None = None,
    environ: dict[str, str] | None = None,
    **overrides: Any,
) -> Settings:
    """Build a :class:`Settings` from a YAML file, the environment and *overrides*."""
    merged: dict[str, Any] = {}
    if path is not None:
        merged.update(_from_yaml(path))
    merged.update(_from_env(environ))
    merged.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**merged)


# ---------------------------------------------------------------------------
# Process-wide instance
# ---------------------------------------------------------------------------

_settings: Settings = Settings()


def get_settings() -> Settings:
    """Return the currently installed settings."""
    return _settings


def configure(path: str | Path | None = None, **overrides: Any) -> Settings:
    """Install new process-wide settings and return them."""
    global _settings
    _settings = load_settings(path, **overrides)
    return _settings


def reset_settings() -> None:
    """Restore default settings. Primarily for use in tests."""
    global _settings
    _settings = Settings()


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

def configure_logging(settings: Settings | None = None) -> logging.Logger:
    """Attach a single handler to the ``pageattrs`` logger.

    Calling this more than once replaces the previously installed handler
    rather than stacking duplicates.
    """
    settings = settings or get_settings()
    root = logging.getLogger("pageattrs")

    for handler in list(root.handlers):
        if getattr(handler, "_pageattrs_handler", False):
            root.removeHandler(handler)
            handler.close()

    handler: logging.Handler
    if settings.log_file:
        handler = logging.FileHandler(settings.log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._pageattrs_handler = True  # type: ignore[attr-defined]

    root.addHandler(handler)
    root.setLevel(getattr(logging, settings.log_level, logging.WARNING))
    return root
