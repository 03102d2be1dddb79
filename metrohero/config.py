"""Configuration loader for the MetroHero CLI."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Any

from dotenv import load_dotenv
import yaml

from metrohero.data.client import API_KEY_ENV_VAR, DEFAULT_TIMEOUT_SECONDS, METROHERO_API_BASE


@dataclass(frozen=True)
class MetroHeroConfig:
    """MetroHero API configuration."""

    api_key: str
    base_url: str = METROHERO_API_BASE
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    include_scheduled_predictions: bool = True


@dataclass(frozen=True)
class DisplayConfig:
    """Console output configuration."""

    max_departures: int = 3
    max_next_trains: int = 4
    color: bool = True


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str = "WARNING"
    log_dir: str | None = None


@dataclass(frozen=True)
class AppConfig:
    """Top-level application configuration."""

    metrohero: MetroHeroConfig
    display: DisplayConfig
    log: LoggingConfig


def _section(mapping: dict[str, Any], key: str) -> dict[str, Any]:
    section = mapping.get(key)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ValueError(f"'{key}' config must be a mapping")
    return section


def _typed_key(
    mapping: dict[str, Any], key: str, expected: type | tuple[type, ...], default: Any, context: str
) -> Any:
    if key not in mapping:
        return default
    value = mapping[key]
    expected_types = expected if isinstance(expected, tuple) else (expected,)
    # bool is an int subclass
    if not isinstance(value, expected_types) or (isinstance(value, bool) and bool not in expected_types):
        raise ValueError(f"Invalid value for '{key}' in {context} config: {value!r}")
    return value


def _positive_key(
    mapping: dict[str, Any], key: str, expected: type | tuple[type, ...], default: Any, context: str
) -> Any:
    value = _typed_key(mapping, key, expected, default, context)
    if value <= 0:
        raise ValueError(f"'{key}' in {context} config must be positive: {value!r}")
    return value


def load_config(path: str | None = None) -> AppConfig:
    """Load configuration from an optional YAML file; the API key comes from the environment."""
    load_dotenv()
    api_key = os.environ.get(API_KEY_ENV_VAR, "").strip()

    data: dict[str, Any] = {}
    if path is not None:
        try:
            with open(path, "r", encoding="utf-8") as handle:
                data = yaml.safe_load(handle)
        except FileNotFoundError as exc:
            raise ValueError(f"Config file not found: {path}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the top level")

    api_section = _section(data, "metrohero")
    display_section = _section(data, "display")
    logging_section = _section(data, "logging")

    metrohero = MetroHeroConfig(
        api_key=api_key,
        base_url=_typed_key(api_section, "base_url", str, METROHERO_API_BASE, "metrohero"),
        timeout_seconds=_positive_key(
            api_section, "timeout_seconds", (int, float), DEFAULT_TIMEOUT_SECONDS, "metrohero"
        ),
        include_scheduled_predictions=_typed_key(
            api_section, "include_scheduled_predictions", bool, True, "metrohero"
        ),
    )

    display = DisplayConfig(
        max_departures=_positive_key(display_section, "max_departures", int, 3, "display"),
        max_next_trains=_positive_key(display_section, "max_next_trains", int, 4, "display"),
        color=_typed_key(display_section, "color", bool, True, "display"),
    )

    logging = LoggingConfig(
        level=_typed_key(logging_section, "level", str, "WARNING", "logging").upper(),
        log_dir=_typed_key(logging_section, "log_dir", (str, type(None)), None, "logging"),
    )

    return AppConfig(metrohero=metrohero, display=display, log=logging)


__all__ = ["MetroHeroConfig", "DisplayConfig", "LoggingConfig", "AppConfig", "load_config"]
