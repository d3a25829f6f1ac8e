from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from .errors import ConfigError
from .greeter import DEFAULT_GREETING_PREFIX, DEFAULT_PROMPT
from .lines import DEFAULT_ENCODING

logger = logging.getLogger(__name__)

__all__ = [
    "CONFIG_ENV_VAR",
    "ConfigOverrides",
    "DEFAULT_CONFIG_NAME",
    "MISSING_SOURCE_POLICIES",
    "Settings",
    "load_config",
    "resolve_config_path",
]

DEFAULT_CONFIG_NAME = "linegreet.toml"
CONFIG_ENV_VAR = "LINEGREET_CONFIG"
SOURCE_ENV_VAR = "LINEGREET_SOURCE"
ENCODING_ENV_VAR = "LINEGREET_ENCODING"

MISSING_SOURCE_POLICIES = ("abort", "skip")


@dataclass(frozen=True)
class Settings:
    source: Path = Path("input.txt")
    encoding: str = DEFAULT_ENCODING
    prompt: str = DEFAULT_PROMPT
    greeting_prefix: str = DEFAULT_GREETING_PREFIX
    on_missing_source: str = "abort"

    @property
    def skip_missing_source(self) -> bool:
        return self.on_missing_source == "skip"


@dataclass(frozen=True)
class ConfigOverrides:
    source: Path | None = None
    encoding: str | None = None
    skip_missing: bool = False


_STRING_KEYS = ("source", "encoding", "prompt", "greeting_prefix", "on_missing_source")


def resolve_config_path(override: str | None, cwd: Path | None = None) -> tuple[Path, bool]:
    """Locate the config file.

    Returns:
        Tuple of (path, explicit). ``explicit`` is True when the path came from
        the command line or the environment, in which case it must exist.
    """
    if override:
        return Path(override).expanduser().resolve(), True
    if env_path := os.environ.get(CONFIG_ENV_VAR):
        return Path(env_path).expanduser().resolve(), True
    return (cwd or Path.cwd()) / DEFAULT_CONFIG_NAME, False


def load_config(
    path: Path,
    *,
    explicit: bool = False,
    overrides: ConfigOverrides | None = None,
) -> Settings:
    """Build settings from defaults, the config file, env vars and overrides.

    Precedence is override > env > file > default.

    Raises:
        ConfigError: If the file is unreadable or holds invalid values, or if an
            explicit path does not exist.
    """
    settings = Settings()

    if path.exists():
        settings = _apply_file(settings, path)
        logger.debug("config_loaded", extra={"config_file": path.name})
    elif explicit:
        raise ConfigError(f"Config not found: {path.name}")

    if env_source := os.environ.get(SOURCE_ENV_VAR):
        settings = replace(settings, source=Path(env_source).expanduser())
    if env_encoding := os.environ.get(ENCODING_ENV_VAR):
        settings = replace(settings, encoding=env_encoding)

    if overrides:
        if overrides.source is not None:
            settings = replace(settings, source=overrides.source.expanduser())
        if overrides.encoding:
            settings = replace(settings, encoding=overrides.encoding)
        if overrides.skip_missing:
            settings = replace(settings, on_missing_source="skip")

    return settings


def _apply_file(settings: Settings, path: Path) -> Settings:
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path.name}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read config {path.name}: {type(exc).__name__}") from exc

    section = data.get("linegreet", {})
    if not isinstance(section, Mapping):
        raise ConfigError(f"[linegreet] in {path.name} must be a table")
    values = _parse_section(section, path.name)

    if "source" in values:
        source = Path(values["source"]).expanduser()
        if not source.is_absolute():
            source = path.parent / source
        values["source"] = source
    return replace(settings, **values)


def _parse_section(section: Mapping[str, Any], file_name: str) -> dict[str, Any]:
    unknown = sorted(set(section) - set(_STRING_KEYS))
    if unknown:
        raise ConfigError(f"Unknown keys in {file_name}: {', '.join(unknown)}")

    values: dict[str, Any] = {}
    for key in _STRING_KEYS:
        if key not in section:
            continue
        value = section[key]
        if not isinstance(value, str):
            raise ConfigError(f"{key} in {file_name} must be a string")
        values[key] = value

    if "source" in values and not values["source"]:
        raise ConfigError(f"source in {file_name} must not be empty")
    policy = values.get("on_missing_source")
    if policy is not None and policy not in MISSING_SOURCE_POLICIES:
        allowed = ", ".join(MISSING_SOURCE_POLICIES)
        raise ConfigError(f"on_missing_source must be one of: {allowed}")
    return values

