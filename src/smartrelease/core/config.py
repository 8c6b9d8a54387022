"""Configuration for the smartrelease service."""

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path
import os

import yaml


_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def parse_bool(value: str) -> bool | None:
    """Parse a boolean flag, returning None if it isn't one."""
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    return None


def _coerce(value, default):
    """Coerce a raw value to the type of its default, or return the default."""
    if isinstance(default, bool):
        if isinstance(value, bool):
            return value
        parsed = parse_bool(str(value))
        return default if parsed is None else parsed
    try:
        return type(default)(value)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class SmartReleaseConfig:
    """Process-wide settings, read once at startup."""

    enable_regex: bool = False
    max_pattern_len: int = 70  # -1 disables the length check
    enable_custom_hosts: bool = False
    https_only: bool = True
    host: str = "0.0.0.0"
    port: int = 8080
    connect_timeout: float = 3.0
    total_timeout: float = 5.0

    @classmethod
    def from_mapping(cls, values: Mapping, base: "SmartReleaseConfig | None" = None) -> "SmartReleaseConfig":
        """Build a config from lower-case keys, ignoring unknown ones."""
        base = base or cls()
        changes = {}
        for f in fields(cls):
            if f.name in values and values[f.name] is not None:
                changes[f.name] = _coerce(values[f.name], getattr(base, f.name))
        return replace(base, **changes)

    @classmethod
    def from_env(
        cls, environ: Mapping[str, str] | None = None, base: "SmartReleaseConfig | None" = None
    ) -> "SmartReleaseConfig":
        """Create config from environment variables (upper-case field names)."""
        environ = os.environ if environ is None else environ
        values = {
            f.name: environ[f.name.upper()]
            for f in fields(cls)
            if f.name.upper() in environ
        }
        return cls.from_mapping(values, base)

    @classmethod
    def from_file(cls, path: Path) -> "SmartReleaseConfig":
        """Create config from a YAML file."""
        with open(path) as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid config file {path}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        return cls.from_mapping(data)

    @classmethod
    def load(cls, path: Path | None = None, environ: Mapping[str, str] | None = None) -> "SmartReleaseConfig":
        """Load file settings (if any), then apply environment overrides."""
        base = cls.from_file(path) if path else cls()
        return cls.from_env(environ, base=base)
