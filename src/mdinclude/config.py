from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import Any

import yaml

from mdinclude.render import RenderMode

# Accepted spellings for each configuration key
_KEY_ALIASES = {
    "root_boundary": "root_boundary",
    "rootBoundary": "root_boundary",
    "mode": "mode",
    "warn": "warn",
}


class ConfigError(ValueError):
    """Invalid or unreadable include configuration."""


@dataclass(frozen=True)
class IncludeConfig:
    """Settings for one resolution run."""

    root_boundary: Path
    mode: RenderMode = RenderMode.FLAT
    warn: bool = True

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], base_dir: str | Path) -> "IncludeConfig":
        """
        Build a configuration from a plain mapping.

        Args:
            data: Mapping with ``root_boundary`` (or ``rootBoundary``), ``mode``
                and ``warn`` keys, all optional.
            base_dir: Directory a relative or missing root boundary resolves against.

        Returns:
            The validated configuration.

        Raises:
            ConfigError: On unknown keys, an unknown mode, a root boundary that
                is not a path, or a warn value that is not a boolean.
        """
        values: dict[str, Any] = {}
        for key, value in data.items():
            if key not in _KEY_ALIASES:
                msg = f"Unknown configuration key: {key}"
                raise ConfigError(msg)
            values[_KEY_ALIASES[key]] = value

        base = Path(base_dir)
        raw_boundary = values.get("root_boundary")
        if raw_boundary is None:
            boundary = base
        elif isinstance(raw_boundary, (str, PurePath)):
            boundary = Path(raw_boundary)
        else:
            msg = f"root_boundary must be a path, got {raw_boundary!r}"
            raise ConfigError(msg)
        if not boundary.is_absolute():
            boundary = base / boundary

        try:
            mode = RenderMode(values.get("mode", RenderMode.FLAT))
        except ValueError:
            choices = ", ".join(m.value for m in RenderMode)
            msg = f"Unknown mode {values['mode']!r}, expected one of: {choices}"
            raise ConfigError(msg) from None

        warn = values.get("warn", True)
        # YAML gives real booleans for true/false; quoted strings are rejected
        if not isinstance(warn, bool):
            msg = f"warn must be true or false, got {warn!r}"
            raise ConfigError(msg)

        return cls(root_boundary=boundary, mode=mode, warn=warn)


def load_config(path: str | Path) -> IncludeConfig:
    """
    Load configuration from a YAML file.

    A relative ``root_boundary`` is taken relative to the file's directory,
    and a missing one defaults to that directory.

    Args:
        path: Path to the YAML file.

    Returns:
        The loaded configuration.

    Raises:
        ConfigError: If the file cannot be read or parsed, or is not a mapping.
    """
    config_path = Path(path)
    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except OSError as exc:
        msg = f"Cannot read config file {config_path}: {exc}"
        raise ConfigError(msg) from exc
    except yaml.YAMLError as exc:
        msg = f"Invalid YAML in {config_path}: {exc}"
        raise ConfigError(msg) from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        msg = f"Config file {config_path} must contain a mapping"
        raise ConfigError(msg)
    return IncludeConfig.from_mapping(data, config_path.parent)
