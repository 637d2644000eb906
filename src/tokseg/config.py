"""Configuration system for tokseg.

Reads and writes ``tokseg.toml`` with typed dataclasses and defaults for
every value. Only the command-line inspector consumes it; the library API
takes no configuration.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeVar

import tomli_w

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from tokseg.exceptions import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

_T = TypeVar("_T")

__all__ = [
    "CONFIG_FILE",
    "UNITS",
    "OutputConfig",
    "TokSegConfig",
    "TokenizerConfig",
    "default_config",
    "load_config",
    "save_config",
]

logger = logging.getLogger(__name__)

CONFIG_FILE = "tokseg.toml"

UNITS = ("sentences", "chunks", "paragraphs")


@dataclass
class TokenizerConfig:
    """[tokenizer] section."""

    name: str = ""
    validate: bool = True


@dataclass
class OutputConfig:
    """[output] section."""

    unit: str = "sentences"
    show_spans: bool = True
    max_units: int = 0


@dataclass
class TokSegConfig:
    """Root configuration combining all sections."""

    tokenizer: TokenizerConfig = field(default_factory=TokenizerConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def default_config() -> TokSegConfig:
    """Return a config with all default values."""
    return TokSegConfig()


def _config_to_dict(config: TokSegConfig) -> dict[str, object]:
    """Convert TokSegConfig to a nested dict suitable for TOML serialization."""
    return {
        "tokenizer": dict(vars(config.tokenizer)),
        "output": dict(vars(config.output)),
    }


def save_config(config: TokSegConfig, path: Path) -> None:
    """Save configuration to a TOML file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    data = _config_to_dict(config)
    try:
        with path.open("wb") as f:
            tomli_w.dump(data, f)
        logger.info("Saved config to %s", path)
    except OSError as e:
        logger.error("Failed to save config to %s: %s", path, e)
        raise ConfigError(f"Failed to save config to {path}: {e}") from e


def _load_section(cls: type[_T], data: object) -> _T:
    """Load a dataclass section from a dict, ignoring unknown keys.

    Each value must have the same type as the field's default.
    """
    if not isinstance(data, dict):
        raise ConfigError(f"Config section for {cls.__name__} must be a table")
    fields = cls.__dataclass_fields__  # type: ignore[attr-defined]
    filtered = {}
    for key, value in data.items():
        if key not in fields:
            continue
        expected = type(fields[key].default)
        # bool is an int subclass; keep the two apart
        if not isinstance(value, expected) or isinstance(value, bool) != (expected is bool):
            raise ConfigError(
                f"Config value {cls.__name__}.{key} must be {expected.__name__}, "
                f"got {type(value).__name__}"
            )
        filtered[key] = value
    return cls(**filtered)


def _validate(config: TokSegConfig) -> None:
    if config.output.unit not in UNITS:
        raise ConfigError(
            f"Unknown output unit {config.output.unit!r}. Expected one of: {', '.join(UNITS)}"
        )
    if config.output.max_units < 0:
        raise ConfigError("output.max_units must be >= 0")


def load_config(path: Path) -> TokSegConfig:
    """Load configuration from a TOML file.

    Missing sections or keys get default values.
    """
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        raw = path.read_bytes()
        data = tomllib.loads(raw.decode("utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        logger.error("Failed to load config from %s: %s", path, e)
        raise ConfigError(f"Failed to load config from {path}: {e}") from e

    config = TokSegConfig()
    section_map: dict[str, type] = {
        "tokenizer": TokenizerConfig,
        "output": OutputConfig,
    }

    for name, cls in section_map.items():
        if name in data:
            setattr(config, name, _load_section(cls, data[name]))

    _validate(config)
    logger.info("Loaded config from %s", path)
    return config
