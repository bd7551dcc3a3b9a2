# SPDX-License-Identifier: Apache-2.0

"""Front-end settings for brili.

These are the knobs that are *not* part of a single invocation: which engine
to drive and how to log. Per-run intent lives in `brili.invocation`.

Sources, lowest precedence first:
- dataclass defaults
- a YAML file named by ``$BRILI_CONFIG``
- ``$BRILI_ENGINE`` and ``$BRILI_LOG_LEVEL``

The loader is strict: unknown keys or invalid values fail fast with a message
naming the offending key.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Literal

import yaml

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]

CONFIG_ENV = "BRILI_CONFIG"
ENGINE_ENV = "BRILI_ENGINE"
LOG_LEVEL_ENV = "BRILI_LOG_LEVEL"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True)
class LoggingConfig:
    """Console logging configuration."""

    level: LogLevel = "WARNING"
    console_use_rich: bool = True


@dataclass(frozen=True)
class Settings:
    """Top-level front-end settings.

    `engine` is an import path like ``"my_interp.engine:Interpreter"``.
    """

    engine: str | None = None
    logging: LoggingConfig = LoggingConfig()

    def to_dict(self) -> dict[str, Any]:
        """Convert settings to a nested dictionary.

        :return dict[str, Any]: Nested dict of all fields.
        """
        return asdict(self)


# ------------------------------ Loading ---------------------------------


def _build(cls: type, data: Mapping[str, Any], prefix: str) -> Any:
    """Construct dataclass `cls` from `data`, rejecting unknown keys.

    :param type cls: Dataclass to build.
    :param Mapping data: Raw mapping from YAML.
    :param str prefix: Dotted key prefix used in error messages.
    :raises ValueError: If `data` is not a mapping or has unknown keys.
    :return Any: Instance of `cls`.
    """
    if not isinstance(data, Mapping):
        raise ValueError(f"{prefix.rstrip('.')} must be a mapping, got {type(data).__name__}")
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        keys = ", ".join(f"{prefix}{k}" for k in unknown)
        raise ValueError(f"Unknown config key(s): {keys}")
    return cls(**data)


def _from_nested_dict(data: Any) -> Settings:
    """Convert a nested dict into Settings dataclasses.

    :param Any data: Nested dictionary from YAML parsing.
    :raises ValueError: If the document or a section is not a mapping.
    :return Settings: Constructed settings.
    """
    if not isinstance(data, Mapping):
        raise ValueError(f"config must be a mapping, got {type(data).__name__}")
    data = dict(data)
    logging_cfg = _build(LoggingConfig, data.pop("logging", None) or {}, "logging.")
    return _build(Settings, {**data, "logging": logging_cfg}, "")


def load_settings(
    path: str | Path | None = None, env: Mapping[str, str] | None = None
) -> Settings:
    """Load settings from YAML + environment overrides.

    :param path: YAML file; defaults to ``$BRILI_CONFIG`` when set.
    :param env: Environment mapping (default: os.environ).
    :raises ValueError: If the file is malformed or a value is invalid.
    :return Settings: Validated settings.
    """
    env = os.environ if env is None else env
    if path is None:
        path = env.get(CONFIG_ENV) or None

    data: Any = {}
    if path is not None:
        path = Path(path)
        try:
            with path.open("r") as f:
                data = yaml.safe_load(f) or {}
        except OSError as e:
            raise ValueError(f"Cannot read config file {path}: {e.strerror or e}") from e
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file {path}: {e}") from e

    cfg = _from_nested_dict(data)

    if env.get(ENGINE_ENV):
        cfg = replace(cfg, engine=env[ENGINE_ENV].strip())
    level = env.get(LOG_LEVEL_ENV) or cfg.logging.level
    if isinstance(level, str):
        level = level.strip().upper()
        cfg = replace(cfg, logging=replace(cfg.logging, level=level))  # type: ignore[arg-type]

    validate_settings(cfg)
    return cfg


# ------------------------------ Validation ---------------------------------


def _vfail(msg: str) -> None:
    """Raise ValueError with a standardized config validation prefix.

    :param str msg: Validation failure message.
    :raises ValueError: Always raised with formatted message.
    """
    raise ValueError(f"Config validation failed: {msg}")


def validate_settings(cfg: Settings) -> None:
    """Validate settings with actionable error messages."""
    if cfg.engine is not None:
        if not isinstance(cfg.engine, str) or not cfg.engine.strip():
            _vfail("engine must be a non-empty 'module:attribute' string or null")
        elif ":" not in cfg.engine:
            _vfail(f"engine must look like 'module:attribute', got {cfg.engine!r}")
    if cfg.logging.level not in _LOG_LEVELS:
        _vfail(f"logging.level must be one of {list(_LOG_LEVELS)}, got {cfg.logging.level!r}")
    if not isinstance(cfg.logging.console_use_rich, bool):
        _vfail(
            "logging.console_use_rich must be a boolean, "
            f"got {cfg.logging.console_use_rich!r}"
        )
