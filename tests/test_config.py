"""Front-end settings loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest

from brili.config import LoggingConfig, Settings, load_settings, validate_settings


def test_defaults_without_file_or_env() -> None:
    """No file and no env yields default settings."""
    cfg = load_settings(env={})

    assert cfg == Settings()
    assert cfg.engine is None
    assert cfg.logging.level == "WARNING"
    assert cfg.logging.console_use_rich is True


def test_load_from_yaml(tmp_path: Path) -> None:
    """YAML values populate nested settings."""
    path = tmp_path / "brili.yaml"
    path.write_text(
        """
engine: my_interp.engine:Interpreter
logging:
  level: DEBUG
  console_use_rich: false
"""
    )
    cfg = load_settings(path, env={})

    assert cfg.engine == "my_interp.engine:Interpreter"
    assert cfg.logging == LoggingConfig(level="DEBUG", console_use_rich=False)


def test_config_path_from_env(tmp_path: Path) -> None:
    """BRILI_CONFIG names the settings file."""
    path = tmp_path / "brili.yaml"
    path.write_text("engine: pkg:obj\n")

    cfg = load_settings(env={"BRILI_CONFIG": str(path)})
    assert cfg.engine == "pkg:obj"


def test_env_overrides_file(tmp_path: Path) -> None:
    """BRILI_ENGINE and BRILI_LOG_LEVEL win over the file."""
    path = tmp_path / "brili.yaml"
    path.write_text("engine: pkg:obj\nlogging:\n  level: ERROR\n")

    cfg = load_settings(path, env={"BRILI_ENGINE": "other:Engine", "BRILI_LOG_LEVEL": "info"})

    assert cfg.engine == "other:Engine"
    assert cfg.logging.level == "INFO"


def test_empty_yaml_is_defaults(tmp_path: Path) -> None:
    """An empty file is the same as no file."""
    path = tmp_path / "brili.yaml"
    path.write_text("")
    assert load_settings(path, env={}) == Settings()


def test_unknown_top_level_key(tmp_path: Path) -> None:
    """Unknown keys fail fast with the key name."""
    path = tmp_path / "brili.yaml"
    path.write_text("engien: pkg:obj\n")
    with pytest.raises(ValueError, match="engien"):
        load_settings(path, env={})


def test_unknown_nested_key(tmp_path: Path) -> None:
    """Unknown nested keys are reported with their dotted path."""
    path = tmp_path / "brili.yaml"
    path.write_text("logging:\n  colour: true\n")
    with pytest.raises(ValueError, match="logging.colour"):
        load_settings(path, env={})


def test_non_mapping_yaml(tmp_path: Path) -> None:
    """The document must be a mapping."""
    path = tmp_path / "brili.yaml"
    path.write_text("- a\n- b\n")
    with pytest.raises(ValueError, match="mapping"):
        load_settings(path, env={})


def test_invalid_yaml(tmp_path: Path) -> None:
    """YAML syntax errors are reported as ValueError."""
    path = tmp_path / "brili.yaml"
    path.write_text("engine: [unclosed\n")
    with pytest.raises(ValueError, match="Invalid YAML"):
        load_settings(path, env={})


def test_missing_file(tmp_path: Path) -> None:
    """A missing settings file is reported as ValueError."""
    with pytest.raises(ValueError, match="Cannot read config file"):
        load_settings(tmp_path / "absent.yaml", env={})


def test_invalid_log_level_from_env() -> None:
    """Unknown log levels fail validation."""
    with pytest.raises(ValueError, match="logging.level"):
        load_settings(env={"BRILI_LOG_LEVEL": "LOUD"})


def test_engine_must_be_import_path() -> None:
    """An engine without a colon is rejected."""
    with pytest.raises(ValueError, match="module:attribute"):
        validate_settings(Settings(engine="just_a_module"))


def test_console_use_rich_must_be_bool() -> None:
    """Non-boolean console_use_rich values are rejected."""
    bad = Settings(logging=LoggingConfig(console_use_rich="yes"))  # type: ignore[arg-type]
    with pytest.raises(ValueError, match="console_use_rich"):
        validate_settings(bad)


def test_to_dict_is_nested() -> None:
    """to_dict mirrors the YAML layout."""
    assert Settings(engine="a:b").to_dict() == {
        "engine": "a:b",
        "logging": {"level": "WARNING", "console_use_rich": True},
    }


def test_yaml_log_level_is_case_insensitive(tmp_path: Path) -> None:
    """Lower-case levels in the file are normalized like the env override."""
    path = tmp_path / "brili.yaml"
    path.write_text("logging:\n  level: info\n")
    assert load_settings(path, env={}).logging.level == "INFO"
