from __future__ import annotations

from pathlib import Path

import pytest

from userservice.config import Settings, load_config_file, load_settings


def test_defaults_without_environment() -> None:
    settings = load_settings({})

    assert settings.port == 3000
    assert settings.host == "0.0.0.0"
    assert settings.log_level == "INFO"
    assert settings.cors_origins == ["*"]


def test_environment_overrides_defaults() -> None:
    settings = load_settings(
        {
            "PORT": "8080",
            "HOST": "127.0.0.1",
            "LOG_LEVEL": "debug",
            "CORS_ORIGINS": "http://a.example, http://b.example",
        }
    )

    assert settings.port == 8080
    assert settings.host == "127.0.0.1"
    assert settings.log_level == "DEBUG"
    assert settings.cors_origins == ["http://a.example", "http://b.example"]


def test_empty_port_falls_back_to_default() -> None:
    assert load_settings({"PORT": ""}).port == 3000


@pytest.mark.parametrize("value", ["abc", "0", "70000", "-1"])
def test_invalid_port_is_rejected(value: str) -> None:
    with pytest.raises(ValueError):
        load_settings({"PORT": value})


def test_yaml_file_is_loaded_and_environment_wins(tmp_path: Path) -> None:
    config_path = tmp_path / "userservice.yaml"
    config_path.write_text(
        "port: 4000\nhost: 127.0.0.1\ncors_origins:\n  - http://ui.example\n",
        encoding="utf-8",
    )

    from_file = load_settings({"USERSERVICE_CONFIG": str(config_path)})
    assert from_file.port == 4000
    assert from_file.host == "127.0.0.1"
    assert from_file.cors_origins == ["http://ui.example"]

    overridden = load_settings({"USERSERVICE_CONFIG": str(config_path), "PORT": "5000"})
    assert overridden.port == 5000
    assert overridden.host == "127.0.0.1"


def test_explicit_missing_config_file_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="not found"):
        load_settings({"USERSERVICE_CONFIG": str(tmp_path / "missing.yaml")})


def test_unknown_yaml_keys_are_rejected(tmp_path: Path) -> None:
    config_path = tmp_path / "userservice.yaml"
    config_path.write_text("port: 4000\ndatabase: users.db\n", encoding="utf-8")

    with pytest.raises(ValueError, match="database"):
        load_config_file(config_path)


def test_yaml_must_be_a_mapping(tmp_path: Path) -> None:
    config_path = tmp_path / "userservice.yaml"
    config_path.write_text("- 4000\n", encoding="utf-8")

    with pytest.raises(ValueError):
        load_config_file(config_path)


def test_empty_yaml_file_yields_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "userservice.yaml"
    config_path.write_text("", encoding="utf-8")

    assert load_config_file(config_path) == Settings()
