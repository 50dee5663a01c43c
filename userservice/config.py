"""Configuration management for the user directory service."""
from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, List, Mapping, Optional

import yaml

DEFAULT_PORT = 3000
DEFAULT_HOST = "0.0.0.0"
DEFAULT_LOG_LEVEL = "INFO"

_KNOWN_KEYS = {"host", "port", "log_level", "cors_origins"}


def _parse_port(value: object) -> int:
    try:
        port = int(str(value).strip())
    except ValueError as exc:
        raise ValueError(f"Invalid port value: {value!r}") from exc
    if not 0 < port < 65536:
        raise ValueError(f"Port must be between 1 and 65535, got {port}")
    return port


def _parse_origins(value: object) -> List[str]:
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, list):
        items = [str(item) for item in value]
    else:
        raise ValueError("cors_origins must be a list or a comma-separated string")
    origins = [item.strip() for item in items if item.strip()]
    if not origins:
        raise ValueError("cors_origins must contain at least one origin")
    return origins


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the HTTP service."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    @staticmethod
    def from_dict(data: Mapping[str, object]) -> "Settings":
        """Create :class:`Settings` from raw mapping data, e.g. a parsed YAML file."""
        unknown = set(data.keys()) - _KNOWN_KEYS
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

        return Settings().with_overrides(data)

    def with_overrides(self, data: Mapping[str, object]) -> "Settings":
        changes: Dict[str, object] = {}
        if data.get("host") is not None:
            changes["host"] = str(data["host"]).strip() or DEFAULT_HOST
        if data.get("port") is not None:
            changes["port"] = _parse_port(data["port"])
        if data.get("log_level") is not None:
            changes["log_level"] = str(data["log_level"]).strip().upper() or DEFAULT_LOG_LEVEL
        if data.get("cors_origins") is not None:
            changes["cors_origins"] = _parse_origins(data["cors_origins"])
        return replace(self, **changes)


def resolve_config_path(env_value: Optional[str]) -> Path:
    """Resolve the path to the optional YAML configuration file."""
    if env_value:
        return Path(env_value).expanduser().resolve(strict=False)
    return (Path(__file__).resolve().parent.parent / "config" / "userservice.yaml").resolve(strict=False)


def load_config_file(config_path: Path) -> Settings:
    """Load settings from a YAML file."""
    with config_path.open("r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}

    if not isinstance(raw, dict):
        raise ValueError("Configuration file must contain a mapping of settings")
    return Settings.from_dict(raw)


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Resolve settings from defaults, the optional YAML file and the environment."""
    env = os.environ if environ is None else environ

    explicit_path = env.get("USERSERVICE_CONFIG")
    config_path = resolve_config_path(explicit_path)
    if config_path.exists():
        settings = load_config_file(config_path)
    elif explicit_path:
        raise ValueError(f"Configuration file not found: {config_path}")
    else:
        settings = Settings()

    return settings.with_overrides(
        {
            "host": env.get("HOST") or None,
            "port": env.get("PORT") or None,
            "log_level": env.get("LOG_LEVEL") or None,
            "cors_origins": env.get("CORS_ORIGINS") or None,
        }
    )


__all__ = ["Settings", "load_config_file", "load_settings", "resolve_config_path"]
