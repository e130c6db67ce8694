"""Configuration loading for storybook-api (.storybook-api.yml)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

CONFIG_FILENAME = ".storybook-api.yml"
DEFAULT_PORT = 6006
DEFAULT_STORYBOOK_PORT = 6010
DEFAULT_REQUEST_TIMEOUT = 10.0
YAML_SUFFIXES = (".yml", ".yaml")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ServiceConfig:
    """Settings for the API service and the Storybook it reads from."""

    project_dir: Path
    port: int = DEFAULT_PORT
    storybook_port: int = DEFAULT_STORYBOOK_PORT
    storybook_url: Optional[str] = None
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    framework: Optional[str] = None

    @property
    def resolved_storybook_url(self) -> str:
        if self.storybook_url:
            return self.storybook_url.rstrip("/")
        return f"http://localhost:{self.storybook_port}"


def load_config(
    config_path: Path, *, project_dir: Optional[Path] = None
) -> ServiceConfig:
    """Load configuration from disk, falling back to defaults when absent.

    ``config_path`` may be a directory, a YAML file (loaded as given) or any
    other file, whose sibling ``.storybook-api.yml`` is used. The project
    directory defaults to ``project_dir`` when given, else the config file's
    directory. A ``project_dir`` key in the file wins and is resolved relative
    to the file.
    """
    config_file = _resolve_config_path(Path(config_path))
    base = config_file.parent.resolve()
    default_root = Path(project_dir).expanduser().resolve() if project_dir else base

    if not config_file.exists():
        return ServiceConfig(project_dir=default_root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    project_dir_str = _as_str(data.get("project_dir"))
    root = (base / project_dir_str).resolve() if project_dir_str else default_root

    storybook_data = _as_dict(data.get("storybook"))

    return ServiceConfig(
        project_dir=root,
        port=_as_int(data.get("port")) or DEFAULT_PORT,
        storybook_port=_as_int(storybook_data.get("port")) or DEFAULT_STORYBOOK_PORT,
        storybook_url=_as_str(storybook_data.get("url")),
        request_timeout=_as_float(storybook_data.get("request_timeout"))
        or DEFAULT_REQUEST_TIMEOUT,
        framework=_as_str(data.get("framework")),
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.suffix.lower() not in YAML_SUFFIXES:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


__all__ = ["CONFIG_FILENAME", "ConfigError", "ServiceConfig", "load_config"]
