"""Configuration loading for reporeadme (.reporeadme.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

CONFIG_FILENAME = ".reporeadme.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class GeneratorConfig:
    """Completion endpoint settings."""

    model: Optional[str] = None
    base_url: Optional[str] = None
    api_key: Optional[str] = None
    max_retries: Optional[int] = None
    base_delay: Optional[float] = None
    request_timeout: Optional[float] = None


@dataclass
class GitHubConfig:
    """GitHub REST API settings."""

    api_base: Optional[str] = None
    branch: Optional[str] = None
    request_timeout: Optional[float] = None


@dataclass
class ReadmeGenConfig:
    """Represents the settings defined in .reporeadme.yml."""

    root: Path
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    github: GitHubConfig = field(default_factory=GitHubConfig)


def load_config(config_path: Path) -> ReadmeGenConfig:
    """Load configuration from disk, returning defaults when the file is absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ReadmeGenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    generator_data = _as_dict(data.get("generator"))
    generator = GeneratorConfig(
        model=_as_str(generator_data.get("model")),
        base_url=_as_str(generator_data.get("base_url")),
        api_key=_as_str(generator_data.get("api_key")),
        max_retries=_as_int(generator_data.get("max_retries")),
        base_delay=_as_float(generator_data.get("base_delay")),
        request_timeout=_as_float(generator_data.get("request_timeout")),
    )

    github_data = _as_dict(data.get("github"))
    github = GitHubConfig(
        api_base=_as_str(github_data.get("api_base")),
        branch=_as_str(github_data.get("branch")),
        request_timeout=_as_float(github_data.get("request_timeout")),
    )

    return ReadmeGenConfig(root=root, generator=generator, github=github)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
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
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


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
