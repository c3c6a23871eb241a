"""Configuration system for docrender.

Manages render configuration via a TOML file with typed dataclasses and
sensible defaults for all values.
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

from docrender.exceptions import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

_T = TypeVar("_T")

__all__ = [
    "CONFIG_FILE",
    "DocrenderConfig",
    "HtmlConfig",
    "JsonConfig",
    "PluginConfig",
    "ProjectConfig",
    "default_config",
    "load_config",
    "save_config",
]

logger = logging.getLogger(__name__)

CONFIG_FILE = "docrender.toml"


@dataclass
class ProjectConfig:
    """[project] section."""

    name: str = ""
    version: str = ""


@dataclass
class HtmlConfig:
    """[html] section. Empty ``out`` disables the html renderer."""

    out: str = ""
    title: str = ""
    templates: str = ""
    clean_output_dir: bool = True


@dataclass
class JsonConfig:
    """[json] section. Empty ``out`` disables the json renderer."""

    out: str = ""
    pretty: bool = True


@dataclass
class PluginConfig:
    """[plugins] section."""

    modules: list[str] = field(default_factory=list)
    entry_points: bool = True


@dataclass
class DocrenderConfig:
    """Root configuration combining all sections."""

    project: ProjectConfig = field(default_factory=ProjectConfig)
    html: HtmlConfig = field(default_factory=HtmlConfig)
    json: JsonConfig = field(default_factory=JsonConfig)
    plugins: PluginConfig = field(default_factory=PluginConfig)


_SECTIONS: dict[str, type] = {
    "project": ProjectConfig,
    "html": HtmlConfig,
    "json": JsonConfig,
    "plugins": PluginConfig,
}


def default_config() -> DocrenderConfig:
    """Return a config with all default values."""
    return DocrenderConfig()


def _config_to_dict(config: DocrenderConfig) -> dict[str, object]:
    """Convert DocrenderConfig to a nested dict suitable for TOML serialization."""
    return {name: dict(vars(getattr(config, name))) for name in _SECTIONS}


def save_config(config: DocrenderConfig, path: Path) -> None:
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


def _load_section(cls: type[_T], data: object, name: str) -> _T:
    """Load a dataclass section from a dict, ignoring unknown keys."""
    if not isinstance(data, dict):
        raise ConfigError(f"Config section [{name}] must be a table")
    known_fields = {f.name for f in cls.__dataclass_fields__.values()}  # type: ignore[attr-defined]
    filtered = {k: v for k, v in data.items() if k in known_fields}
    return cls(**filtered)


def load_config(path: Path) -> DocrenderConfig:
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

    config = DocrenderConfig()
    for name, cls in _SECTIONS.items():
        if name in data:
            setattr(config, name, _load_section(cls, data[name], name))

    logger.info("Loaded config from %s", path)
    return config
