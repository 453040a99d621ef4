"""Configuration file management for vcs-overlay."""

from __future__ import annotations

import copy
import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import tomli_w

from vcsoverlay.kinds import VCSKind
from vcsoverlay.process import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

# Default configuration file location
CONFIG_FILE = Path.home() / ".vcsoverlay.toml"

# Default configuration
DEFAULT_CONFIG: Dict[str, Any] = {
    "vcs": {
        "kind": VCSKind.SVN.value,
        "timeout": DEFAULT_TIMEOUT,
        # Format: {"git": "/usr/local/bin/git"}
        "executables": {},
        "gui_tools": {},
    },
    "overlay": {
        "enabled": True,
        "only_modified": False,
    },
    "project": {
        "root_marker": "Assets",
    },
}


class ConfigError(Exception):
    """Raised when stored settings cannot be interpreted."""


@dataclass
class OverlaySettings:
    vcs_kind: VCSKind = VCSKind.SVN
    overlay_enabled: bool = True
    only_modified: bool = False
    root_marker: str = "Assets"
    timeout: float = DEFAULT_TIMEOUT
    executables: Dict[str, str] = field(default_factory=dict)
    gui_tools: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "OverlaySettings":
        """Build settings from a (merged) configuration dictionary."""
        vcs = config.get("vcs", {})
        overlay = config.get("overlay", {})
        project = config.get("project", {})
        try:
            kind = VCSKind.from_name(str(vcs.get("kind", VCSKind.SVN.value)))
        except ValueError as err:
            raise ConfigError(str(err)) from err
        try:
            timeout = float(vcs.get("timeout", DEFAULT_TIMEOUT))
        except (TypeError, ValueError) as err:
            raise ConfigError(f"Invalid timeout: {vcs.get('timeout')!r}") from err
        return cls(
            vcs_kind=kind,
            overlay_enabled=bool(overlay.get("enabled", True)),
            only_modified=bool(overlay.get("only_modified", False)),
            root_marker=str(project.get("root_marker", "Assets")),
            timeout=timeout,
            executables=dict(vcs.get("executables", {})),
            gui_tools=dict(vcs.get("gui_tools", {})),
        )

    def to_config(self) -> Dict[str, Any]:
        return {
            "vcs": {
                "kind": self.vcs_kind.value,
                "timeout": self.timeout,
                "executables": dict(self.executables),
                "gui_tools": dict(self.gui_tools),
            },
            "overlay": {
                "enabled": self.overlay_enabled,
                "only_modified": self.only_modified,
            },
            "project": {
                "root_marker": self.root_marker,
            },
        }


def load_config() -> Dict[str, Any]:
    """Load configuration from file or return defaults."""
    if not CONFIG_FILE.exists():
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        with open(CONFIG_FILE, "rb") as f:
            config = tomllib.load(f)
        # Merge with defaults to ensure all keys exist
        return _merge_config(DEFAULT_CONFIG, config)
    except (OSError, ValueError) as err:
        logger.warning("Ignoring unreadable configuration %s: %s", CONFIG_FILE, err)
        return copy.deepcopy(DEFAULT_CONFIG)


def save_config(config: Dict[str, Any]) -> None:
    """Save configuration to file."""
    try:
        CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
        with open(CONFIG_FILE, "wb") as f:
            tomli_w.dump(config, f)
    except (OSError, TypeError, ValueError) as err:
        # Don't break the host if the save fails, but say so
        logger.warning("Failed to save configuration to %s: %s", CONFIG_FILE, err)


def _merge_config(default: Dict[str, Any], user: Dict[str, Any]) -> Dict[str, Any]:
    """Merge user config with defaults, preserving user values."""
    result = copy.deepcopy(default)
    for key, value in user.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _merge_config(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def create_default_config() -> None:
    """Create default configuration file if it doesn't exist."""
    if CONFIG_FILE.exists():
        return

    save_config(DEFAULT_CONFIG)


def get_overlay_settings() -> OverlaySettings:
    """Read the settings once; callers re-read after a settings change."""
    return OverlaySettings.from_config(load_config())


def save_overlay_settings(settings: OverlaySettings) -> None:
    config = load_config()
    for section, values in settings.to_config().items():
        config[section] = {**config.get(section, {}), **values}
    save_config(config)


def get_vcs_kind() -> VCSKind:
    return get_overlay_settings().vcs_kind


def set_vcs_kind(kind: VCSKind) -> None:
    config = load_config()
    config.setdefault("vcs", {})["kind"] = kind.value
    save_config(config)


__all__ = [
    "CONFIG_FILE",
    "DEFAULT_CONFIG",
    "ConfigError",
    "OverlaySettings",
    "load_config",
    "save_config",
    "create_default_config",
    "get_overlay_settings",
    "save_overlay_settings",
    "get_vcs_kind",
    "set_vcs_kind",
]
