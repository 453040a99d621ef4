"""Tests for configuration management."""

import copy
from pathlib import Path

import pytest

from vcsoverlay import config
from vcsoverlay.config import (
    DEFAULT_CONFIG,
    ConfigError,
    OverlaySettings,
    _merge_config,
    create_default_config,
    get_overlay_settings,
    get_vcs_kind,
    load_config,
    save_config,
    save_overlay_settings,
    set_vcs_kind,
)
from vcsoverlay.kinds import VCSKind


def test_default_config_not_mutated(config_file):
    """Test that DEFAULT_CONFIG is not mutated by load_config()."""
    original_default = copy.deepcopy(DEFAULT_CONFIG)

    config1 = load_config()
    config1["vcs"]["executables"]["git"] = "/opt/git"
    config1["overlay"]["enabled"] = False

    assert DEFAULT_CONFIG == original_default, "DEFAULT_CONFIG was mutated after load_config()"
    config2 = load_config()
    assert config2["vcs"]["executables"] == {}
    assert config2["overlay"]["enabled"] is True


def test_merge_config_not_mutated():
    """Test that _merge_config doesn't mutate either input."""
    original_default = copy.deepcopy(DEFAULT_CONFIG)
    user_config = {"vcs": {"executables": {"svn": "/usr/local/bin/svn"}}}

    merged = _merge_config(DEFAULT_CONFIG, user_config)
    merged["vcs"]["executables"]["hg"] = "/usr/bin/hg"

    assert DEFAULT_CONFIG == original_default, "DEFAULT_CONFIG was mutated after _merge_config()"
    assert user_config == {"vcs": {"executables": {"svn": "/usr/local/bin/svn"}}}


def test_merge_config_preserves_user_values():
    """Test that merge preserves user-specified values."""
    default = {"a": 1, "b": {"c": 2, "d": 3}, "e": 4}
    user = {"b": {"c": 99}, "f": 5}

    merged = _merge_config(default, user)

    assert merged["b"]["c"] == 99
    assert merged["b"]["d"] == 3
    assert merged["a"] == 1
    assert merged["e"] == 4
    assert merged["f"] == 5


def test_missing_file_gives_default_settings(config_file):
    settings = get_overlay_settings()
    assert settings == OverlaySettings()
    assert settings.vcs_kind is VCSKind.SVN
    assert settings.root_marker == "Assets"


def test_save_and_load_settings(config_file):
    """Settings written once are read back on the next start."""
    settings = OverlaySettings(
        vcs_kind=VCSKind.HG,
        overlay_enabled=False,
        only_modified=True,
        timeout=2.5,
        executables={"hg": "/usr/local/bin/hg"},
    )
    save_overlay_settings(settings)

    assert config_file.exists()
    assert get_overlay_settings() == settings


def test_save_settings_replaces_executable_overrides(config_file):
    save_overlay_settings(OverlaySettings(executables={"svn": "/opt/svn"}))
    save_overlay_settings(OverlaySettings())
    assert get_overlay_settings().executables == {}


def test_save_settings_keeps_unrelated_sections(config_file):
    save_config({"custom": {"note": "kept"}})
    save_overlay_settings(OverlaySettings(vcs_kind=VCSKind.GIT))
    assert load_config()["custom"] == {"note": "kept"}


def test_vcs_kind_getter_and_setter(config_file):
    assert get_vcs_kind() is VCSKind.SVN
    set_vcs_kind(VCSKind.GIT)
    assert get_vcs_kind() is VCSKind.GIT


def test_unknown_kind_raises_config_error(config_file):
    config_file.write_text('[vcs]\nkind = "cvs"\n', encoding="utf-8")
    with pytest.raises(ConfigError):
        get_overlay_settings()


def test_invalid_timeout_raises_config_error():
    with pytest.raises(ConfigError):
        OverlaySettings.from_config({"vcs": {"timeout": "soon"}})


def test_create_default_config(config_file):
    create_default_config()
    assert config_file.exists()
    assert load_config() == DEFAULT_CONFIG


def test_config_file_creation_failure_doesnt_crash(monkeypatch):
    """Test that config save failure doesn't crash the application."""
    monkeypatch.setattr(config, "CONFIG_FILE", Path("/dev/null/invalid/path.toml"))
    # This should not raise an exception
    save_config(DEFAULT_CONFIG)


def test_corrupted_config_file_returns_defaults(config_file):
    """Test that corrupted config file returns defaults."""
    config_file.write_text("this is not valid TOML {{{")
    assert load_config() == DEFAULT_CONFIG
