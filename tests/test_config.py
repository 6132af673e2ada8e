#!/usr/bin/env python3
"""
Tests for environment configuration.
"""

from pathlib import Path

import pytest

from asset_browser import BrowserConfig, ConfigError


def test_defaults_with_root_only():
    config = BrowserConfig.from_env({"ASSETS_ROOT": "/srv/assets"})
    assert config.assets_root == Path("/srv/assets")
    assert config.port == 5174
    assert config.host == "127.0.0.1"
    assert config.dictionary == "asset-dictionary.json"
    assert config.stable_order is False


def test_environment_values():
    config = BrowserConfig.from_env({
        "ASSETS_ROOT": "/srv/assets",
        "PORT": "8080",
        "HOST": "0.0.0.0",
        "ASSET_STABLE_ORDER": "yes",
    })
    assert config.port == 8080
    assert config.host == "0.0.0.0"
    assert config.stable_order is True


def test_overrides_win_when_set():
    config = BrowserConfig.from_env({"ASSETS_ROOT": "/srv/assets", "PORT": "8080"},
                                    assets_root="/other", port=9000, host=None)
    assert config.assets_root == Path("/other")
    assert config.port == 9000
    assert config.host == "127.0.0.1"


def test_missing_root_raises():
    with pytest.raises(ConfigError):
        BrowserConfig.from_env({})


def test_bad_port_raises():
    with pytest.raises(ConfigError):
        BrowserConfig.from_env({"ASSETS_ROOT": "/srv", "PORT": "http"})
