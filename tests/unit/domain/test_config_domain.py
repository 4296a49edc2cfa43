from __future__ import annotations

"""
Unit tests for Configuration Domain Management.

Verifies default fallbacks, persistence round trip, environment token
override and projection onto the GitHub client settings.
"""

import json
import os
from unittest.mock import patch

import pytest

from prgraph.domain.config import (
    GithubClientConfig,
    get_default_config,
    load_config,
    save_config,
    to_client_config,
)


def test_load_config_missing_file_returns_defaults(tmp_path):
    with patch.dict(os.environ, {}, clear=True):
        config = load_config(str(tmp_path / "missing.json"))
    assert config == get_default_config()


def test_save_then_load(tmp_path):
    path = str(tmp_path / "nested" / "config.json")
    config = get_default_config()
    config["compress"] = False
    config["api_token"] = "stored"

    save_config(config, path)
    with open(path, "r", encoding="utf-8") as f:
        assert json.load(f)["version"]

    with patch.dict(os.environ, {}, clear=True):
        loaded = load_config(path)
    assert loaded["compress"] is False
    assert loaded["api_token"] == "stored"


def test_corrupted_file_falls_back(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    with patch.dict(os.environ, {}, clear=True):
        assert load_config(str(path)) == get_default_config()


@pytest.mark.parametrize("payload", [{"settings": 5}, {"settings": ["compress"]}, [1, 2]])
def test_malformed_settings_fall_back(tmp_path, payload):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    with patch.dict(os.environ, {}, clear=True):
        assert load_config(str(path)) == get_default_config()


def test_unknown_keys_ignored(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"settings": {"bogus": 1, "per_page": 50}}), encoding="utf-8")
    with patch.dict(os.environ, {}, clear=True):
        config = load_config(str(path))
    assert "bogus" not in config
    assert config["per_page"] == 50


def test_environment_token_overrides(tmp_path):
    with patch.dict(os.environ, {"GITHUB_API_KEY": "from-env"}):
        config = load_config(str(tmp_path / "missing.json"))
    assert config["api_token"] == "from-env"


def test_to_client_config():
    config = get_default_config()
    config.update({"api_token": "t", "request_timeout": 3, "per_page": 20, "api_base": "https://x/"})
    assert to_client_config(config) == GithubClientConfig(
        api_token="t", api_base="https://x", timeout=3.0, per_page=20
    )
