"""Tests for YAML configuration loading and precedence."""

import logging
from unittest.mock import patch

import pytest

import constants
from constants import Constants, _load_yaml_config, apply_config

_TUNABLES = [
    "REGISTRY_URL_NPM",
    "REGISTRY_TOKEN",
    "REQUEST_TIMEOUT",
    "HTTP_RETRY_MAX",
    "INSTALL_TIMEOUT",
    "PACKAGE_MANAGER",
]


@pytest.fixture(autouse=True)
def restore_constants(monkeypatch):
    for attr in _TUNABLES:
        monkeypatch.setattr(Constants, attr, getattr(Constants, attr))
    monkeypatch.delenv(Constants.ENV_REGISTRY, raising=False)
    monkeypatch.delenv(Constants.ENV_TOKEN, raising=False)
    monkeypatch.delenv(Constants.ENV_CONFIG, raising=False)


class TestLoadYamlConfig:
    """Tests for _load_yaml_config()."""

    def test_explicit_path(self, tmp_path):
        cfg_file = tmp_path / "peerdeps.yml"
        cfg_file.write_text("registry:\n  url: https://npm.internal/\n")
        assert _load_yaml_config(str(cfg_file)) == {"registry": {"url": "https://npm.internal/"}}

    def test_missing_explicit_path_warns(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING):
            assert _load_yaml_config(str(tmp_path / "nope.yml")) == {}
        assert "Config file not found" in caplog.text

    def test_malformed_yaml_returns_empty(self, tmp_path, caplog):
        cfg_file = tmp_path / "bad.yml"
        cfg_file.write_text("registry: [unclosed\n")
        with caplog.at_level(logging.WARNING):
            assert _load_yaml_config(str(cfg_file)) == {}
        assert "Failed to load config" in caplog.text

    def test_non_mapping_returns_empty(self, tmp_path):
        cfg_file = tmp_path / "list.yml"
        cfg_file.write_text("- a\n- b\n")
        assert _load_yaml_config(str(cfg_file)) == {}

    def test_env_path_used_by_default(self, tmp_path, monkeypatch):
        cfg_file = tmp_path / "env.yml"
        cfg_file.write_text("install:\n  timeout: 12\n")
        monkeypatch.setenv(Constants.ENV_CONFIG, str(cfg_file))
        assert _load_yaml_config() == {"install": {"timeout": 12}}

    def test_no_config_anywhere(self, tmp_path):
        with patch.object(constants, "_default_config_paths", return_value=[str(tmp_path / "x.yml")]):
            assert _load_yaml_config() == {}


class TestApplyConfig:
    """Tests for apply_config()."""

    def test_applies_known_keys(self):
        apply_config({
            "registry": {"url": "https://npm.internal/", "token": "abc"},
            "http": {"timeout": 5, "retries": 0},
            "install": {"timeout": 120, "package_manager": "YARN"},
        })
        assert Constants.REGISTRY_URL_NPM == "https://npm.internal/"
        assert Constants.REGISTRY_TOKEN == "abc"
        assert Constants.REQUEST_TIMEOUT == 5.0
        assert Constants.HTTP_RETRY_MAX == 1
        assert Constants.INSTALL_TIMEOUT == 120.0
        assert Constants.PACKAGE_MANAGER == "yarn"

    def test_unsupported_manager_ignored(self):
        apply_config({"install": {"package_manager": "pnpm"}})
        assert Constants.PACKAGE_MANAGER is None

    def test_environment_overrides_file(self, monkeypatch):
        monkeypatch.setenv(Constants.ENV_REGISTRY, "https://env.example.com/")
        monkeypatch.setenv(Constants.ENV_TOKEN, " envtok ")
        apply_config({"registry": {"url": "https://file.example.com/", "token": "filetok"}})
        assert Constants.REGISTRY_URL_NPM == "https://env.example.com/"
        assert Constants.REGISTRY_TOKEN == "envtok"

    def test_non_numeric_values_ignored(self, caplog):
        with caplog.at_level(logging.WARNING):
            apply_config({
                "http": {"timeout": "fast", "retries": "many"},
                "install": {"timeout": [1, 2]},
            })
        assert Constants.REQUEST_TIMEOUT == 30
        assert Constants.HTTP_RETRY_MAX == 3
        assert Constants.INSTALL_TIMEOUT is None
        assert "Ignoring invalid http.timeout" in caplog.text
        assert "Ignoring invalid http.retries" in caplog.text
        assert "Ignoring invalid install.timeout" in caplog.text

    def test_non_positive_install_timeout_ignored(self):
        apply_config({"install": {"timeout": 0}})
        assert Constants.INSTALL_TIMEOUT is None

    def test_bad_value_in_file_does_not_break_loading(self, tmp_path):
        cfg_file = tmp_path / "peerdeps.yml"
        cfg_file.write_text("http:\n  timeout: fast\nregistry:\n  url: https://npm.internal/\n")
        apply_config(_load_yaml_config(str(cfg_file)))
        assert Constants.REQUEST_TIMEOUT == 30
        assert Constants.REGISTRY_URL_NPM == "https://npm.internal/"

    def test_empty_config_keeps_defaults(self):
        apply_config({})
        assert Constants.REGISTRY_URL_NPM == "https://registry.npmjs.org/"
        assert Constants.INSTALL_TIMEOUT is None
