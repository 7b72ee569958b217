#!/usr/bin/env python3
"""Tests for configuration loading and lookup."""

import pytest

from sqlup.core.config import ConfigLoader, ConfigurationError, get_config, load_config, set_config


@pytest.fixture
def config_file(tmp_path):
    def _write(content: str, name: str = "sqlup.jsonc"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


class TestDefaults:
    def test_empty_file_gives_defaults(self, config_file, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        config = ConfigLoader(config_file("{}"))
        assert config.default_dialect == "ansi"
        assert config.blacklist == frozenset()
        assert config.get_extra_keywords("postgres") == []
        assert config.log_level == "WARNING"

    def test_no_config_anywhere(self, tmp_path, monkeypatch):
        empty = tmp_path / "empty"
        empty.mkdir()
        monkeypatch.chdir(empty)
        monkeypatch.setenv("HOME", str(tmp_path / "home"))
        config = ConfigLoader()
        assert config.config_file is None
        assert config.default_dialect == "ansi"

    def test_merge_keeps_sibling_defaults(self, config_file):
        config = ConfigLoader(config_file('{"keywords": {"blacklist": ["User"]}}'))
        assert config.blacklist == frozenset({"user"})
        assert config.get("keywords.extra") == {}


class TestParsing:
    def test_jsonc_comments(self, config_file):
        content = """
        // sqlup settings
        {
            // always postgres here
            "dialect": {"default": "Postgres"}
        }
        """
        assert ConfigLoader(config_file(content)).default_dialect == "postgres"

    def test_malformed_json(self, config_file):
        with pytest.raises(ConfigurationError):
            ConfigLoader(config_file("{not json"))

    def test_non_object(self, config_file):
        with pytest.raises(ConfigurationError):
            ConfigLoader(config_file("[1, 2]"))

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            ConfigLoader(tmp_path / "missing.json")


class TestDiscovery:
    def test_environment_path(self, config_file, monkeypatch):
        path = config_file('{"dialect": {"default": "oracle"}}', name="elsewhere.json")
        monkeypatch.setenv("SQLUP_CONFIG", str(path))
        config = ConfigLoader()
        assert config.config_file == str(path)
        assert config.default_dialect == "oracle"

    def test_working_directory_file(self, tmp_path, monkeypatch):
        (tmp_path / "sqlup.json").write_text('{"dialect": {"default": "sqlite"}}', encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        assert ConfigLoader().default_dialect == "sqlite"

    def test_global_instance(self, config_file):
        config = load_config(config_file("{}"))
        set_config(config)
        assert get_config() is config


class TestLookup:
    def test_dotted_get_and_set(self, config_file):
        config = ConfigLoader(config_file("{}"))
        config.set("keywords.extra.postgres", ["foo"])
        assert config.get("keywords.extra.postgres") == ["foo"]
        assert config.get_extra_keywords("postgres") == ["foo"]
        assert config.get("no.such.key", "fallback") == "fallback"
        assert config["dialect"] == {"default": "ansi"}

    def test_environment_overrides(self, config_file, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        config = ConfigLoader(config_file('{"dialect": {"default": "mysql"}, "logging": {"level": "info"}}'))
        assert config.default_dialect == "mysql"
        assert config.log_level == "INFO"
        monkeypatch.setenv("SQLUP_DIALECT", " MS ")
        monkeypatch.setenv("LOG_LEVEL", "error")
        assert config.default_dialect == "ms"
        assert config.log_level == "ERROR"

    def test_eval_keywords(self, config_file):
        config = ConfigLoader(config_file('{"eval_keywords": {"postgres": ["run("]}}'))
        assert config.get_eval_keywords("postgres") == ["run("]
        assert config.get_eval_keywords("mysql") == []
