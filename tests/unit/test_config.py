"""
Unit tests for bootstrap/config.py
"""

import json
import logging

from propgraph.bootstrap.config import (
    EngineConfig,
    LoggingConfig,
    PropgraphConfig,
    get_config,
    load_config,
)


class TestEngineConfig:
    """Test EngineConfig."""

    def test_defaults(self):
        config = EngineConfig()
        assert config.snapshot_on_dispatch_error is True
        assert config.allow_undeclared_requirements is False
        assert config.max_workers == 4

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("PROPGRAPH_DISPATCH_SNAPSHOT", "false")
        monkeypatch.setenv("PROPGRAPH_ALLOW_UNDECLARED", "TRUE")
        monkeypatch.setenv("PROPGRAPH_MAX_WORKERS", "8")

        config = EngineConfig.from_env()
        assert config.snapshot_on_dispatch_error is False
        assert config.allow_undeclared_requirements is True
        assert config.max_workers == 8


class TestLoggingConfig:
    """Test LoggingConfig."""

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("PROPGRAPH_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("PROPGRAPH_LOG_FILE", "/tmp/propgraph.log")
        monkeypatch.setenv("PROPGRAPH_JSON_LOGS", "true")

        config = LoggingConfig.from_env()
        assert config.level == "DEBUG"
        assert config.log_file == "/tmp/propgraph.log"
        assert config.json_logs is True


class TestPropgraphConfig:
    """Test root configuration loading."""

    def test_from_env_defaults(self):
        config = PropgraphConfig.from_env()
        assert config.environment == "development"
        assert config.debug is False
        assert config.engine == EngineConfig()

    def test_from_file(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({
            "environment": "production",
            "engine": {"max_workers": 2, "snapshot_on_dispatch_error": False},
            "logging": {"level": "WARNING"},
        }))

        config = PropgraphConfig.from_file(str(path))
        assert config.environment == "production"
        assert config.engine.max_workers == 2
        assert config.engine.snapshot_on_dispatch_error is False
        assert config.logging.level == "WARNING"

    def test_file_overrides_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PROPGRAPH_MAX_WORKERS", "16")
        monkeypatch.setenv("PROPGRAPH_ALLOW_UNDECLARED", "true")
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"engine": {"max_workers": 2}}))

        config = PropgraphConfig.from_file(str(path))
        assert config.engine.max_workers == 2
        assert config.engine.allow_undeclared_requirements is True

    def test_missing_file_falls_back(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING, logger="propgraph.bootstrap.config"):
            config = PropgraphConfig.from_file(str(tmp_path / "absent.json"))
        assert config.engine == EngineConfig()
        assert "Config file not found" in caplog.text

    def test_unknown_key_ignored(self, tmp_path, caplog):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"engine": {"turbo": True}}))

        with caplog.at_level(logging.WARNING, logger="propgraph.bootstrap.config"):
            config = PropgraphConfig.from_file(str(path))
        assert not hasattr(config.engine, "turbo")
        assert "engine.turbo" in caplog.text

    def test_null_section_ignored(self, tmp_path):
        """Test a section set to null keeps the environment values."""
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"engine": None, "logging": None, "debug": True}))

        config = PropgraphConfig.from_file(str(path))
        assert config.engine == EngineConfig()
        assert config.logging.level == "INFO"
        assert config.debug is True

    def test_to_dict(self):
        data = PropgraphConfig().to_dict()
        assert data["engine"] == {
            "snapshot_on_dispatch_error": True,
            "allow_undeclared_requirements": False,
            "max_workers": 4,
        }
        assert data["logging"]["level"] == "INFO"


class TestGlobalConfig:
    """Test load_config and get_config."""

    def test_default_file_discovered(self, tmp_path):
        """Test ./propgraph.json is picked up from the working directory."""
        (tmp_path / "propgraph.json").write_text(json.dumps({"environment": "staging"}))
        assert load_config().environment == "staging"

    def test_config_directory(self, tmp_path):
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "propgraph.json").write_text(json.dumps({"debug": True}))
        assert load_config().debug is True

    def test_home_directory(self, tmp_path):
        (tmp_path / ".propgraph").mkdir()
        (tmp_path / ".propgraph" / "config.json").write_text(json.dumps({"environment": "home"}))
        assert load_config().environment == "home"

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"environment": "custom"}))
        assert load_config(str(path)).environment == "custom"
        assert get_config().environment == "custom"

    def test_get_config_cached(self):
        assert get_config() is get_config()
