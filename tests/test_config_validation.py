"""
Tests for configuration validation.

Tests that Config properly validates settings and raises appropriate errors.
"""

import pytest
import yaml
from datetime import timedelta
from staticweaver.config.settings import Config
from staticweaver.main import build_engine


class TestConfigValidation:
    """Test configuration validation logic."""

    def test_valid_default_config(self, monkeypatch):
        """Test default configuration is valid."""
        for name in ["TEMPLATE_PATH", "TEMPLATE_URL", "CACHE_TTL", "CACHE_CAPACITY",
                     "OPEN_DELIM", "CLOSE_DELIM", "DOWNLOAD_TIMEOUT", "LOG_LEVEL"]:
            monkeypatch.delenv(name, raising=False)

        config = Config()

        assert config.template_path == "templates"
        assert config.template_url is None
        assert config.open_delim == "{{"
        assert config.close_delim == "}}"
        assert config.cache_ttl == 60
        assert config.cache_capacity is None
        assert config.download_timeout == 10

    def test_environment_overrides(self, monkeypatch):
        """Test environment variables override defaults."""
        monkeypatch.setenv("CACHE_TTL", "5")
        monkeypatch.setenv("CACHE_CAPACITY", "20")
        monkeypatch.setenv("OPEN_DELIM", "<<")

        config = Config()

        assert config.cache_ttl == 5.0
        assert config.cache_capacity == 20
        assert config.open_delim == "<<"

    def test_zero_ttl_raises_error(self):
        """Test zero cache ttl raises error."""
        with pytest.raises(ValueError) as exc_info:
            Config(cache_ttl=0)

        assert "cache_ttl" in str(exc_info.value)

    def test_negative_capacity_raises_error(self):
        """Test negative cache capacity raises error."""
        with pytest.raises(ValueError) as exc_info:
            Config(cache_capacity=-1)

        assert "cache_capacity" in str(exc_info.value)

    def test_empty_delimiter_raises_error(self):
        """Test empty delimiter raises error."""
        with pytest.raises(ValueError):
            Config(open_delim="")

    def test_timeout_must_be_positive(self):
        """Test non-positive download timeout raises error."""
        with pytest.raises(ValueError) as exc_info:
            Config(download_timeout=0)

        assert "download_timeout" in str(exc_info.value)

    def test_invalid_log_level_raises_error(self):
        """Test invalid log level raises error."""
        with pytest.raises(ValueError) as exc_info:
            Config(log_level="LOUD")

        assert "Invalid log_level" in str(exc_info.value)


class TestConfigFiles:
    """Test YAML load/save."""

    def test_save_and_load_roundtrip(self, tmp_path):
        """Test saving and loading a config file."""
        path = tmp_path / "configs" / "site.yaml"
        original = Config(template_path="site", cache_ttl=30, cache_capacity=5,
                          open_delim="<%", close_delim="%>")

        original.save_to_file(path)
        loaded = Config.from_file(path)

        assert loaded.to_dict() == original.to_dict()

    def test_from_file_partial(self, tmp_path):
        """Test loading a file with only some fields."""
        path = tmp_path / "partial.yaml"
        path.write_text(yaml.safe_dump({"cache_ttl": 15}))

        assert Config.from_file(path).cache_ttl == 15

    def test_from_missing_file(self, tmp_path):
        """Test loading a missing file."""
        with pytest.raises(FileNotFoundError):
            Config.from_file(tmp_path / "missing.yaml")


class TestBuildEngine:
    """Test engine construction from configuration."""

    def test_build_engine(self, tmp_path):
        """Test building an engine from config."""
        config = Config(template_path=str(tmp_path), template_url=None, cache_ttl=30,
                        cache_capacity=3, open_delim="<<", close_delim=">>")

        engine = build_engine(config)

        assert engine.template_path == str(tmp_path)
        assert engine.render_cache.ttl == timedelta(seconds=30)
        assert engine.render_cache.capacity == 3
        assert engine.open_delim == "<<"
        assert engine.close_delim == ">>"
        assert engine.downloader.timeout == config.download_timeout
