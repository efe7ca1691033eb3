"""
Unit tests for configuration loading.
"""

import pytest
from pydantic import ValidationError

from leadminer.config import Config, FetchConfig, MonitoringConfig, find_config_file
from leadminer.config.config import LazyConfig
from leadminer.errors import ConfigurationError


@pytest.mark.unit
class TestFetchConfig:
    """Test cases for FetchConfig."""

    def test_defaults(self):
        config = FetchConfig()
        assert config.timeout == 15.0
        assert config.contact_timeout == 10.0
        assert config.contact_page_delay == 0.2
        assert config.max_contact_pages == 3
        assert config.accept_language == "cs,en;q=0.9"
        assert config.follow_redirects is True
        assert "Mozilla/5.0" in config.user_agent

    @pytest.mark.parametrize(
        "field,value",
        [("max_contact_pages", 11), ("max_contact_pages", -1), ("timeout", -1.0), ("contact_page_delay", -0.1)],
    )
    def test_out_of_range_values(self, field, value):
        with pytest.raises(ValidationError):
            FetchConfig(**{field: value})

    def test_empty_user_agent(self):
        with pytest.raises(ValidationError):
            FetchConfig(user_agent="   ")


@pytest.mark.unit
class TestMonitoringConfig:
    """Test cases for MonitoringConfig."""

    def test_log_level_is_upper_cased(self):
        assert MonitoringConfig(log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level(self):
        with pytest.raises(ValidationError):
            MonitoringConfig(log_level="chatty")

    def test_log_file_parent_is_created(self, tmp_path):
        log_file = tmp_path / "logs" / "leadminer.log"
        config = MonitoringConfig(log_file=log_file)
        assert config.log_file == str(log_file)
        assert log_file.parent.is_dir()


@pytest.mark.unit
class TestConfig:
    """Test cases for the root Config."""

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("LEADMINER_FETCH__TIMEOUT", "5")
        monkeypatch.setenv("LEADMINER_MONITORING__LOG_LEVEL", "warning")
        config = Config()
        assert config.fetch.timeout == 5.0
        assert config.monitoring.log_level == "WARNING"

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "leadminer.yaml"
        path.write_text("fetch:\n  max_contact_pages: 5\n  contact_page_delay: 0\n", encoding="utf-8")
        config = Config.from_yaml(path)
        assert config.fetch.max_contact_pages == 5
        assert config.fetch.contact_page_delay == 0
        assert config.fetch.timeout == 15.0

    def test_from_empty_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")
        assert Config.from_yaml(path).fetch == FetchConfig()

    def test_missing_yaml(self, tmp_path):
        with pytest.raises(ConfigurationError):
            Config.from_yaml(tmp_path / "missing.yaml")

    def test_invalid_yaml_values(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("fetch:\n  max_contact_pages: 50\n", encoding="utf-8")
        with pytest.raises(ValidationError):
            Config.from_yaml(path)

    def test_find_config_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert find_config_file() is None
        (tmp_path / "config.yml").write_text("{}", encoding="utf-8")
        assert find_config_file() == tmp_path / "config.yml"


@pytest.mark.unit
class TestLazySettings:
    """Test the lazily loaded module level settings."""

    def test_loads_config_file_on_first_access(self, tmp_path, monkeypatch):
        monkeypatch.setattr(LazyConfig, "_config", None)
        monkeypatch.chdir(tmp_path)
        (tmp_path / "leadminer.yaml").write_text("fetch:\n  max_contact_pages: 2\n", encoding="utf-8")
        assert LazyConfig().fetch.max_contact_pages == 2

    def test_invalid_file_falls_back_to_defaults(self, tmp_path, monkeypatch):
        monkeypatch.setattr(LazyConfig, "_config", None)
        monkeypatch.chdir(tmp_path)
        (tmp_path / "config.yaml").write_text("fetch:\n  timeout: -5\n", encoding="utf-8")
        assert LazyConfig().fetch.timeout == 15.0
