"""Tests for configuration module."""
import pytest
import yaml
from finmood.config import Config, load_config, get_config
from finmood.utils.errors import ConfigurationError


def test_config_load(temp_config_file):
    """Test basic config loading."""
    config = Config(temp_config_file)
    assert config.app_name == 'Test App'
    assert config.app_version == '0.1.0'
    assert config.debug is True


def test_config_get_nested(temp_config_file):
    """Test getting nested config values."""
    config = Config(temp_config_file)
    assert config.get('analytics.health.window_days') == 14
    assert config.get('logging.format') == 'text'


def test_config_get_default(temp_config_file):
    """Test default values."""
    config = Config(temp_config_file)
    assert config.get('nonexistent.key', 'default') == 'default'


def test_config_missing_file():
    """Test error on missing config file."""
    with pytest.raises(ConfigurationError):
        Config('nonexistent.yaml')


def test_config_missing_section(tmp_path):
    """Test error when a required section is absent."""
    path = tmp_path / "config.yaml"
    path.write_text(yaml.dump({'app': {'name': 'x'}}))

    with pytest.raises(ConfigurationError, match="database"):
        Config(str(path))


def test_config_empty_file(tmp_path):
    """Test error on an empty config file."""
    path = tmp_path / "config.yaml"
    path.write_text("")

    with pytest.raises(ConfigurationError):
        Config(str(path))


def test_database_url_env_override(temp_config_file, monkeypatch):
    """Test FINMOOD_DATABASE_URL takes precedence over the file."""
    monkeypatch.delenv('FINMOOD_DATABASE_URL', raising=False)
    config = Config(temp_config_file)
    assert config.database_url == 'sqlite:///:memory:'

    monkeypatch.setenv('FINMOOD_DATABASE_URL', 'sqlite:///other.db')
    assert config.database_url == 'sqlite:///other.db'


def test_global_config(temp_config_file):
    """Test global config lifecycle."""
    with pytest.raises(ConfigurationError):
        get_config()

    config = load_config(temp_config_file)
    assert get_config() is config


def test_debug_env_override(temp_config_file, monkeypatch):
    """Test FINMOOD_DEBUG overrides app.debug."""
    config = Config(temp_config_file)
    monkeypatch.setenv('FINMOOD_DEBUG', 'no')
    assert config.debug is False

    monkeypatch.setenv('FINMOOD_DEBUG', 'TRUE')
    assert config.debug is True


def test_analytics_section(temp_config_file):
    """Test the analytics section is parsed over coded defaults."""
    config = Config(temp_config_file)
    assert config.analytics.health.window_days == 14
    assert config.analytics.health.neutral_score == 50
    assert config.analytics.recommendations.stress_count_threshold == 2
    assert config.analytics is config.analytics


def test_config_non_mapping_analytics(tmp_path):
    """Test a malformed analytics section is rejected."""
    path = tmp_path / "config.yaml"
    path.write_text(yaml.dump({'app': {}, 'database': {}, 'analytics': [1, 2]}))

    with pytest.raises(ConfigurationError, match="analytics"):
        Config(str(path))
