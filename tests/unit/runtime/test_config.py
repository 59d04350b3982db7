"""Unit tests for configuration loading and the context manager."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from src.booktracker.runtime.config.config_data import (
    ConfigData,
    DatabaseConfig,
    ViewModelConfig,
)
from src.booktracker.runtime.config.config_template import (
    load_templated_yaml,
    substitute_env_vars,
)
from src.booktracker.runtime.context import (
    AppContext,
    get_config,
    get_context,
    with_context,
)


class TestSubstituteEnvVars:
    """Test cases for substitute_env_vars function."""

    def test_substitute_simple_env_var(self):
        with patch.dict(os.environ, {"TEST_VAR": "test_value"}):
            assert substitute_env_vars("${TEST_VAR}") == "test_value"

    def test_substitute_env_var_with_default(self):
        with patch.dict(os.environ, {}, clear=True):
            assert substitute_env_vars("${MISSING_VAR:-default_value}") == "default_value"

    def test_substitute_required_env_var_missing(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="MISSING_VAR"):
                substitute_env_vars("${MISSING_VAR}")

    def test_substitute_env_var_with_custom_error(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="database is required"):
                substitute_env_vars("${DB:?database is required}")

    def test_substitute_default_with_url(self):
        with patch.dict(os.environ, {}, clear=True):
            result = substitute_env_vars("url: ${DATABASE_URL:-sqlite:///./books.db}")
            assert result == "url: sqlite:///./books.db"


class TestLoadTemplatedYaml:
    """Test loading config.yaml files."""

    def test_load_templated_yaml_success(self, tmp_path: Path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "config:\n"
            "  database:\n"
            "    url: ${TEST_DB_URL:-sqlite://}\n"
            "  view_model:\n"
            "    stop_timeout_ms: 250\n"
        )

        with patch.dict(os.environ, {"TEST_DB_URL": "sqlite:///./other.db"}):
            config = load_templated_yaml(config_file)

        assert config.database.url == "sqlite:///./other.db"
        assert config.view_model.stop_timeout_ms == 250
        assert config.logging.level == "INFO"

    def test_environment_prefixed_overrides(self, tmp_path: Path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("config:\n  database:\n    url: ${BOOKS_DB:-sqlite://}\n")

        env = {"APP_ENVIRONMENT": "test", "TEST_BOOKS_DB": "sqlite:///./test.db"}
        with patch.dict(os.environ, env, clear=True):
            config = load_templated_yaml(config_file)

        assert config.database.url == "sqlite:///./test.db"

    def test_load_templated_yaml_empty_file(self, tmp_path: Path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")

        with pytest.raises(ValueError, match="Failed to parse YAML"):
            load_templated_yaml(config_file)

    def test_load_templated_yaml_invalid_config_structure(self, tmp_path: Path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("config:\n  view_model:\n    stop_timeout_ms: -5\n")

        with pytest.raises(ValueError, match="Invalid configuration"):
            load_templated_yaml(config_file)

    def test_load_templated_yaml_file_not_found(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_templated_yaml(tmp_path / "missing.yaml")


class TestDatabaseConfig:
    """Test derived database settings."""

    @pytest.mark.parametrize(
        ("url", "is_memory"),
        [
            ("sqlite://", True),
            ("sqlite:///:memory:", True),
            ("sqlite:///./books.db", False),
            ("postgresql://user@localhost/books", False),
        ],
    )
    def test_is_memory(self, url: str, is_memory: bool):
        assert DatabaseConfig(url=url).is_memory is is_memory


class TestContextManager:
    """Test the context manager functionality."""

    def test_default_context_available(self):
        context = get_context()

        assert isinstance(context, AppContext)
        assert isinstance(get_config(), ConfigData)

    def test_with_context_partial_override(self):
        original_config = get_config()
        original_timeout = original_config.view_model.stop_timeout_ms

        override = ConfigData(database=DatabaseConfig(url="sqlite://"))
        with with_context(override):
            config = get_config()
            assert config.database.url == "sqlite://"
            assert config.view_model.stop_timeout_ms == original_timeout

        assert get_config() is original_config

    def test_with_context_nested_overrides(self):
        with with_context(ConfigData(database=DatabaseConfig(url="sqlite://"))):
            with with_context(ConfigData(view_model=ViewModelConfig(stop_timeout_ms=10))):
                config = get_config()
                assert config.database.url == "sqlite://"
                assert config.view_model.stop_timeout_ms == 10

    def test_with_context_none_is_noop(self):
        original_config = get_config()
        with with_context(None):
            assert get_config() is original_config

    def test_with_context_rejects_other_types(self):
        with pytest.raises(ValueError):
            with with_context({"database": {"url": "sqlite://"}}):
                pass
