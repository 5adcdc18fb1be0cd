"""Unit tests for server configuration module."""

import os

import pytest

from unmarkdown_mcp.config import (
    ServerConfig,
    _parse_timeout,
    _validate_log_level,
    create_argument_parser,
    load_config,
    load_config_from_args,
    load_config_from_env,
)
from unmarkdown_mcp.constants import DEFAULT_BASE_URL


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every UNMARKDOWN_* variable from the environment."""
    for key in list(os.environ.keys()):
        if key.startswith("UNMARKDOWN_"):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch


@pytest.mark.unit
class TestHelperFunctions:
    """Tests for configuration helper functions."""

    def test_log_level_normalized(self):
        assert _validate_log_level(" debug ") == "DEBUG"
        assert _validate_log_level(None) == "INFO"

    def test_log_level_invalid(self):
        with pytest.raises(ValueError, match="Invalid log level"):
            _validate_log_level("chatty")

    def test_parse_timeout(self):
        assert _parse_timeout("12.5") == 12.5
        assert _parse_timeout(None) == 30.0
        assert _parse_timeout("  ") == 30.0

    def test_parse_timeout_invalid(self):
        with pytest.raises(ValueError, match="Invalid timeout"):
            _parse_timeout("soon")


@pytest.mark.unit
class TestServerConfig:
    """Tests for ServerConfig dataclass."""

    def test_config_defaults(self):
        config = ServerConfig()
        assert config.api_key is None
        assert config.base_url == DEFAULT_BASE_URL
        assert config.timeout == 30.0
        assert config.log_level == "INFO"
        assert config.log_file is None

    def test_trailing_slash_stripped(self):
        assert ServerConfig(base_url="https://api.example.com//").base_url == "https://api.example.com"
        config = ServerConfig().create_updated(base_url="https://other.example.com/")
        assert config.base_url == "https://other.example.com"

    def test_immutable(self):
        config = ServerConfig(api_key="k")
        with pytest.raises(AttributeError):
            config.api_key = "other"  # type: ignore[misc]

    def test_repr_masks_api_key(self):
        assert "secret" not in repr(ServerConfig(api_key="secret"))

    def test_validate_requires_api_key(self):
        with pytest.raises(ValueError, match="UNMARKDOWN_API_KEY environment variable is required"):
            ServerConfig().validate()

    def test_validate_rejects_bad_url(self):
        with pytest.raises(ValueError, match="Invalid API URL"):
            ServerConfig(api_key="k", base_url="ftp://files.example.com").validate()

    def test_validate_rejects_non_positive_timeout(self):
        with pytest.raises(ValueError, match="Invalid timeout"):
            ServerConfig(api_key="k", timeout=0).validate()

    def test_validate_ok(self):
        ServerConfig(api_key="k", base_url="http://localhost:8787").validate()


@pytest.mark.unit
class TestLoadConfig:
    """Tests for loading configuration from environment and CLI."""

    def test_load_from_env_defaults(self, clean_env):
        config = load_config_from_env()
        assert config == ServerConfig()

    def test_load_from_env_vars(self, clean_env):
        clean_env.setenv("UNMARKDOWN_API_KEY", "um_123")
        clean_env.setenv("UNMARKDOWN_API_URL", "https://staging.example.com/")
        clean_env.setenv("UNMARKDOWN_MCP_TIMEOUT", "5")
        clean_env.setenv("UNMARKDOWN_MCP_LOG_LEVEL", "warning")
        clean_env.setenv("UNMARKDOWN_MCP_LOG_FILE", "/tmp/unmarkdown.log")

        config = load_config_from_env()

        assert config.api_key == "um_123"
        assert config.base_url == "https://staging.example.com"
        assert config.timeout == 5.0
        assert config.log_level == "WARNING"
        assert config.log_file == "/tmp/unmarkdown.log"

    def test_empty_api_key_treated_as_missing(self, clean_env):
        clean_env.setenv("UNMARKDOWN_API_KEY", "")
        assert load_config_from_env().api_key is None

    def test_cli_overrides_env(self, clean_env):
        clean_env.setenv("UNMARKDOWN_API_KEY", "um_123")
        clean_env.setenv("UNMARKDOWN_API_URL", "https://env.example.com")
        clean_env.setenv("UNMARKDOWN_MCP_TIMEOUT", "5")

        args = create_argument_parser().parse_args(
            ["--api-url", "https://cli.example.com", "--timeout", "9", "--log-level", "debug"]
        )
        config = load_config_from_args(args)

        assert config.api_key == "um_123"
        assert config.base_url == "https://cli.example.com"
        assert config.timeout == 9.0
        assert config.log_level == "DEBUG"

    def test_no_cli_args_keeps_env(self, clean_env):
        clean_env.setenv("UNMARKDOWN_API_URL", "https://env.example.com")
        args = create_argument_parser().parse_args([])
        assert load_config_from_args(args).base_url == "https://env.example.com"

    def test_api_key_not_accepted_on_cli(self):
        with pytest.raises(SystemExit):
            create_argument_parser().parse_args(["--api-key", "um_123"])

    def test_load_config_validates(self, clean_env):
        with pytest.raises(ValueError, match="UNMARKDOWN_API_KEY"):
            load_config([])

    def test_load_config_ok(self, clean_env):
        clean_env.setenv("UNMARKDOWN_API_KEY", "um_123")
        assert load_config(["--timeout", "3"]).timeout == 3.0
