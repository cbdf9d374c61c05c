"""
Unit tests for ServerConfig.

Tests defaults, environment loading and validation.
"""

import pytest

from handbook_search.config import DEFAULT_EMBEDDING_MODEL_ID, ServerConfig


ENV_VARS = [
    "AWS_PROFILE",
    "AWS_REGION",
    "BEDROCK_EMBEDDING_MODEL_ID",
    "EMBEDDING_DIMENSIONS",
    "AZURE_SEARCH_ENDPOINT",
    "AZURE_SEARCH_API_KEY",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove configuration variables inherited from the shell."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def valid_config(**overrides):
    values = {
        "search_endpoint": "https://contoso.search.windows.net",
        "search_api_key": "secret",
    }
    values.update(overrides)
    return ServerConfig(**values)


class TestServerConfigFromEnvironment:
    """Test loading configuration from environment variables."""

    def test_defaults(self, clean_env):
        """Test defaults when only the required search settings are present."""
        clean_env.setenv("AZURE_SEARCH_ENDPOINT", "https://contoso.search.windows.net")
        clean_env.setenv("AZURE_SEARCH_API_KEY", "secret")

        config = ServerConfig.from_environment()

        assert config.aws_profile is None
        assert config.aws_region == "us-east-1"
        assert config.embedding_model_id == DEFAULT_EMBEDDING_MODEL_ID
        assert config.embedding_dimensions == 1024
        assert config.search_endpoint == "https://contoso.search.windows.net"
        assert config.search_api_key == "secret"

    def test_overrides(self, clean_env):
        """Test every setting can be overridden."""
        clean_env.setenv("AWS_PROFILE", "handbook")
        clean_env.setenv("AWS_REGION", "eu-central-1")
        clean_env.setenv("BEDROCK_EMBEDDING_MODEL_ID", "amazon.titan-embed-text-v1")
        clean_env.setenv("EMBEDDING_DIMENSIONS", "")
        clean_env.setenv("AZURE_SEARCH_ENDPOINT", "https://contoso.search.windows.net")
        clean_env.setenv("AZURE_SEARCH_API_KEY", "secret")

        config = ServerConfig.from_environment()

        assert config.aws_profile == "handbook"
        assert config.aws_region == "eu-central-1"
        assert config.embedding_model_id == "amazon.titan-embed-text-v1"
        assert config.embedding_dimensions is None

    def test_missing_search_endpoint(self, clean_env):
        """Test loading fails without a search endpoint."""
        clean_env.setenv("AZURE_SEARCH_API_KEY", "secret")

        with pytest.raises(ValueError) as exc_info:
            ServerConfig.from_environment()

        assert "AZURE_SEARCH_ENDPOINT" in str(exc_info.value)

    def test_invalid_dimensions(self, clean_env):
        """Test a non-numeric dimension count is rejected."""
        clean_env.setenv("EMBEDDING_DIMENSIONS", "large")
        clean_env.setenv("AZURE_SEARCH_ENDPOINT", "https://contoso.search.windows.net")
        clean_env.setenv("AZURE_SEARCH_API_KEY", "secret")

        with pytest.raises(ValueError):
            ServerConfig.from_environment()


class TestServerConfigValidation:
    """Test validate()."""

    def test_valid(self):
        """Test a complete configuration validates."""
        valid_config().validate()

    @pytest.mark.parametrize("overrides,message", [
        ({"aws_region": ""}, "aws_region"),
        ({"embedding_model_id": ""}, "embedding_model_id"),
        ({"embedding_dimensions": 0}, "embedding_dimensions"),
        ({"search_endpoint": ""}, "search_endpoint"),
        ({"search_endpoint": "http://contoso.search.windows.net"}, "https://"),
        ({"search_api_key": ""}, "search_api_key"),
    ])
    def test_invalid(self, overrides, message):
        """Test each invalid field is reported."""
        with pytest.raises(ValueError) as exc_info:
            valid_config(**overrides).validate()

        assert message in str(exc_info.value)
