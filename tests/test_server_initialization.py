"""
Unit tests for server initialization.

Tests component wiring, configuration failures and tool registration.
"""

import asyncio

import pytest
from unittest.mock import Mock, patch

from handbook_search.server import get_server, initialize_server, set_components
from handbook_search.config import ServerConfig
from handbook_search.aws.client_manager import AWSClientManager
from handbook_search.embeddings.bedrock import BedrockEmbeddingProvider
from handbook_search.search.adapter import VectorSearchAdapter
from handbook_search.search.azure import AzureSearchIndexProvider
import handbook_search.server as server_module


def make_config():
    mock_config = Mock(spec=ServerConfig)
    mock_config.aws_profile = "handbook"
    mock_config.aws_region = "us-east-1"
    mock_config.embedding_model_id = "amazon.titan-embed-text-v2:0"
    mock_config.embedding_dimensions = 1024
    mock_config.search_endpoint = "https://contoso.search.windows.net"
    mock_config.search_api_key = "secret"
    return mock_config


class TestServerInitialization:
    """Test server initialization with valid configuration."""

    @patch('handbook_search.server.configure_logging')
    @patch('handbook_search.server.ServerConfig.from_environment')
    @patch('handbook_search.server.AWSClientManager')
    @patch('handbook_search.server.BedrockEmbeddingProvider')
    @patch('handbook_search.server.AzureSearchIndexProvider')
    @patch('handbook_search.server.VectorSearchAdapter')
    def test_successful_initialization(
        self,
        mock_adapter_class,
        mock_index_provider_class,
        mock_embedding_class,
        mock_aws_class,
        mock_config_class,
        mock_configure_logging
    ):
        """Test every component is created and wired together."""
        mock_config = make_config()
        mock_config_class.return_value = mock_config

        mock_aws_client = Mock(spec=AWSClientManager)
        mock_aws_client.verify_credentials.return_value = True
        mock_aws_class.return_value = mock_aws_client

        mock_embedding_provider = Mock(spec=BedrockEmbeddingProvider)
        mock_embedding_class.return_value = mock_embedding_provider

        mock_index_provider = Mock(spec=AzureSearchIndexProvider)
        mock_index_provider_class.return_value = mock_index_provider

        mock_adapter = Mock(spec=VectorSearchAdapter)
        mock_adapter_class.return_value = mock_adapter

        config, aws_client, adapter = initialize_server()

        assert config == mock_config
        assert aws_client == mock_aws_client
        assert adapter == mock_adapter

        mock_configure_logging.assert_called_once()
        mock_aws_class.assert_called_once_with("handbook", "us-east-1")
        mock_aws_client.verify_credentials.assert_called_once()
        mock_embedding_class.assert_called_once_with(
            mock_aws_client,
            "amazon.titan-embed-text-v2:0",
            1024
        )
        mock_index_provider_class.assert_called_once_with(
            "https://contoso.search.windows.net",
            "secret"
        )
        mock_adapter_class.assert_called_once_with(mock_embedding_provider, mock_index_provider)


class TestServerInitializationFailures:
    """Test initialization failures exit the process."""

    @patch('handbook_search.server.configure_logging')
    @patch('handbook_search.server.ServerConfig.from_environment')
    def test_invalid_configuration(self, mock_config_class, mock_configure_logging):
        """Test a configuration error exits with status 1."""
        mock_config_class.side_effect = ValueError("search_endpoint is required")

        with pytest.raises(SystemExit) as exc_info:
            initialize_server()

        assert exc_info.value.code == 1

    @patch('handbook_search.server.configure_logging')
    @patch('handbook_search.server.ServerConfig.from_environment')
    @patch('handbook_search.server.AWSClientManager')
    def test_invalid_aws_profile(self, mock_aws_class, mock_config_class, mock_configure_logging):
        """Test an unknown AWS profile exits with status 1."""
        mock_config_class.return_value = make_config()
        mock_aws_class.side_effect = ValueError("AWS profile 'handbook' not found")

        with pytest.raises(SystemExit) as exc_info:
            initialize_server()

        assert exc_info.value.code == 1

    @patch('handbook_search.server.configure_logging')
    @patch('handbook_search.server.ServerConfig.from_environment')
    @patch('handbook_search.server.AWSClientManager')
    @patch('handbook_search.server.AzureSearchIndexProvider')
    def test_credential_verification_failure(
        self,
        mock_index_provider_class,
        mock_aws_class,
        mock_config_class,
        mock_configure_logging
    ):
        """Test failed credential verification exits before the search provider is built."""
        mock_config_class.return_value = make_config()
        mock_aws_client = Mock(spec=AWSClientManager)
        mock_aws_client.verify_credentials.side_effect = RuntimeError("expired")
        mock_aws_class.return_value = mock_aws_client

        with pytest.raises(SystemExit):
            initialize_server()

        mock_index_provider_class.assert_not_called()


class TestToolRegistration:
    """Test the MCP server surface."""

    def test_contoso_search_registered(self):
        """Test the contoso_search tool is exposed with its description."""
        tools = asyncio.run(get_server().get_tools())

        assert "contoso_search" in tools
        assert tools["contoso_search"].description == "Search documents for employer Contoso"

    def test_set_components(self):
        """Test set_components stores the adapter used by the tool."""
        mock_adapter = Mock(spec=VectorSearchAdapter)
        try:
            set_components(make_config(), Mock(spec=AWSClientManager), mock_adapter)
            assert server_module._adapter is mock_adapter
        finally:
            set_components(None, None, None)
