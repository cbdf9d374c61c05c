"""MCP server initialization and tool registration."""

import logging
import os
import sys
from typing import Annotated, Optional

from fastmcp import FastMCP, Context
from pydantic import Field

from .config import ServerConfig
from .aws.client_manager import AWSClientManager
from .embeddings.bedrock import BedrockEmbeddingProvider
from .search.adapter import VectorSearchAdapter
from .search.azure import AzureSearchIndexProvider
from .tools.contoso_search import contoso_search_impl
from .utils.logging import configure_logging, get_logger, log_with_context


mcp = FastMCP("Handbook Search")

logger = get_logger("Server")

# Set by set_components() once initialize_server() has run
_config: Optional[ServerConfig] = None
_aws_client: Optional[AWSClientManager] = None
_adapter: Optional[VectorSearchAdapter] = None


def initialize_server() -> tuple[ServerConfig, AWSClientManager, VectorSearchAdapter]:
    """
    Initialize configuration, providers and the vector search adapter.

    Returns:
        Tuple of (ServerConfig, AWSClientManager, VectorSearchAdapter)

    Raises:
        SystemExit: If initialization fails
    """
    try:
        configure_logging(os.getenv("LOG_LEVEL", "INFO"))

        logger.info("Starting Handbook Search server initialization")

        config = ServerConfig.from_environment()
        log_with_context(
            logger,
            logging.INFO,
            "Configuration loaded",
            context={
                "aws_profile": config.aws_profile,
                "aws_region": config.aws_region,
                "embedding_model_id": config.embedding_model_id,
                "embedding_dimensions": config.embedding_dimensions,
                "search_endpoint": config.search_endpoint
            }
        )

        logger.info("Initializing AWS Client Manager")
        aws_client = AWSClientManager(config.aws_profile, config.aws_region)

        logger.info("Verifying AWS credentials")
        aws_client.verify_credentials()

        embedding_provider = BedrockEmbeddingProvider(
            aws_client,
            config.embedding_model_id,
            config.embedding_dimensions
        )

        logger.info("Initializing Azure AI Search index provider")
        index_provider = AzureSearchIndexProvider(
            config.search_endpoint,
            config.search_api_key
        )

        adapter = VectorSearchAdapter(embedding_provider, index_provider)

        logger.info("Handbook Search server initialization complete")

        return config, aws_client, adapter

    except Exception as e:
        logger.error(
            "Failed to initialize server",
            exc_info=True,
            extra={"context": {"error": str(e)}}
        )
        sys.exit(1)


@mcp.tool(name="contoso_search", description="Search documents for employer Contoso")
async def contoso_search(
    query: Annotated[str, Field(description="The users optimized semantic search query")],
    ctx: Context
) -> str:
    return await contoso_search_impl(query, ctx, _adapter)


def get_server():
    """Get the FastMCP server instance."""
    return mcp


def set_components(
    config: ServerConfig,
    aws_client: AWSClientManager,
    adapter: VectorSearchAdapter
):
    """Set the component references used by the tools."""
    global _config, _aws_client, _adapter
    _config = config
    _aws_client = aws_client
    _adapter = adapter
