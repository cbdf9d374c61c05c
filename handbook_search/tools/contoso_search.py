"""Tool for searching the Contoso employee handbook."""

import json
import logging
import time
from typing import TYPE_CHECKING, Optional

from fastmcp import Context

from ..errors import ProviderRejected, ProviderUnavailable
from ..utils.logging import get_logger, log_with_context

if TYPE_CHECKING:
    from ..search.adapter import VectorSearchAdapter


logger = get_logger("ContosoSearchTool")


def _suggested_action(error: Exception) -> str:
    if isinstance(error, ProviderUnavailable):
        return "Retry later; the embedding or search service could not be reached"
    if isinstance(error, ProviderRejected):
        return "Check AWS credentials, the Bedrock model ID and the Azure AI Search index configuration"
    return "Check server logs"


async def contoso_search_impl(
    query: str,
    ctx: Context,
    adapter: Optional["VectorSearchAdapter"]
) -> str:
    """
    Search the employee handbook and return the best matching passage.

    Args:
        query: The user's optimized semantic search query
        ctx: FastMCP context for client-visible logging
        adapter: Vector Search Adapter instance (None if the server is not initialized)

    Returns:
        JSON string with the passage, or an error description
    """
    start_time = time.time()

    if adapter is None:
        logger.error(
            "contoso_search invoked before server initialization",
            extra={"context": {"query": query}}
        )
        return json.dumps({
            "status": "error",
            "error_type": "ConfigurationError",
            "message": "Handbook search is not available",
            "suggested_action": "Set AZURE_SEARCH_ENDPOINT and AZURE_SEARCH_API_KEY and restart the server"
        })

    try:
        await ctx.info(f"Searching the employee handbook for: {query}")
        log_with_context(
            logger,
            logging.INFO,
            "contoso_search tool invoked",
            context={"query": query}
        )

        document = await adapter.search_document(query)
        found = document is not None

        execution_time_ms = (time.time() - start_time) * 1000
        log_with_context(
            logger,
            logging.INFO,
            "contoso_search tool completed successfully",
            context={"query": query, "found": found},
            execution_time_ms=execution_time_ms
        )

        return json.dumps({
            "status": "success",
            "found": found,
            "content": document.content if found else "",
            "message": "Found a matching handbook passage" if found else "No matching handbook passage"
        })

    except Exception as e:
        execution_time_ms = (time.time() - start_time) * 1000
        await ctx.error(f"Handbook search failed: {str(e)}")
        logger.error(
            "contoso_search tool failed",
            exc_info=True,
            extra={
                "context": {"query": query, "error": str(e)},
                "execution_time_ms": execution_time_ms
            }
        )
        return json.dumps({
            "status": "error",
            "error_type": type(e).__name__,
            "message": f"Handbook search failed: {str(e)}",
            "suggested_action": _suggested_action(e)
        })
