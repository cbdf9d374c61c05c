"""Vector search over the employee handbook index."""

import logging
import time
from contextlib import aclosing
from typing import Optional

from ..embeddings.base import EmbeddingProvider
from ..errors import ProviderError
from ..models.search_result import SearchRequest, SearchResultDocument
from ..utils.logging import get_logger, log_with_context
from .base import SearchIndexProvider


logger = get_logger("VectorSearchAdapter")

# Fixed by the index schema
INDEX_NAME = "employeehandbook"
VECTOR_FIELD = "contentVector"


class VectorSearchAdapter:
    """
    Answers a free-text query with the best matching handbook document.

    Each search makes one embedding call and then one vector query, and
    reads only the first result of that query. There is no caching and no
    retry; provider errors propagate to the caller unchanged.
    """

    def __init__(
        self,
        embedding_provider: EmbeddingProvider,
        index_provider: SearchIndexProvider
    ):
        """
        Initialize the adapter.

        Args:
            embedding_provider: Turns the query into a vector
            index_provider: Gives access to the employee handbook index
        """
        self.embedding_provider = embedding_provider
        self.index_provider = index_provider

    async def search(self, query: str) -> str:
        """
        Return the content of the best matching document.

        An empty string means no document matched; use search_document()
        to tell that apart from a match whose content is empty.

        Raises:
            TypeError: If query is None
            ProviderError: If the embedding or search provider fails
        """
        document = await self.search_document(query)
        if document is None:
            return ""
        return document.content

    async def search_document(self, query: str) -> Optional[SearchResultDocument]:
        """
        Return the best matching document, or None if nothing matched.

        Raises:
            TypeError: If query is None
            ProviderError: If the embedding or search provider fails
        """
        if query is None:
            raise TypeError("query must be a string, not None")

        start_time = time.time()
        try:
            embedding = await self.embedding_provider.generate_embedding(query)

            request = SearchRequest(
                index_name=INDEX_NAME,
                vector_field=VECTOR_FIELD,
                embedding=tuple(embedding)
            )
            client = self.index_provider.get_client(request.index_name)

            document = None
            async with aclosing(client.search(request)) as results:
                async for result in results:
                    document = result
                    break

        except ProviderError as e:
            log_with_context(
                logger,
                logging.ERROR,
                "Vector search failed",
                context={
                    "query": query,
                    "provider": e.provider,
                    "error_type": type(e).__name__
                },
                execution_time_ms=(time.time() - start_time) * 1000,
                error_code=e.error_code
            )
            raise

        log_with_context(
            logger,
            logging.INFO,
            "Vector search completed",
            context={
                "query": query,
                "index_name": INDEX_NAME,
                "found": document is not None
            },
            execution_time_ms=(time.time() - start_time) * 1000
        )

        return document
