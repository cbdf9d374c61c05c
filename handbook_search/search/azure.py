"""Vector search with Azure AI Search."""

import logging
import time
from typing import AsyncIterator, Dict

from azure.core.credentials import AzureKeyCredential
from azure.core.exceptions import (
    DeserializationError,
    HttpResponseError,
    ServiceRequestError,
    ServiceResponseError,
)
from azure.search.documents.aio import SearchClient as AzureSDKSearchClient
from azure.search.documents.indexes.aio import SearchIndexClient
from azure.search.documents.models import VectorizedQuery

from ..errors import MappingError, ProviderRejected, ProviderUnavailable
from ..models.search_result import DOCUMENT_FIELDS, SearchRequest, SearchResultDocument
from ..utils.logging import get_logger, log_with_context
from .base import SearchClient, SearchIndexProvider


logger = get_logger("AzureSearch")

PROVIDER_NAME = "azure-search"


class AzureSearchClient(SearchClient):
    """Queries one index through an SDK SearchClient kept open across queries."""

    def __init__(self, sdk_client: AzureSDKSearchClient, index_name: str):
        self.sdk_client = sdk_client
        self.index_name = index_name

    async def search(self, request: SearchRequest) -> AsyncIterator[SearchResultDocument]:
        vector_query = VectorizedQuery(
            vector=list(request.embedding),
            fields=request.vector_field
        )

        try:
            start_time = time.time()
            # Lazy: the HTTP request goes out on the first iteration
            results = await self.sdk_client.search(
                search_text=None,
                vector_queries=[vector_query],
                select=list(DOCUMENT_FIELDS)
            )
            log_with_context(
                logger,
                logging.DEBUG,
                "Vector query prepared",
                context={
                    "index_name": self.index_name,
                    "vector_field": request.vector_field
                }
            )

            first_page = True
            async for result in results:
                if first_page:
                    first_page = False
                    log_with_context(
                        logger,
                        logging.DEBUG,
                        "First search results received",
                        context={"index_name": self.index_name},
                        execution_time_ms=(time.time() - start_time) * 1000
                    )
                yield SearchResultDocument.from_dict(result, provider=PROVIDER_NAME)

        except (ServiceRequestError, ServiceResponseError) as e:
            log_with_context(
                logger,
                logging.ERROR,
                "Azure AI Search unreachable",
                context={"index_name": self.index_name, "error": str(e)}
            )
            raise ProviderUnavailable(
                f"Search request failed: {e.message}",
                provider=PROVIDER_NAME
            ) from e

        except HttpResponseError as e:
            error_code = str(e.status_code) if e.status_code is not None else None
            log_with_context(
                logger,
                logging.ERROR,
                "Azure AI Search rejected the query",
                context={
                    "index_name": self.index_name,
                    "vector_field": request.vector_field,
                    "error_message": e.message
                },
                error_code=error_code
            )
            raise ProviderRejected(
                f"Search request rejected: {e.message}",
                provider=PROVIDER_NAME,
                error_code=error_code
            ) from e

        except DeserializationError as e:
            log_with_context(
                logger,
                logging.ERROR,
                "Azure AI Search response could not be deserialized",
                context={"index_name": self.index_name, "error": str(e)}
            )
            raise MappingError(
                f"Search response is malformed: {str(e)}",
                provider=PROVIDER_NAME
            ) from e


class AzureSearchIndexProvider(SearchIndexProvider):
    """
    Owns the async SearchIndexClient for an Azure AI Search service.

    One SDK SearchClient per index is created on first use and reused, so
    queries share its connection pool; close() shuts them all down.
    """

    def __init__(self, endpoint: str, api_key: str):
        """
        Initialize the Azure AI Search index provider.

        Args:
            endpoint: Service endpoint (e.g. "https://contoso.search.windows.net")
            api_key: Query or admin key of the service
        """
        self.endpoint = endpoint
        self.index_client = SearchIndexClient(endpoint, AzureKeyCredential(api_key))
        self._clients: Dict[str, AzureSearchClient] = {}
        logger.info(f"Azure AI Search index client created for {endpoint}")

    def get_client(self, index_name: str) -> AzureSearchClient:
        client = self._clients.get(index_name)
        if client is None:
            # get_search_client only builds the client, no request is sent
            client = AzureSearchClient(
                self.index_client.get_search_client(index_name),
                index_name
            )
            self._clients[index_name] = client
        return client

    async def close(self) -> None:
        """Close the per-index search clients and the index client."""
        clients = list(self._clients.values())
        self._clients.clear()
        for client in clients:
            await client.sdk_client.close()
        await self.index_client.close()
