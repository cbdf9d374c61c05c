"""Search index provider interfaces."""

from abc import ABC, abstractmethod
from typing import AsyncIterator

from ..models.search_result import SearchRequest, SearchResultDocument


class SearchClient(ABC):
    """Runs queries against one index."""

    @abstractmethod
    def search(self, request: SearchRequest) -> AsyncIterator[SearchResultDocument]:
        """
        Run a vector query and stream the matching documents in ranking order.

        Implementations are async generators: results are fetched lazily and
        the caller may stop early and aclose() the stream, after which no
        further results are requested from the service.

        Raises (while iterating):
            ProviderUnavailable: If the search service cannot be reached
            ProviderRejected: If the service refuses the query
            MappingError: If a document does not match the index schema
        """


class SearchIndexProvider(ABC):
    """Hands out search clients by index name."""

    @abstractmethod
    def get_client(self, index_name: str) -> SearchClient:
        """Get a client for the named index. Does not touch the network."""
