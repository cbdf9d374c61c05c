"""Vector search over the employee handbook index."""

from .adapter import INDEX_NAME, VECTOR_FIELD, VectorSearchAdapter
from .azure import AzureSearchClient, AzureSearchIndexProvider
from .base import SearchClient, SearchIndexProvider

__all__ = [
    "INDEX_NAME",
    "VECTOR_FIELD",
    "VectorSearchAdapter",
    "AzureSearchClient",
    "AzureSearchIndexProvider",
    "SearchClient",
    "SearchIndexProvider",
]
