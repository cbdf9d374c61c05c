"""Employee handbook vector search, served over MCP."""

from .errors import MappingError, ProviderError, ProviderRejected, ProviderUnavailable
from .search.adapter import VectorSearchAdapter

__all__ = [
    "MappingError",
    "ProviderError",
    "ProviderRejected",
    "ProviderUnavailable",
    "VectorSearchAdapter",
]
