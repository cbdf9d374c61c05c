"""Embedding provider interface."""

from abc import ABC, abstractmethod
from typing import List


class EmbeddingProvider(ABC):
    """Turns text into a fixed-length vector."""

    @abstractmethod
    async def generate_embedding(self, text: str) -> List[float]:
        """
        Generate the embedding of a text.

        Raises:
            ProviderUnavailable: If the embedding service cannot be reached
            ProviderRejected: If the service refuses the request
            MappingError: If the response carries no usable embedding
        """
