"""Embedding providers."""

from .base import EmbeddingProvider
from .bedrock import BedrockEmbeddingProvider

__all__ = ["EmbeddingProvider", "BedrockEmbeddingProvider"]
