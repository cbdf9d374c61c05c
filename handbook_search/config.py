"""Configuration management for the Handbook Search server."""

import os
from dataclasses import dataclass
from typing import Optional


DEFAULT_EMBEDDING_MODEL_ID = "amazon.titan-embed-text-v2:0"


@dataclass
class ServerConfig:
    """Configuration for the Handbook Search server."""

    aws_profile: Optional[str] = None  # None uses the default credential chain
    aws_region: str = "us-east-1"
    embedding_model_id: str = DEFAULT_EMBEDDING_MODEL_ID
    embedding_dimensions: Optional[int] = 1024  # None: let the model pick
    search_endpoint: str = ""  # Azure AI Search service endpoint
    search_api_key: str = ""  # Azure AI Search query key

    def validate(self) -> None:
        """
        Validate required configuration fields.

        Raises:
            ValueError: If required fields are missing or invalid
        """
        if not self.aws_region:
            raise ValueError("aws_region is required")

        if not self.embedding_model_id:
            raise ValueError("embedding_model_id is required")

        if self.embedding_dimensions is not None and self.embedding_dimensions <= 0:
            raise ValueError("embedding_dimensions must be positive")

        if not self.search_endpoint:
            raise ValueError("search_endpoint is required (set AZURE_SEARCH_ENDPOINT)")

        if not self.search_endpoint.startswith("https://"):
            raise ValueError("search_endpoint must be an https:// URL")

        if not self.search_api_key:
            raise ValueError("search_api_key is required (set AZURE_SEARCH_API_KEY)")

    @classmethod
    def from_environment(cls) -> "ServerConfig":
        """Load configuration from environment variables."""
        dimensions = os.getenv("EMBEDDING_DIMENSIONS", "1024")
        config = cls(
            aws_profile=os.getenv("AWS_PROFILE") or None,
            aws_region=os.getenv("AWS_REGION", "us-east-1"),
            embedding_model_id=os.getenv(
                "BEDROCK_EMBEDDING_MODEL_ID",
                DEFAULT_EMBEDDING_MODEL_ID
            ),
            embedding_dimensions=int(dimensions) if dimensions else None,
            search_endpoint=os.getenv("AZURE_SEARCH_ENDPOINT", ""),
            search_api_key=os.getenv("AZURE_SEARCH_API_KEY", "")
        )
        config.validate()
        return config
