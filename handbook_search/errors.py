"""Errors raised by the embedding and search providers."""

from typing import Optional


class ProviderError(Exception):
    """
    Base class for failures of an external provider.

    Attributes:
        provider: Name of the provider that failed (e.g. "bedrock", "azure-search")
        error_code: Provider-specific error code or HTTP status, if known
    """

    def __init__(
        self,
        message: str,
        provider: str,
        error_code: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.provider = provider
        self.error_code = error_code

    def __str__(self) -> str:
        if self.error_code:
            return f"{self.provider}: {self.message} ({self.error_code})"
        return f"{self.provider}: {self.message}"


class ProviderUnavailable(ProviderError):
    """The provider could not be reached (connection failure, timeout)."""


class ProviderRejected(ProviderError):
    """The provider answered with an error (bad request, auth failure, unknown index)."""


class MappingError(ProviderError):
    """A provider response could not be mapped to the expected schema."""
