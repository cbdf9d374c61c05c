"""Data models for vector search requests and result documents."""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Tuple

from ..errors import MappingError


# Wire names of the index schema fields, case-sensitive
DOCUMENT_FIELDS = ("content", "title", "url")


@dataclass(frozen=True)
class SearchRequest:
    """A single-vector nearest-neighbor query against one field of one index."""

    index_name: str
    vector_field: str
    embedding: Tuple[float, ...]


@dataclass(frozen=True)
class SearchResultDocument:
    """A document of the employee handbook index."""

    content: str
    title: str
    url: str

    @classmethod
    def from_dict(cls, document: Any, provider: str = "search") -> "SearchResultDocument":
        """
        Map a raw search result onto the index schema.

        Missing or null fields become empty strings. Extra keys such as
        "@search.score" are ignored.

        Raises:
            MappingError: If the document is not a mapping or a field holds
                a non-string value
        """
        if not isinstance(document, Mapping):
            raise MappingError(
                f"Search result is not a document: {type(document).__name__}",
                provider=provider
            )

        values: Dict[str, str] = {}
        for name in DOCUMENT_FIELDS:
            value = document.get(name)
            if value is None:
                value = ""
            elif not isinstance(value, str):
                raise MappingError(
                    f"Field '{name}' must be a string, got {type(value).__name__}",
                    provider=provider
                )
            values[name] = value

        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Convert SearchResultDocument to dictionary for JSON serialization."""
        return {
            "content": self.content,
            "title": self.title,
            "url": self.url
        }
