"""Data models for search requests and results."""

from .search_result import DOCUMENT_FIELDS, SearchRequest, SearchResultDocument

__all__ = ["DOCUMENT_FIELDS", "SearchRequest", "SearchResultDocument"]
