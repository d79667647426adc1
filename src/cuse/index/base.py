"""Abstract index service interface for writing and querying documents.

Defines the minimal surface the search core needs from a full-text index,
enabling extensibility and testability via a common contract.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, List

from cuse.documents import Document, QueryOptions, ScoredDocument


class IndexService(ABC):
    """Abstract interface for full-text index implementations."""

    @abstractmethod
    def write(self, document: Document) -> None:
        """Write or replace a document in its index."""

    @abstractmethod
    def delete(self, index_name: str, ids: Iterable[str]) -> None:
        """Remove documents from an index by their IDs."""

    @abstractmethod
    def query(self, index_name: str, query_string: str, options: QueryOptions) -> List[ScoredDocument]:
        """Execute a query and return hits in relevance order."""
        raise NotImplementedError
