"""Index registers write domain objects into the index."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable

from cuse.index.base import IndexService
from cuse.strategy import IndexingStrategy


class IndexRegister(ABC):
    """Abstract writer of domain objects into their index."""

    @abstractmethod
    def register(self, instance: Any, strategy: IndexingStrategy[Any]) -> None:
        """Write or update the document for ``instance``."""

    @abstractmethod
    def delete(self, index_name: str, ids: Iterable[Any]) -> None:
        """Remove documents from ``index_name``."""


class DocumentIndexRegister(IndexRegister):
    """Register that turns instances into documents and writes them to an index service."""

    def __init__(self, index_service: IndexService) -> None:
        self._index_service = index_service

    def register(self, instance: Any, strategy: IndexingStrategy[Any]) -> None:
        self._index_service.write(strategy.to_document(instance))

    def delete(self, index_name: str, ids: Iterable[Any]) -> None:
        self._index_service.delete(index_name, [str(doc_id) for doc_id in ids])
