"""Pytest configuration and fixtures."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Sequence, Tuple, Type

import pytest

from cuse.converters import IdConverterCatalog
from cuse.documents import Document, QueryOptions, ScoredDocument
from cuse.engine import SearchEngine
from cuse.index.base import IndexService
from cuse.loader import EntityLoader
from cuse.register import IndexRegister
from cuse.strategy import AttributeIndexingStrategy, IndexingStrategy, IndexingStrategyCatalog


@dataclass
class Person:
    id: int
    name: str
    status: Optional[str] = None


@dataclass
class Building:
    id: int
    address: str


class Archive:
    """Type used only to name an index."""


class FakeIndexService(IndexService):
    """Returns a preset ranking and records every call."""

    def __init__(self, ranked_ids: Sequence[str] = ()) -> None:
        self.ranked_ids = list(ranked_ids)
        self.queries: List[Tuple[str, str, QueryOptions]] = []
        self.written: List[Document] = []
        self.deleted: List[Tuple[str, List[str]]] = []

    def write(self, document: Document) -> None:
        self.written.append(document)

    def delete(self, index_name: str, ids: Iterable[str]) -> None:
        self.deleted.append((index_name, list(ids)))

    def query(self, index_name: str, query_string: str, options: QueryOptions) -> List[ScoredDocument]:
        self.queries.append((index_name, query_string, options))
        return [
            ScoredDocument(doc_id=doc_id, score=float(len(self.ranked_ids) - rank))
            for rank, doc_id in enumerate(self.ranked_ids)
        ]


class FakeEntityLoader(EntityLoader):
    """Builds a placeholder entity per id and records calls."""

    def __init__(self) -> None:
        self.calls: List[Tuple[type, List[str]]] = []

    def load_all(self, entity_type: Type[Any], ids: Sequence[str]) -> List[Any]:
        self.calls.append((entity_type, list(ids)))
        return [("loaded", entity_type.__name__, doc_id) for doc_id in ids]


class FakeIndexRegister(IndexRegister):
    def __init__(self) -> None:
        self.registered: List[Tuple[Any, IndexingStrategy[Any]]] = []
        self.deleted: List[Tuple[str, List[Any]]] = []

    def register(self, instance: Any, strategy: IndexingStrategy[Any]) -> None:
        self.registered.append((instance, strategy))

    def delete(self, index_name: str, ids: Iterable[Any]) -> None:
        self.deleted.append((index_name, list(ids)))


@pytest.fixture
def index_service() -> FakeIndexService:
    return FakeIndexService(["3", "1", "2"])


@pytest.fixture
def entity_loader() -> FakeEntityLoader:
    return FakeEntityLoader()


@pytest.fixture
def index_register() -> FakeIndexRegister:
    return FakeIndexRegister()


@pytest.fixture
def strategies() -> IndexingStrategyCatalog:
    catalog = IndexingStrategyCatalog()
    catalog.register(Person, AttributeIndexingStrategy(Person, ["name", "status"], index_name="people"))
    return catalog


@pytest.fixture
def converters() -> IdConverterCatalog:
    return IdConverterCatalog.with_defaults()


@pytest.fixture
def engine(
    index_service: FakeIndexService,
    entity_loader: FakeEntityLoader,
    index_register: FakeIndexRegister,
    strategies: IndexingStrategyCatalog,
    converters: IdConverterCatalog,
) -> SearchEngine:
    return SearchEngine(
        entity_loader=entity_loader,
        id_converters=converters,
        strategies=strategies,
        index_register=index_register,
        index_service=index_service,
    )
