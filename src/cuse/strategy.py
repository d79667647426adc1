"""Indexing strategies and the catalog that resolves them per domain type.

A strategy decides which index a domain type lives in and how an instance is
turned into a `Document`. Strategies are registered once while wiring the
application and only read afterwards.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, Iterable, Mapping, Optional, Tuple, Type, TypeVar

from cuse.documents import Document
from cuse.exceptions import NotConfiguredIndexingStrategyError

T = TypeVar("T")


class IndexingStrategy(ABC, Generic[T]):
    """Abstract mapping of one domain type onto an index."""

    @property
    @abstractmethod
    def index_name(self) -> str:
        """Name of the index that holds documents of this type."""

    @abstractmethod
    def document_id(self, instance: T) -> str:
        """Return the document identifier for ``instance``."""

    @abstractmethod
    def fields(self, instance: T) -> Mapping[str, Any]:
        """Return the searchable fields of ``instance``."""

    def to_document(self, instance: T) -> Document:
        return Document(
            doc_id=self.document_id(instance),
            index_name=self.index_name,
            fields=dict(self.fields(instance)),
        )


class AttributeIndexingStrategy(IndexingStrategy[T]):
    """Index a fixed set of instance attributes.

    Parameters
    ----------
    entity_type: type
        The domain type being indexed. Its ``__name__`` is the default index name.
    fields: Iterable[str]
        Attribute names copied into the document. Attributes that are None are skipped.
    id_attribute: str
        Attribute holding the document identifier.
    index_name: Optional[str]
        Explicit index name overriding the type name.
    """

    def __init__(
        self,
        entity_type: Type[T],
        fields: Iterable[str],
        *,
        id_attribute: str = "id",
        index_name: Optional[str] = None,
    ) -> None:
        self.entity_type = entity_type
        self._fields: Tuple[str, ...] = tuple(fields)
        self._id_attribute = id_attribute
        self._index_name = index_name or entity_type.__name__

    @property
    def index_name(self) -> str:
        return self._index_name

    def document_id(self, instance: T) -> str:
        value = getattr(instance, self._id_attribute)
        if value is None:
            raise ValueError(
                f"{type(instance).__name__}.{self._id_attribute} is None; cannot index instance"
            )
        return str(value)

    def fields(self, instance: T) -> Mapping[str, Any]:
        values: Dict[str, Any] = {}
        for name in self._fields:
            value = getattr(instance, name)
            if value is not None:
                values[name] = value
        return values


class IndexingStrategyCatalog:
    """Registry of indexing strategies keyed by exact domain type."""

    def __init__(self, strategies: Optional[Mapping[type, IndexingStrategy[Any]]] = None) -> None:
        self._strategies: Dict[type, IndexingStrategy[Any]] = dict(strategies or {})

    def register(self, entity_type: type, strategy: IndexingStrategy[Any]) -> None:
        self._strategies[entity_type] = strategy

    def get(self, entity_type: type) -> Optional[IndexingStrategy[Any]]:
        return self._strategies.get(entity_type)

    def require(self, entity_type: type) -> IndexingStrategy[Any]:
        """Return the strategy for ``entity_type`` or raise if none is registered."""
        strategy = self.get(entity_type)
        if strategy is None:
            raise NotConfiguredIndexingStrategyError(entity_type)
        return strategy

    def __contains__(self, entity_type: object) -> bool:
        return entity_type in self._strategies
