"""Search engine facade: registration, deletion and search entry points."""

from __future__ import annotations

from typing import Any, Iterable, Type, TypeVar

import structlog

from cuse.converters import IdConverterCatalog
from cuse.index.base import IndexService
from cuse.loader import EntityLoader
from cuse.register import IndexRegister
from cuse.search import SearchBuilder, SearchContext
from cuse.strategy import IndexingStrategyCatalog

T = TypeVar("T")

logger = structlog.get_logger()


class SearchEngine:
    """Entry point tying domain types to the index.

    Parameters
    ----------
    entity_loader: EntityLoader
        Hydrates matched document ids into domain objects.
    id_converters: IdConverterCatalog
        Converters used by ``search_ids`` searches.
    strategies: IndexingStrategyCatalog
        Indexing strategy per domain type.
    index_register: IndexRegister
        Writes and deletes documents.
    index_service: IndexService
        Index queried by searches.
    """

    def __init__(
        self,
        entity_loader: EntityLoader,
        id_converters: IdConverterCatalog,
        strategies: IndexingStrategyCatalog,
        index_register: IndexRegister,
        index_service: IndexService,
    ) -> None:
        self._strategies = strategies
        self._id_converters = id_converters
        self._index_register = index_register
        self._context = SearchContext(
            index_service=index_service,
            entity_loader=entity_loader,
            strategies=strategies,
            converters=id_converters,
        )

    def register(self, instance: Any) -> None:
        """Index ``instance`` using the strategy of its runtime type."""
        strategy = self._strategies.require(type(instance))
        self._index_register.register(instance, strategy)
        logger.debug("entity_registered", entity=type(instance).__name__, index=strategy.index_name)

    def search(self, entity_type: Type[T]) -> SearchBuilder[T]:
        """Start a search returning loaded ``entity_type`` instances."""
        return SearchBuilder(entity_type, self._context)

    def search_ids(self, id_type: Type[T]) -> SearchBuilder[T]:
        """Start a search returning matched ids converted to ``id_type``."""
        self._id_converters.require(id_type)
        return SearchBuilder(id_type, self._context, id_type=id_type)

    def delete(self, index_name: str, object_ids: Iterable[Any]) -> None:
        ids = list(object_ids)
        self._index_register.delete(index_name, ids)
        logger.debug("entities_deleted", index=index_name, count=len(ids))
