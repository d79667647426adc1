"""Query construction and execution.

A `SearchBuilder` collects field filters, a raw query fragment and an optional
index override. Finalizing it with `return_all` or `fetch_maximum` copies that
state into a frozen `Search`, which validates and runs the query with `now`.

Validation happens when the search runs rather than while it is configured,
so the order of builder calls never matters, only the final state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Optional, Tuple, Type, TypeVar, Union

import structlog

from cuse.converters import IdConverterCatalog
from cuse.documents import Consistency, QueryOptions
from cuse.exceptions import (
    EmptyMatcherError,
    InvalidSearchError,
    NegativeSearchLimitError,
    SearchLimitExceededError,
)
from cuse.index.base import IndexService
from cuse.loader import EntityLoader
from cuse.matchers import SearchMatcher, SearchQuery
from cuse.strategy import IndexingStrategyCatalog

T = TypeVar("T")

MAX_SEARCH_LIMIT = 1000

logger = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class SearchContext:
    """Collaborators shared by every search created by one engine."""

    index_service: IndexService
    entity_loader: EntityLoader
    strategies: IndexingStrategyCatalog
    converters: IdConverterCatalog


class SearchBuilder(Generic[T]):
    """Mutable configuration of a search over one domain type.

    When ``id_type`` is set the finished search returns converted ids instead
    of loaded entities. Builders are meant for a single caller and are not
    safe to share between threads.
    """

    def __init__(self, entity_type: Type[T], context: SearchContext, *, id_type: Optional[type] = None) -> None:
        self._entity_type = entity_type
        self._id_type = id_type
        self._context = context
        self._filters: Dict[str, SearchMatcher] = {}
        self._query = ""
        self._index: Optional[str] = None

    def where(
        self,
        field_or_query: Union[str, SearchQuery],
        matcher: Optional[SearchMatcher] = None,
    ) -> SearchBuilder[T]:
        """Add a field filter, or set the raw query fragment.

        ``where("status", is_("active"))`` stores a filter; a second call for the
        same field replaces the first. ``where(query("..."))`` replaces any
        previously set raw fragment.
        """
        if isinstance(field_or_query, SearchQuery):
            if matcher is not None:
                raise TypeError("where() takes no matcher when given a SearchQuery")
            self._query = field_or_query.value
            return self

        if matcher is None:
            raise TypeError(f"where() requires a matcher for field {field_or_query!r}")
        self._filters[field_or_query] = matcher
        return self

    def in_index(self, index_type: type) -> SearchBuilder[T]:
        """Query the index named after ``index_type`` instead of the strategy's index."""
        self._index = index_type.__name__
        return self

    def return_all(self) -> Search[T]:
        return self.fetch_maximum(0)

    def fetch_maximum(self, limit: int) -> Search[T]:
        """Finalize with a result limit; the limit is checked when the search runs."""
        return Search(
            entity_type=self._entity_type,
            id_type=self._id_type,
            filters=tuple(self._filters.items()),
            query=self._query,
            index=self._index,
            limit=limit,
            context=self._context,
        )


@dataclass(frozen=True, slots=True)
class Search(Generic[T]):
    """Immutable, executable snapshot of a `SearchBuilder`.

    A ``limit`` of 0 leaves the number of results to the index.
    """

    entity_type: Type[T]
    id_type: Optional[type]
    filters: Tuple[Tuple[str, SearchMatcher], ...]
    query: str
    index: Optional[str]
    limit: int
    context: SearchContext

    def query_string(self) -> str:
        """Return the query sent to the index: raw fragment first, then filter clauses."""
        clauses: List[str] = []
        for field, matcher in self.filters:
            value = matcher.value.strip()
            if not value:
                raise EmptyMatcherError(field)
            clauses.append(f"{field}:{value}")

        search_query = " ".join(part for part in (self.query.strip(), " ".join(clauses)) if part)
        if not search_query:
            raise InvalidSearchError()
        return search_query

    def index_name(self) -> str:
        if self.index:
            return self.index
        return self.context.strategies.require(self.entity_type).index_name

    def query_options(self) -> QueryOptions:
        if self.limit > MAX_SEARCH_LIMIT:
            raise SearchLimitExceededError(self.limit, MAX_SEARCH_LIMIT)
        if self.limit < 0:
            raise NegativeSearchLimitError(self.limit)
        return QueryOptions(
            ids_only=True,
            limit=self.limit if self.limit > 0 else None,
            consistency=Consistency.PER_DOCUMENT,
        )

    def now(self) -> List[Any]:
        """Run the search and return entities, or converted ids, in ranking order."""
        search_query = self.query_string()
        index_name = self.index_name()
        options = self.query_options()

        results = self.context.index_service.query(index_name, search_query, options)
        doc_ids = [result.doc_id for result in results]
        logger.debug(
            "search_executed",
            index=index_name,
            query=search_query,
            limit=self.limit,
            hits=len(doc_ids),
        )

        if self.id_type is not None:
            # Resolved at execution time, not when the builder was created
            converter = self.context.converters.require(self.id_type)
            return list(converter.convert(doc_ids))

        return list(self.context.entity_loader.load_all(self.entity_type, doc_ids))
