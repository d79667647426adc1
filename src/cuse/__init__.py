"""Search abstraction mapping domain objects onto a full-text index."""

from .converters import CallableIdConverter, IdConverter, IdConverterCatalog
from .documents import Consistency, Document, QueryOptions, ScoredDocument
from .engine import SearchEngine
from .exceptions import (
    ConfigError,
    CuseError,
    EmptyMatcherError,
    InvalidQueryError,
    InvalidSearchError,
    NegativeSearchLimitError,
    NotConfiguredError,
    NotConfiguredIdConverterError,
    NotConfiguredIndexingStrategyError,
    SearchError,
    SearchLimitExceededError,
    StorageError,
)
from .factory import create_search_engine
from .loader import EntityLoader, SqlAlchemyEntityLoader
from .logging import configure_logging
from .matchers import SearchMatcher, SearchQuery, is_, query
from .register import DocumentIndexRegister, IndexRegister
from .search import MAX_SEARCH_LIMIT, Search, SearchBuilder
from .strategy import AttributeIndexingStrategy, IndexingStrategy, IndexingStrategyCatalog

__all__ = [
    "AttributeIndexingStrategy",
    "CallableIdConverter",
    "ConfigError",
    "Consistency",
    "CuseError",
    "Document",
    "DocumentIndexRegister",
    "EmptyMatcherError",
    "EntityLoader",
    "IdConverter",
    "IdConverterCatalog",
    "IndexRegister",
    "IndexingStrategy",
    "IndexingStrategyCatalog",
    "InvalidQueryError",
    "InvalidSearchError",
    "MAX_SEARCH_LIMIT",
    "NegativeSearchLimitError",
    "NotConfiguredError",
    "NotConfiguredIdConverterError",
    "NotConfiguredIndexingStrategyError",
    "QueryOptions",
    "ScoredDocument",
    "Search",
    "SearchBuilder",
    "SearchEngine",
    "SearchError",
    "SearchLimitExceededError",
    "SearchMatcher",
    "SearchQuery",
    "StorageError",
    "configure_logging",
    "create_search_engine",
    "is_",
    "query",
]
