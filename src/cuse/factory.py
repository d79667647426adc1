"""Wiring helpers that assemble a `SearchEngine` from settings."""

from __future__ import annotations

from typing import Optional

import structlog

from cuse.config import IndexConfig, Settings, load_settings
from cuse.converters import IdConverterCatalog
from cuse.engine import SearchEngine
from cuse.exceptions import ConfigError
from cuse.index.base import IndexService
from cuse.index.whoosh_index import WhooshIndexService
from cuse.loader import EntityLoader, SqlAlchemyEntityLoader
from cuse.register import DocumentIndexRegister
from cuse.storage import get_engine, make_session_factory
from cuse.strategy import IndexingStrategyCatalog

logger = structlog.get_logger()


def build_index_service(cfg: IndexConfig) -> IndexService:
    """Create the Whoosh index service described by ``cfg``."""
    if cfg.storage == "file":
        assert cfg.path is not None
        return WhooshIndexService.in_directory(cfg.path, default_limit=cfg.default_limit)
    return WhooshIndexService(default_limit=cfg.default_limit)


def create_search_engine(
    settings: Optional[Settings] = None,
    *,
    strategies: Optional[IndexingStrategyCatalog] = None,
    converters: Optional[IdConverterCatalog] = None,
    entity_loader: Optional[EntityLoader] = None,
    index_service: Optional[IndexService] = None,
) -> SearchEngine:
    """Build a `SearchEngine` from settings and optional pre-built collaborators.

    Parameters
    ----------
    settings: Optional[Settings]
        Settings to wire from. Loaded from the environment when omitted.
    strategies: Optional[IndexingStrategyCatalog]
        Strategy catalog; an empty one is created when omitted.
    converters: Optional[IdConverterCatalog]
        Converter catalog; defaults to converters for int, str and UUID.
    entity_loader: Optional[EntityLoader]
        Loader for hydrated results. Built from ``settings.database.url`` when omitted.
    index_service: Optional[IndexService]
        Index to use instead of the one described by ``settings.index``.

    Raises
    ------
    ConfigError
        If no entity loader is given and no database URL is configured.
    """
    settings = settings if settings is not None else load_settings()

    if entity_loader is None:
        if not settings.database.url:
            raise ConfigError("An entity loader or CUSE_DATABASE__URL must be configured")
        db_engine = get_engine(settings.database.url, echo=settings.database.echo)
        entity_loader = SqlAlchemyEntityLoader(make_session_factory(db_engine))

    index_service = index_service if index_service is not None else build_index_service(settings.index)
    logger.info(
        "search_engine_created",
        app=settings.app.name,
        index_storage=settings.index.storage,
        loader=type(entity_loader).__name__,
    )
    return SearchEngine(
        entity_loader=entity_loader,
        id_converters=converters if converters is not None else IdConverterCatalog.with_defaults(),
        strategies=strategies if strategies is not None else IndexingStrategyCatalog(),
        index_register=DocumentIndexRegister(index_service),
        index_service=index_service,
    )
