"""Entity loaders hydrate document identifiers into domain objects."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Sequence, Type, TypeVar

import structlog
from sqlalchemy import inspect, select
from sqlalchemy.exc import NoInspectionAvailable
from sqlalchemy.orm import Session, sessionmaker

from cuse.exceptions import StorageError
from cuse.storage import session_scope

T = TypeVar("T")

logger = structlog.get_logger()


class EntityLoader(ABC):
    """Abstract bulk loader of domain objects by document identifier.

    Implementations must return entities in the order of the supplied ids and
    define for themselves what happens to ids without an entity.
    """

    @abstractmethod
    def load_all(self, entity_type: Type[T], ids: Sequence[str]) -> List[T]:
        raise NotImplementedError


class SqlAlchemyEntityLoader(EntityLoader):
    """Load SQLAlchemy mapped entities by primary key with a single query.

    String ids are coerced to the Python type of the primary key column.
    Ids without a matching row are left out of the result.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def load_all(self, entity_type: Type[T], ids: Sequence[str]) -> List[T]:
        if not ids:
            return []

        try:
            mapper = inspect(entity_type)
        except NoInspectionAvailable as exc:
            raise StorageError(f"{entity_type.__name__} is not a mapped entity") from exc

        if len(mapper.primary_key) != 1:
            raise StorageError(f"{entity_type.__name__} must have a single-column primary key")
        column = mapper.primary_key[0]
        keys = [_coerce_key(column, raw_id) for raw_id in ids]

        with session_scope(self._session_factory) as session:
            rows = session.scalars(select(entity_type).where(column.in_(list(dict.fromkeys(keys))))).all()
            by_key: Dict[Any, T] = {mapper.primary_key_from_instance(row)[0]: row for row in rows}

        missing = len(set(keys) - set(by_key))
        if missing:
            logger.debug("entities_not_found", entity=entity_type.__name__, missing=missing)
        return [by_key[key] for key in keys if key in by_key]


def _coerce_key(column: Any, raw_id: str) -> Any:
    try:
        python_type = column.type.python_type
    except NotImplementedError:
        return raw_id
    if python_type is str:
        return raw_id
    try:
        return python_type(raw_id)
    except (TypeError, ValueError) as exc:
        raise StorageError(f"Cannot convert id {raw_id!r} to {python_type.__name__}") from exc
