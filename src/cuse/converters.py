"""Converters from raw document identifiers to typed id values."""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Generic, List, Mapping, Optional, Sequence, TypeVar

from cuse.exceptions import NotConfiguredIdConverterError

IdT = TypeVar("IdT")


class IdConverter(ABC, Generic[IdT]):
    """Stateless conversion of document ids into one target id type."""

    @abstractmethod
    def convert(self, raw_ids: Sequence[str]) -> List[IdT]:
        """Convert ``raw_ids`` preserving their order."""
        raise NotImplementedError


class CallableIdConverter(IdConverter[IdT]):
    """Apply a one-argument callable to every raw id."""

    def __init__(self, func: Callable[[str], IdT]) -> None:
        self._func = func

    def convert(self, raw_ids: Sequence[str]) -> List[IdT]:
        return [self._func(raw_id) for raw_id in raw_ids]


class IdConverterCatalog:
    """Registry of id converters keyed by identifier type."""

    def __init__(self, converters: Optional[Mapping[type, IdConverter[Any]]] = None) -> None:
        self._converters: Dict[type, IdConverter[Any]] = dict(converters or {})

    @classmethod
    def with_defaults(cls) -> "IdConverterCatalog":
        """Catalog pre-populated with converters for ``int``, ``str`` and ``uuid.UUID``."""
        return cls(
            {
                int: CallableIdConverter(int),
                str: CallableIdConverter(str),
                uuid.UUID: CallableIdConverter(uuid.UUID),
            }
        )

    def register(self, id_type: type, converter: IdConverter[Any]) -> None:
        self._converters[id_type] = converter

    def get_converter(self, id_type: type) -> Optional[IdConverter[Any]]:
        return self._converters.get(id_type)

    def require(self, id_type: type) -> IdConverter[Any]:
        converter = self.get_converter(id_type)
        if converter is None:
            raise NotConfiguredIdConverterError(id_type)
        return converter

    def unregister(self, id_type: type) -> None:
        self._converters.pop(id_type, None)
