"""Value objects exchanged between the search core and an index service."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional


class Consistency(str, Enum):
    """Read consistency requested from the index."""

    # Every read reflects the latest write of each document.
    PER_DOCUMENT = "per_document"
    GLOBAL = "global"


@dataclass(frozen=True, slots=True)
class Document:
    """A document as written into an index.

    Attributes
    ----------
    doc_id: str
        Key of the document inside its index.
    index_name: str
        Name of the index the document belongs to.
    fields: Mapping[str, Any]
        Searchable field values keyed by field name.
    """

    doc_id: str
    index_name: str
    fields: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ScoredDocument:
    """A single ranked hit returned by an index query."""

    doc_id: str
    score: float
    fields: Optional[Mapping[str, Any]] = None


@dataclass(frozen=True, slots=True)
class QueryOptions:
    """Options sent along with a query string.

    A ``limit`` of None leaves the number of results to the index default.
    """

    ids_only: bool = True
    limit: Optional[int] = None
    consistency: Consistency = Consistency.PER_DOCUMENT
