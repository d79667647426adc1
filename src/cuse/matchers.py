"""Query fragments used to configure a search."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SearchMatcher:
    """Constraint on a single field, rendered as ``field:value``.

    Blank values are accepted here and rejected when the search runs.
    """

    value: str


@dataclass(frozen=True, slots=True)
class SearchQuery:
    """Pre-built raw query fragment passed to the index as is."""

    value: str


def is_(value: object) -> SearchMatcher:
    """Match documents whose field contains ``value``."""
    return SearchMatcher(str(value))


def query(value: str) -> SearchQuery:
    """Wrap a raw query fragment."""
    return SearchQuery(value)
