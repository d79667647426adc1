"""Index services the search core can run against."""

from .base import IndexService
from .whoosh_index import WhooshIndexService

__all__ = ["IndexService", "WhooshIndexService"]
