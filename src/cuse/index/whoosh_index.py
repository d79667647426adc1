"""Whoosh-backed index service.

Keeps one Whoosh index per index name inside a single storage, either RAM or a
directory on disk. Documents get a unique ``doc_id``, a catch-all ``all_text``
field for unqualified terms, and one dynamic text field per document field so
that ``field:value`` clauses can be parsed.
"""

from __future__ import annotations

import threading
from typing import Any, Iterable, List, Mapping, Optional

import structlog
from whoosh import scoring
from whoosh.analysis import StemmingAnalyzer
from whoosh.fields import ID, TEXT, Schema
from whoosh.filedb.filestore import FileStorage, RamStorage, Storage
from whoosh.index import Index
from whoosh.qparser import AndGroup, QueryParser

from cuse.documents import Document, QueryOptions, ScoredDocument
from cuse.index.base import IndexService

logger = structlog.get_logger()

ID_FIELD = "doc_id"
CATCH_ALL_FIELD = "all_text"
_RESERVED_FIELDS = frozenset({ID_FIELD, CATCH_ALL_FIELD})


def _make_schema() -> Schema:
    analyzer = StemmingAnalyzer()
    schema = Schema(
        doc_id=ID(stored=True, unique=True),
        all_text=TEXT(analyzer=analyzer),
    )
    # Any other field name resolves to a stored text field
    schema.add("*", TEXT(stored=True, analyzer=analyzer), glob=True)
    return schema


def _field_text(value: Any) -> str:
    if isinstance(value, (list, tuple, set, frozenset)):
        return " ".join(str(v) for v in value)
    return str(value)


def _to_index_row(document: Document) -> Mapping[str, str]:
    row = {}
    for name, value in document.fields.items():
        if name in _RESERVED_FIELDS or name.startswith("_"):
            raise ValueError(f"Field name {name!r} is reserved and cannot be indexed")
        row[name] = _field_text(value)
    row[CATCH_ALL_FIELD] = " ".join(row.values())
    row[ID_FIELD] = document.doc_id
    return row


class WhooshIndexService(IndexService):
    """Index service over Whoosh storage.

    Writes are committed before ``write`` returns and every query opens a
    fresh searcher, so reads always observe the latest write of each document
    whatever consistency the options request.

    Parameters
    ----------
    storage: Optional[Storage]
        Whoosh storage holding the indexes. Defaults to a new ``RamStorage``.
    default_limit: Optional[int]
        Result cap applied when a query does not set a limit. None returns all hits.
    """

    def __init__(self, storage: Optional[Storage] = None, *, default_limit: Optional[int] = None) -> None:
        self._storage = storage if storage is not None else RamStorage()
        self._default_limit = default_limit
        self._lock = threading.Lock()

    @classmethod
    def in_directory(cls, path: str, *, default_limit: Optional[int] = None) -> "WhooshIndexService":
        """Create a service persisting its indexes under ``path``."""
        storage = FileStorage(path).create()
        return cls(storage, default_limit=default_limit)

    def _open(self, index_name: str, *, create: bool = False) -> Optional[Index]:
        if self._storage.index_exists(indexname=index_name):
            return self._storage.open_index(indexname=index_name)
        if not create:
            return None
        logger.info("index_created", index=index_name)
        return self._storage.create_index(_make_schema(), indexname=index_name)

    def write(self, document: Document) -> None:
        row = _to_index_row(document)
        with self._lock:
            idx = self._open(document.index_name, create=True)
            assert idx is not None
            with idx.writer() as writer:
                writer.update_document(**row)
        logger.debug("index_document_written", index=document.index_name, doc_id=document.doc_id)

    def delete(self, index_name: str, ids: Iterable[str]) -> None:
        doc_ids = [str(doc_id) for doc_id in ids]
        with self._lock:
            idx = self._open(index_name)
            if idx is None:
                return
            with idx.writer() as writer:
                for doc_id in doc_ids:
                    writer.delete_by_term(ID_FIELD, doc_id)
        logger.debug("index_documents_deleted", index=index_name, count=len(doc_ids))

    def query(self, index_name: str, query_string: str, options: QueryOptions) -> List[ScoredDocument]:
        idx = self._open(index_name)
        if idx is None:
            return []

        limit = options.limit if options.limit is not None else self._default_limit
        with idx.searcher(weighting=scoring.BM25F()) as searcher:
            parser = QueryParser(CATCH_ALL_FIELD, schema=idx.schema, group=AndGroup)
            results = searcher.search(parser.parse(query_string), limit=limit)
            hits: List[ScoredDocument] = []
            for hit in results:
                fields = None
                if not options.ids_only:
                    fields = {k: v for k, v in hit.fields().items() if k != ID_FIELD}
                hits.append(ScoredDocument(doc_id=hit[ID_FIELD], score=float(hit.score or 0.0), fields=fields))
        return hits
