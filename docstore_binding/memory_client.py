from __future__ import annotations

import copy
import threading
from typing import Any

from .codec import COLLECTION_KEY, ID_KEY, METADATA_KEY
from .commands import (
    CollectionRangeQuery,
    DeleteDocumentCommand,
    GetDocumentCommand,
    PutDocumentCommand,
    StoreCommand,
)
from .errors import StoreTransportError, UnsupportedCommandError


class InMemoryDocumentStoreClient:
    """
    Keeps documents in a dict, behind one lock.

    - Stores and returns deep copies; callers never share state with the store.
    - Stamps @metadata.@id on write, as the real store does.
    - Range queries are ordered by id and scoped by the @collection tag.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._docs: dict[str, dict[str, Any]] = {}
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def execute(self, command: StoreCommand) -> Any:
        with self._guard:
            if self._closed:
                raise StoreTransportError("in-memory store is closed")
            if isinstance(command, GetDocumentCommand):
                doc = self._docs.get(command.document_id)
                return copy.deepcopy(doc) if doc is not None else None
            if isinstance(command, PutDocumentCommand):
                doc = copy.deepcopy(command.document)
                meta = doc.get(METADATA_KEY)
                if not isinstance(meta, dict):
                    meta = {}
                meta[ID_KEY] = command.document_id
                doc[METADATA_KEY] = meta
                self._docs[command.document_id] = doc
                return None
            if isinstance(command, DeleteDocumentCommand):
                self._docs.pop(command.document_id, None)
                return None
            if isinstance(command, CollectionRangeQuery):
                return self._query(command)
        raise UnsupportedCommandError(command)

    def _query(self, query: CollectionRangeQuery) -> list[dict[str, Any]]:
        matches: list[dict[str, Any]] = []
        for doc_id in sorted(self._docs):
            if len(matches) >= query.limit:
                break
            if doc_id < query.start_id:
                continue
            doc = self._docs[doc_id]
            if doc.get(METADATA_KEY, {}).get(COLLECTION_KEY) != query.collection:
                continue
            matches.append(copy.deepcopy(doc))
        return matches

    def close(self) -> None:
        with self._guard:
            self._closed = True

    @property
    def size(self) -> int:
        with self._guard:
            return len(self._docs)
