from __future__ import annotations

import enum
import logging
import threading
from typing import Any, Collection, Mapping

from pydantic import BaseModel, Field

from .codec import decode, encode
from .commands import CollectionRangeQuery, DeleteDocumentCommand, GetDocumentCommand, PutDocumentCommand
from .handle import StoreHandle
from .ids import document_id
from .interfaces import DocumentStoreClient

logger = logging.getLogger(__name__)


class Status(str, enum.Enum):
    OK = "OK"
    NOT_FOUND = "NOT_FOUND"
    ERROR = "ERROR"


class ReadResult(BaseModel):
    status: Status
    record: dict[str, str] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status is Status.OK


class ScanResult(BaseModel):
    status: Status
    records: list[dict[str, str]] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status is Status.OK


class BindingNotInitializedError(RuntimeError):
    pass


class DocumentStoreBinding:
    """
    Benchmark-harness binding for a JSON document store.

    Each (table, key) record lives in its own document, id "table/key", tagged
    with the table as its collection. Every operation is one independent
    round trip through the shared client; failures come back as
    Status.ERROR, never as exceptions, and are never retried.

    Known simplifications:
    - update() replaces the whole document, exactly like insert(). Fields not
      passed to update() are dropped.
    - read() reports NOT_FOUND for a missing document, while a scan that
      matches nothing reports ERROR.
    """

    def __init__(self, handle: StoreHandle) -> None:
        self._handle = handle
        self._client: DocumentStoreClient | None = None
        self._lifecycle = threading.Lock()

    @property
    def initialized(self) -> bool:
        return self._client is not None

    def init(self) -> None:
        with self._lifecycle:
            if self._client is None:
                self._client = self._handle.acquire()

    def cleanup(self) -> None:
        with self._lifecycle:
            if self._client is None:
                return
            self._client = None
            self._handle.release()

    def __enter__(self) -> "DocumentStoreBinding":
        self.init()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.cleanup()

    def _store(self) -> DocumentStoreClient:
        client = self._client
        if client is None:
            raise BindingNotInitializedError("binding used before init()")
        return client

    def read(self, table: str, key: str, fields: Collection[str] | None = None) -> ReadResult:
        doc_id = document_id(table, key)
        try:
            doc = self._store().execute(GetDocumentCommand(doc_id))
            if doc is None:
                return ReadResult(status=Status.NOT_FOUND)
            return ReadResult(status=Status.OK, record=decode(doc, fields))
        except Exception as e:
            logger.warning("DOCSTORE READ: failed for %s: %r", doc_id, e, exc_info=True)
            return ReadResult(status=Status.ERROR)

    def scan(
        self,
        table: str,
        start_key: str,
        record_count: int,
        fields: Collection[str] | None = None,
    ) -> ScanResult:
        start_id = document_id(table, start_key)
        try:
            query = CollectionRangeQuery(collection=table, start_id=start_id, limit=record_count)
            docs = self._store().execute(query)
            if not docs:
                logger.debug("DOCSTORE SCAN: no documents in %s from %s", table, start_id)
                return ScanResult(status=Status.ERROR)
            return ScanResult(status=Status.OK, records=[decode(doc, fields) for doc in docs])
        except Exception as e:
            logger.warning("DOCSTORE SCAN: failed for %s from %s: %r", table, start_id, e, exc_info=True)
            return ScanResult(status=Status.ERROR)

    def update(self, table: str, key: str, values: Mapping[str, Any]) -> Status:
        return self.insert(table, key, values)

    def insert(self, table: str, key: str, values: Mapping[str, Any]) -> Status:
        doc_id = document_id(table, key)
        try:
            self._store().execute(PutDocumentCommand(doc_id, encode(values, table)))
            return Status.OK
        except Exception as e:
            logger.warning("DOCSTORE WRITE: failed for %s: %r", doc_id, e, exc_info=True)
            return Status.ERROR

    def delete(self, table: str, key: str) -> Status:
        doc_id = document_id(table, key)
        try:
            self._store().execute(DeleteDocumentCommand(doc_id))
            return Status.OK
        except Exception as e:
            logger.warning("DOCSTORE DELETE: failed for %s: %r", doc_id, e, exc_info=True)
            return Status.ERROR
