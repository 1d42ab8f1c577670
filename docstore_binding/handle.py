from __future__ import annotations

import logging
import threading

from .http_client import HttpDocumentStoreClient
from .interfaces import DocumentStoreClient, DocumentStoreFactory
from .settings import BindingSettings

logger = logging.getLogger(__name__)


class StoreHandle:
    """
    Owns the one store client shared by every binding in the process.

    The client is opened by the first acquire() and closed by the release()
    that brings the count back to zero. A later acquire() opens a fresh one.
    """

    def __init__(self, factory: DocumentStoreFactory) -> None:
        self._factory = factory
        self._guard = threading.Lock()
        self._client: DocumentStoreClient | None = None
        self._refs = 0

    @classmethod
    def from_settings(cls, settings: BindingSettings) -> "StoreHandle":
        def _open() -> DocumentStoreClient:
            return HttpDocumentStoreClient(
                settings.urls,
                settings.database,
                certificate=settings.certificate,
                timeout=settings.timeout,
            )

        return cls(_open)

    @property
    def ref_count(self) -> int:
        with self._guard:
            return self._refs

    @property
    def is_open(self) -> bool:
        with self._guard:
            return self._client is not None

    def acquire(self) -> DocumentStoreClient:
        with self._guard:
            if self._client is None:
                # a failing factory leaves the count untouched
                self._client = self._factory()
                logger.info("STORE HANDLE: opened %s", type(self._client).__name__)
            self._refs += 1
            return self._client

    def release(self) -> None:
        with self._guard:
            if self._refs == 0:
                raise RuntimeError("StoreHandle.release() called more times than acquire()")
            self._refs -= 1
            if self._refs > 0:
                return
            client, self._client = self._client, None
            try:
                if client is not None:
                    client.close()
                    logger.info("STORE HANDLE: closed %s", type(client).__name__)
            except Exception as e:
                logger.warning("STORE HANDLE: failed to close store client: %r", e)
