from __future__ import annotations

from .async_binding import AsyncDocumentStoreBinding
from .binding import DocumentStoreBinding, ReadResult, ScanResult, Status
from .codec import COLLECTION_KEY, METADATA_KEY, decode, encode
from .errors import DocumentStoreError, StoreProtocolError, StoreTransportError
from .handle import StoreHandle
from .http_client import HttpDocumentStoreClient
from .ids import document_id
from .memory_client import InMemoryDocumentStoreClient
from .settings import BindingSettings, load_settings

__all__ = [
    "AsyncDocumentStoreBinding",
    "DocumentStoreBinding",
    "ReadResult",
    "ScanResult",
    "Status",
    "COLLECTION_KEY",
    "METADATA_KEY",
    "decode",
    "encode",
    "DocumentStoreError",
    "StoreProtocolError",
    "StoreTransportError",
    "StoreHandle",
    "HttpDocumentStoreClient",
    "document_id",
    "InMemoryDocumentStoreClient",
    "BindingSettings",
    "load_settings",
]
