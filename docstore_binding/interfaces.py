from __future__ import annotations

from typing import Any, Callable, Protocol

from .commands import StoreCommand


class DocumentStoreClient(Protocol):
    """
    Minimal command-executing interface to a JSON document store.

    - GetDocumentCommand -> the document, or None
    - PutDocumentCommand / DeleteDocumentCommand -> None
    - CollectionRangeQuery -> list of documents, in store order
    """

    def execute(self, command: StoreCommand) -> Any:
        """Run one command as a single round trip; raise DocumentStoreError on failure."""
        ...

    def close(self) -> None:
        """Release connections held by the client."""
        ...


DocumentStoreFactory = Callable[[], DocumentStoreClient]
