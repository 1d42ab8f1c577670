from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union


def quote_literal(value: str) -> str:
    """Quote a string literal for the store's query language."""
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


@dataclass(frozen=True)
class GetDocumentCommand:
    document_id: str


@dataclass(frozen=True)
class PutDocumentCommand:
    document_id: str
    document: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class DeleteDocumentCommand:
    document_id: str


@dataclass(frozen=True)
class CollectionRangeQuery:
    """
    Documents of one collection whose id sorts at or after `start_id`,
    at most `limit` of them.

    The store orders results by id, which is what turns this predicate into
    an ordered key scan. The start id is bound as a query parameter; only the
    collection name is spliced into the query text.
    """

    collection: str
    start_id: str
    limit: int

    def __post_init__(self) -> None:
        if isinstance(self.limit, bool) or not isinstance(self.limit, int) or self.limit < 0:
            raise ValueError(f"limit must be a non-negative integer, got {self.limit!r}")

    @property
    def query_text(self) -> str:
        return f"from {quote_literal(self.collection)} where id() >= $start"

    @property
    def query_parameters(self) -> dict[str, str]:
        return {"start": self.start_id}


StoreCommand = Union[GetDocumentCommand, PutDocumentCommand, DeleteDocumentCommand, CollectionRangeQuery]
