from __future__ import annotations

SEPARATOR = "/"


def document_id(table: str, key: str) -> str:
    """
    Map a logical (table, key) pair to the store's document id.

    Keys never contain the separator, so ids never collide across tables.
    """
    return f"{table}{SEPARATOR}{key}"
