from __future__ import annotations

from typing import Any, Collection, Mapping

METADATA_KEY = "@metadata"
COLLECTION_KEY = "@collection"
ID_KEY = "@id"


def as_text(value: Any) -> str:
    """
    Render a field value as text.

    Nested objects and arrays have no scalar text and come back as "".
    """
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (dict, list, tuple)):
        return ""
    return str(value)


def encode(record: Mapping[str, Any], table: str) -> dict[str, Any]:
    """
    Build the JSON document for a record.

    Every field is written as text, plus the metadata object tagging the
    document with its collection so collection-scoped queries can find it.
    None values are left out, same as absent fields. A record field named
    like the metadata key is overwritten.
    """
    doc: dict[str, Any] = {str(name): as_text(value) for name, value in record.items() if value is not None}
    doc[METADATA_KEY] = {COLLECTION_KEY: table}
    return doc


def decode(document: Mapping[str, Any], fields: Collection[str] | None = None) -> dict[str, str]:
    """
    Turn a stored document back into a flat record.

    The metadata field never surfaces. A non-empty `fields` restricts the
    result to those names. Null values are dropped, same as absent ones.
    """
    check_fields = bool(fields)
    result: dict[str, str] = {}
    for name, value in document.items():
        if name == METADATA_KEY:
            continue
        if check_fields and name not in fields:  # type: ignore[operator]
            continue
        if value is None:
            continue
        result[name] = as_text(value)
    return result
