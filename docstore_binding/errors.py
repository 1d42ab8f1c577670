from __future__ import annotations


class DocumentStoreError(Exception):
    """Base class for failures talking to the document store."""


class StoreTransportError(DocumentStoreError):
    """The request never produced a response (connection refused, timeout, ...)."""


class StoreProtocolError(DocumentStoreError):
    """
    The store answered, but not with something we can use:
    unexpected status code, malformed JSON, or a payload of the wrong shape.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UnsupportedCommandError(StoreProtocolError):
    def __init__(self, command: object) -> None:
        super().__init__(f"unsupported command: {type(command).__name__}")
        self.command = command
