from __future__ import annotations

import logging
import ssl
from typing import Any, Sequence, Union

import httpx

from .commands import (
    CollectionRangeQuery,
    DeleteDocumentCommand,
    GetDocumentCommand,
    PutDocumentCommand,
    StoreCommand,
)
from .errors import StoreProtocolError, StoreTransportError, UnsupportedCommandError

logger = logging.getLogger(__name__)

CertTypes = Union[str, tuple[str, str]]


def client_ssl_context(certificate: CertTypes) -> ssl.SSLContext:
    """Default-verifying SSL context that presents the given client certificate (PEM)."""
    ctx = ssl.create_default_context()
    if isinstance(certificate, str):
        ctx.load_cert_chain(certfile=certificate)
    else:
        certfile, keyfile = certificate
        ctx.load_cert_chain(certfile=certfile, keyfile=keyfile)
    return ctx


class HttpDocumentStoreClient:
    """
    Talks to the document store's HTTP API:

      GET    /databases/{db}/docs?id=...   point fetch
      PUT    /databases/{db}/docs?id=...   point write (upsert)
      DELETE /databases/{db}/docs?id=...   point delete
      POST   /databases/{db}/queries       collection range query

    Requests go to the first node in `urls`; topology and failover belong to
    the cluster. One httpx.Client (and its connection pool) is shared by every
    thread using this object.
    """

    def __init__(
        self,
        urls: Sequence[str],
        database: str,
        *,
        certificate: CertTypes | None = None,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if not urls:
            raise ValueError("at least one store url is required")
        self._urls = tuple(u.rstrip("/") for u in urls)
        self._database = database
        client_kwargs: dict[str, Any] = {"base_url": self._urls[0], "timeout": timeout}
        if certificate is not None:
            client_kwargs["verify"] = client_ssl_context(certificate)
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.Client(**client_kwargs)
        logger.info("DOCSTORE CLIENT: connection created with %s (database=%s)", ",".join(self._urls), database)

    @property
    def urls(self) -> tuple[str, ...]:
        return self._urls

    @property
    def database(self) -> str:
        return self._database

    def _path(self, suffix: str) -> str:
        return f"/databases/{self._database}/{suffix}"

    def execute(self, command: StoreCommand) -> Any:
        if isinstance(command, GetDocumentCommand):
            return self._get(command)
        if isinstance(command, PutDocumentCommand):
            return self._put(command)
        if isinstance(command, DeleteDocumentCommand):
            return self._delete(command)
        if isinstance(command, CollectionRangeQuery):
            return self._query(command)
        raise UnsupportedCommandError(command)

    def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        logger.debug("DOCSTORE REQUEST: %s %s params=%s", method, path, kwargs.get("params"))
        try:
            return self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise StoreTransportError(f"{method} {path} failed: {e!r}") from e

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise StoreProtocolError(
                f"malformed JSON in response ({response.status_code})", status_code=response.status_code
            ) from e

    @staticmethod
    def _unexpected(response: httpx.Response) -> StoreProtocolError:
        body = response.text[:200] if response.content else ""
        return StoreProtocolError(
            f"unexpected status {response.status_code}: {body}", status_code=response.status_code
        )

    def _results(self, response: httpx.Response) -> list[Any]:
        payload = self._json(response)
        results = payload.get("Results") if isinstance(payload, dict) else None
        if not isinstance(results, list):
            raise StoreProtocolError("response has no Results list", status_code=response.status_code)
        return results

    def _get(self, command: GetDocumentCommand) -> dict[str, Any] | None:
        response = self._send("GET", self._path("docs"), params={"id": command.document_id})
        if response.status_code == 404:
            return None
        if response.status_code != 200:
            raise self._unexpected(response)
        results = self._results(response)
        if not results or results[0] is None:
            return None
        doc = results[0]
        if not isinstance(doc, dict):
            raise StoreProtocolError("document is not a JSON object", status_code=response.status_code)
        return doc

    def _put(self, command: PutDocumentCommand) -> None:
        response = self._send(
            "PUT", self._path("docs"), params={"id": command.document_id}, json=command.document
        )
        if response.status_code not in (200, 201):
            raise self._unexpected(response)

    def _delete(self, command: DeleteDocumentCommand) -> None:
        response = self._send("DELETE", self._path("docs"), params={"id": command.document_id})
        # deleting a missing document is not an error
        if response.status_code not in (200, 204, 404):
            raise self._unexpected(response)

    def _query(self, query: CollectionRangeQuery) -> list[dict[str, Any]]:
        body = {
            "Query": query.query_text,
            "QueryParameters": query.query_parameters,
            "PageSize": query.limit,
        }
        response = self._send("POST", self._path("queries"), json=body)
        if response.status_code != 200:
            raise self._unexpected(response)
        results = self._results(response)
        for doc in results:
            if not isinstance(doc, dict):
                raise StoreProtocolError("query result is not a JSON object", status_code=response.status_code)
        return results

    def close(self) -> None:
        self._client.close()
        logger.info("DOCSTORE CLIENT: connection to %s closed", self._urls[0])
