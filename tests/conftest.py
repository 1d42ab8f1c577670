from __future__ import annotations

import json
import re
from pathlib import Path
import sys
from typing import Any

import httpx
import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from docstore_binding.binding import DocumentStoreBinding  # noqa: E402
from docstore_binding.handle import StoreHandle  # noqa: E402
from docstore_binding.memory_client import InMemoryDocumentStoreClient  # noqa: E402

QUERY_RE = re.compile(r"^from '((?:[^'\\]|\\.)*)' where id\(\) >= \$start$")


class FakeStoreServer:
    """
    Just enough of the store's HTTP API to drive HttpDocumentStoreClient.
    Every request is recorded in `requests`.
    """

    def __init__(self, database: str = "ycsb") -> None:
        self.database = database
        self.docs: dict[str, dict[str, Any]] = {}
        self.requests: list[httpx.Request] = []

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        prefix = f"/databases/{self.database}/"
        path = request.url.path
        if not path.startswith(prefix):
            return httpx.Response(404, json={"Message": "database not found"})
        endpoint = path[len(prefix):]

        if endpoint == "docs":
            doc_id = request.url.params.get("id")
            if request.method == "GET":
                doc = self.docs.get(doc_id)
                if doc is None:
                    return httpx.Response(404)
                return httpx.Response(200, json={"Results": [doc], "Includes": {}})
            if request.method == "PUT":
                doc = json.loads(request.content)
                doc.setdefault("@metadata", {})["@id"] = doc_id
                self.docs[doc_id] = doc
                return httpx.Response(201, json={"Id": doc_id, "ChangeVector": "A:1"})
            if request.method == "DELETE":
                self.docs.pop(doc_id, None)
                return httpx.Response(204)

        if endpoint == "queries" and request.method == "POST":
            body = json.loads(request.content)
            m = QUERY_RE.match(body["Query"])
            if m is None:
                return httpx.Response(400, json={"Message": "invalid query"})
            collection = re.sub(r"\\(.)", r"\1", m.group(1))
            start = body["QueryParameters"]["start"]
            results = [
                self.docs[doc_id]
                for doc_id in sorted(self.docs)
                if doc_id >= start and self.docs[doc_id].get("@metadata", {}).get("@collection") == collection
            ][: body["PageSize"]]
            return httpx.Response(200, json={"Results": results, "TotalResults": len(results)})

        return httpx.Response(405)


@pytest.fixture
def memory_client() -> InMemoryDocumentStoreClient:
    return InMemoryDocumentStoreClient()


@pytest.fixture
def memory_handle(memory_client: InMemoryDocumentStoreClient) -> StoreHandle:
    return StoreHandle(lambda: memory_client)


@pytest.fixture
def binding(memory_handle: StoreHandle):
    b = DocumentStoreBinding(memory_handle)
    b.init()
    yield b
    b.cleanup()


@pytest.fixture
def fake_server() -> FakeStoreServer:
    return FakeStoreServer()
