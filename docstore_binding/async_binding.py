from __future__ import annotations

import asyncio
from typing import Any, Collection, Mapping

from .binding import DocumentStoreBinding, ReadResult, ScanResult, Status


class AsyncDocumentStoreBinding:
    """
    Async wrapper around DocumentStoreBinding for asyncio-driven harnesses.
    Uses asyncio.to_thread so store round trips never block the event loop.
    """

    def __init__(self, binding: DocumentStoreBinding) -> None:
        self._binding = binding

    @property
    def binding(self) -> DocumentStoreBinding:
        return self._binding

    async def init(self) -> None:
        await asyncio.to_thread(self._binding.init)

    async def cleanup(self) -> None:
        await asyncio.to_thread(self._binding.cleanup)

    async def __aenter__(self) -> "AsyncDocumentStoreBinding":
        await self.init()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.cleanup()

    async def read(self, table: str, key: str, fields: Collection[str] | None = None) -> ReadResult:
        return await asyncio.to_thread(self._binding.read, table, key, fields)

    async def scan(
        self, table: str, start_key: str, record_count: int, fields: Collection[str] | None = None
    ) -> ScanResult:
        return await asyncio.to_thread(self._binding.scan, table, start_key, record_count, fields)

    async def insert(self, table: str, key: str, values: Mapping[str, Any]) -> Status:
        return await asyncio.to_thread(self._binding.insert, table, key, values)

    async def update(self, table: str, key: str, values: Mapping[str, Any]) -> Status:
        return await asyncio.to_thread(self._binding.update, table, key, values)

    async def delete(self, table: str, key: str) -> Status:
        return await asyncio.to_thread(self._binding.delete, table, key)
