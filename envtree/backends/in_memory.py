"""In-memory backend implementation."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from typing_extensions import override

from .protocol import Backend


if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


class InMemoryBackend(Backend):
    """Dict-backed store for local development, tests, and environment snapshots."""

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        super().__init__()
        self._store: dict[str, str] = dict(initial or {})
        self._lock = asyncio.Lock()

    @override
    async def fetch(self, prefix: str) -> list[tuple[str, str]]:
        async with self._lock:
            return sorted((key, value) for key, value in self._store.items() if key.startswith(prefix))

    @override
    async def store(self, items: Mapping[str, str]) -> None:
        async with self._lock:
            self._store.update(items)

    @override
    async def purge(self, prefix: str) -> int:
        async with self._lock:
            doomed = [key for key in self._store if key.startswith(prefix)]
            for key in doomed:
                del self._store[key]
        return len(doomed)

    @override
    async def delete(self, keys: Iterable[str]) -> int:
        async with self._lock:
            removed = [key for key in dict.fromkeys(keys) if self._store.pop(key, None) is not None]
        return len(removed)

    @override
    async def close(self) -> None:
        return

    def snapshot(self) -> dict[str, str]:
        """Return a shallow copy of the stored pairs."""
        return dict(self._store)
