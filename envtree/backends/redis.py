"""Redis-compatible backend implementation."""

from __future__ import annotations

import re
from inspect import isawaitable
from typing import TYPE_CHECKING, Any

from typing_extensions import override


try:
    import redis.asyncio as redis_async
except ImportError:  # pragma: no cover - exercised when dependency is absent
    redis_async = None

from .protocol import Backend


if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


_GLOB_SPECIALS = re.compile(r"([*?\[\]\\])")


def _normalize_string(value: str | bytes | None) -> str | None:
    if value is None:
        return None
    if isinstance(value, bytes):
        return value.decode()
    return value


def _match_pattern(prefix: str) -> str:
    return _GLOB_SPECIALS.sub(r"\\\1", prefix) + "*"


class RedisBackend(Backend):
    """Redis-compatible async backend using ``redis.asyncio`` client APIs."""

    def __init__(self, url: str = "redis://localhost:6379/0", *, client: Any | None = None) -> None:
        """Create a backend from URL or an injected async client.

        Parameters
        ----------
        url
            Redis connection URL used when ``client`` is not provided.
        client
            Optional injected client with ``scan_iter/mget/mset/delete/aclose`` API.
        """
        super().__init__()
        self._url = url
        if client is not None:
            self._client = client
            return

        if redis_async is None:
            msg = "redis dependency is required for RedisBackend; install with `pip install envtree[redis]`"
            raise RuntimeError(msg)

        self._client = redis_async.from_url(url, decode_responses=True)

    async def _keys(self, prefix: str) -> list[str]:
        keys: list[str] = []
        async for key in self._client.scan_iter(match=_match_pattern(prefix)):
            normalized = _normalize_string(key)
            if normalized is not None and normalized.startswith(prefix):
                keys.append(normalized)
        return sorted(keys)

    @override
    async def fetch(self, prefix: str) -> list[tuple[str, str]]:
        keys = await self._keys(prefix)
        if not keys:
            return []
        values = await self._client.mget(keys)
        pairs: list[tuple[str, str]] = []
        for key, value in zip(keys, values, strict=True):
            normalized = _normalize_string(value)
            # keys can expire between the scan and the read
            if normalized is not None:
                pairs.append((key, normalized))
        return pairs

    @override
    async def store(self, items: Mapping[str, str]) -> None:
        if not items:
            return
        await self._client.mset(dict(items))

    @override
    async def purge(self, prefix: str) -> int:
        keys = await self._keys(prefix)
        if not keys:
            return 0
        return int(await self._client.delete(*keys))

    @override
    async def delete(self, keys: Iterable[str]) -> int:
        doomed = list(dict.fromkeys(keys))
        if not doomed:
            return 0
        return int(await self._client.delete(*doomed))

    @override
    async def close(self) -> None:
        close_method = getattr(self._client, "aclose", None)
        if close_method is None:
            close_method = getattr(self._client, "close", None)
        if close_method is None:
            return

        maybe_awaitable = close_method()
        if isawaitable(maybe_awaitable):
            await maybe_awaitable
