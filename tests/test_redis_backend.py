import pytest

from envtree.backends import redis as redis_module
from envtree.backends.redis import RedisBackend


class _FakeRedisClient:
    def __init__(self) -> None:
        self.store: dict[str, str] = {}
        self.closed = False
        self.patterns: list[str] = []

    async def scan_iter(self, match: str):
        self.patterns.append(match)
        prefix = match.removesuffix("*").replace("\\", "")
        for key in sorted(self.store.keys()):
            if key.startswith(prefix):
                yield key

    async def mget(self, keys: list[str]) -> list[str | None]:
        return [self.store.get(key) for key in keys]

    async def mset(self, mapping: dict[str, str]) -> bool:
        self.store.update(mapping)
        return True

    async def delete(self, *keys: str) -> int:
        removed = 0
        for key in keys:
            if self.store.pop(key, None) is not None:
                removed += 1
        return removed

    async def aclose(self) -> None:
        self.closed = True


class _FakeBytesRedisClient(_FakeRedisClient):
    async def scan_iter(self, match: str):
        async for key in super().scan_iter(match):
            yield key.encode()

    async def mget(self, keys: list[str]) -> list[bytes | None]:
        values = await super().mget(keys)
        return [value.encode() if value is not None else None for value in values]


class _FakeExpiringRedisClient(_FakeRedisClient):
    async def mget(self, keys: list[str]) -> list[str | None]:
        values = await super().mget(keys)
        return [None, *values[1:]]


class _FakeCloseOnlyClient(_FakeRedisClient):
    aclose = None

    async def close(self) -> None:
        self.closed = True


@pytest.mark.asyncio
async def test_redis_backend_store_fetch_purge() -> None:
    client = _FakeRedisClient()
    backend = RedisBackend(client=client)

    await backend.store({"APP__Z": "1", "APP__A": "2", "OTHER__X": "3"})
    assert await backend.fetch("APP__") == [("APP__A", "2"), ("APP__Z", "1")]

    assert await backend.purge("APP__") == 2
    assert await backend.fetch("APP__") == []
    assert client.store == {"OTHER__X": "3"}


@pytest.mark.asyncio
async def test_redis_backend_delete_listed_keys() -> None:
    client = _FakeRedisClient()
    backend = RedisBackend(client=client)

    await backend.store({"APP__A": "1", "APP__B": "2"})
    assert await backend.delete(["APP__A", "APP__A", "MISSING"]) == 1
    assert await backend.delete([]) == 0
    assert client.store == {"APP__B": "2"}


@pytest.mark.asyncio
async def test_redis_backend_escapes_glob_characters_in_prefix() -> None:
    client = _FakeRedisClient()
    backend = RedisBackend(client=client)

    _ = await backend.fetch("A*[x]?__")
    assert client.patterns == ["A\\*\\[x\\]\\?__*"]


@pytest.mark.asyncio
async def test_redis_backend_empty_store_and_purge_are_noops() -> None:
    client = _FakeRedisClient()
    backend = RedisBackend(client=client)

    await backend.store({})
    assert await backend.purge("APP__") == 0
    assert client.store == {}


@pytest.mark.asyncio
async def test_redis_backend_normalizes_bytes_from_client() -> None:
    client = _FakeBytesRedisClient()
    backend = RedisBackend(client=client)

    await backend.store({"APP__KEY": "value"})
    assert await backend.fetch("APP__") == [("APP__KEY", "value")]


@pytest.mark.asyncio
async def test_redis_backend_skips_keys_expired_between_scan_and_read() -> None:
    client = _FakeExpiringRedisClient()
    backend = RedisBackend(client=client)

    await backend.store({"APP__A": "1", "APP__B": "2"})
    assert await backend.fetch("APP__") == [("APP__B", "2")]


@pytest.mark.asyncio
async def test_redis_backend_close_prefers_aclose() -> None:
    client = _FakeRedisClient()
    backend = RedisBackend(client=client)

    await backend.close()
    assert client.closed is True


@pytest.mark.asyncio
async def test_redis_backend_close_falls_back_to_close() -> None:
    client = _FakeCloseOnlyClient()
    backend = RedisBackend(client=client)

    await backend.close()
    assert client.closed is True


def test_redis_backend_requires_dependency_without_injected_client(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(redis_module, "redis_async", None)

    with pytest.raises(RuntimeError, match="redis dependency is required"):
        _ = RedisBackend()
