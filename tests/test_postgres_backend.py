from typing import Any

import pytest

from envtree.backends import postgres as postgres_module
from envtree.backends.postgres import PostgresBackend


class UndefinedTableError(Exception):
    pass


def _like_to_prefix(pattern: str) -> str:
    prefix = pattern.removesuffix("%")
    return prefix.replace("\\%", "%").replace("\\_", "_").replace("\\\\", "\\")


class _FakePostgresClient:
    def __init__(self, *, table_exists: bool = True) -> None:
        super().__init__()
        self.store: dict[str, str] = {}
        self.closed = False
        self.table_exists = table_exists
        self.patterns: list[str] = []

    async def fetch(self, _query: str, pattern: str) -> list[dict[str, str]]:
        if not self.table_exists:
            raise UndefinedTableError
        self.patterns.append(pattern)
        prefix = _like_to_prefix(pattern)
        return [{"k": key, "v": self.store[key]} for key in sorted(self.store) if key.startswith(prefix)]

    async def executemany(self, query: str, args: list[tuple[str, str]]) -> None:
        if not self.table_exists:
            raise UndefinedTableError
        assert query.startswith("INSERT INTO")
        for key, value in args:
            self.store[key] = value

    async def execute(self, query: str, *args: Any) -> str:
        if query.startswith("CREATE TABLE IF NOT EXISTS"):
            self.table_exists = True
            return "CREATE TABLE"

        if not self.table_exists:
            raise UndefinedTableError

        if query.startswith("DELETE FROM") and "ANY(" in query:
            doomed = [key for key in args[0] if key in self.store]
            for key in doomed:
                del self.store[key]
            return f"DELETE {len(doomed)}"

        if query.startswith("DELETE FROM"):
            prefix = _like_to_prefix(args[0])
            doomed = [key for key in self.store if key.startswith(prefix)]
            for key in doomed:
                del self.store[key]
            return f"DELETE {len(doomed)}"

        return "OK"

    async def close(self) -> None:
        self.closed = True


class _FakeTupleRowClient(_FakePostgresClient):
    async def fetch(self, query: str, pattern: str) -> list[tuple[str, str]]:
        rows = await super().fetch(query, pattern)
        return [(row["k"], row["v"]) for row in rows]


@pytest.mark.asyncio
async def test_postgres_backend_store_fetch_purge() -> None:
    client = _FakePostgresClient(table_exists=True)
    backend = PostgresBackend(client=client)

    await backend.store({"APP__Z": "1", "APP__A": "2", "OTHER__X": "3"})
    assert await backend.fetch("APP__") == [("APP__A", "2"), ("APP__Z", "1")]

    assert await backend.purge("APP__") == 2
    assert client.store == {"OTHER__X": "3"}


@pytest.mark.asyncio
async def test_postgres_backend_delete_listed_keys() -> None:
    client = _FakePostgresClient(table_exists=True)
    backend = PostgresBackend(client=client)

    await backend.store({"APP__A": "1", "APP__B": "2"})
    assert await backend.delete(["APP__A", "APP__A", "MISSING"]) == 1
    assert await backend.delete([]) == 0
    assert client.store == {"APP__B": "2"}


@pytest.mark.asyncio
async def test_postgres_backend_escapes_like_wildcards() -> None:
    client = _FakePostgresClient(table_exists=True)
    backend = PostgresBackend(client=client)

    _ = await backend.fetch("APP__50%")
    assert client.patterns == ["APP\\_\\_50\\%%"]


@pytest.mark.asyncio
async def test_postgres_backend_accepts_tuple_rows() -> None:
    client = _FakeTupleRowClient(table_exists=True)
    backend = PostgresBackend(client=client)

    await backend.store({"APP__A": "1"})
    assert await backend.fetch("APP__") == [("APP__A", "1")]


@pytest.mark.asyncio
async def test_postgres_backend_missing_table_raises_runtime_error() -> None:
    backend = PostgresBackend(client=_FakePostgresClient(table_exists=False), create_table=False)

    with pytest.raises(RuntimeError, match="postgres table 'envtree' is not available"):
        _ = await backend.fetch("APP__")


@pytest.mark.asyncio
async def test_postgres_backend_creates_table_when_enabled() -> None:
    client = _FakePostgresClient(table_exists=False)
    backend = PostgresBackend(client=client, create_table=True)

    await backend.store({"APP__A": "1"})
    assert client.table_exists is True
    assert await backend.fetch("") == [("APP__A", "1")]


def test_postgres_backend_rejects_invalid_table_name() -> None:
    with pytest.raises(ValueError, match="table must be a valid unquoted SQL identifier"):
        _ = PostgresBackend(client=_FakePostgresClient(), table="bad-name")


@pytest.mark.asyncio
async def test_postgres_backend_close_closes_client() -> None:
    client = _FakePostgresClient()
    backend = PostgresBackend(client=client)

    await backend.close()
    assert client.closed is True


@pytest.mark.asyncio
async def test_postgres_backend_requires_dependency_without_injected_client(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(postgres_module, "asyncpg_module", None)
    backend = PostgresBackend(client=None)

    with pytest.raises(RuntimeError, match="asyncpg dependency is required"):
        _ = await backend.fetch("APP__")
