import pytest

from envtree.backends.in_memory import InMemoryBackend


@pytest.mark.asyncio
async def test_store_then_fetch_by_prefix_sorted() -> None:
    backend = InMemoryBackend()
    await backend.store({"APP__Z": "1", "APP__A": "2", "OTHER__X": "3"})

    assert await backend.fetch("APP__") == [("APP__A", "2"), ("APP__Z", "1")]
    assert await backend.fetch("OTHER__") == [("OTHER__X", "3")]
    assert await backend.fetch("missing") == []


@pytest.mark.asyncio
async def test_store_replaces_existing_values() -> None:
    backend = InMemoryBackend({"APP__A": "old"})
    await backend.store({"APP__A": "new"})

    assert await backend.fetch("") == [("APP__A", "new")]


@pytest.mark.asyncio
async def test_purge_removes_prefix_and_counts() -> None:
    backend = InMemoryBackend({"APP__A": "1", "APP__B": "2", "KEEP": "3"})

    assert await backend.purge("APP__") == 2
    assert await backend.purge("APP__") == 0
    assert backend.snapshot() == {"KEEP": "3"}


@pytest.mark.asyncio
async def test_close_is_noop() -> None:
    backend = InMemoryBackend({"k": "v"})
    await backend.close()
    assert await backend.fetch("k") == [("k", "v")]


@pytest.mark.asyncio
async def test_delete_removes_listed_keys_and_counts_existing() -> None:
    backend = InMemoryBackend({"APP__A": "1", "APP__B": "2", "KEEP": "3"})

    assert await backend.delete(["APP__A", "APP__A", "MISSING"]) == 1
    assert await backend.delete([]) == 0
    assert backend.snapshot() == {"APP__B": "2", "KEEP": "3"}
