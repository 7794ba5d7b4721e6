"""Minimal example for publishing and loading a tree through a Redis-compatible backend."""

import asyncio

from envtree import load_tree, store_tree
from envtree.backends.redis import RedisBackend


async def run() -> None:
    """Write a tree under an entry point, then assemble it again."""
    backend = RedisBackend(url="redis://redis:6379/0")
    try:
        written = await store_tree(
            backend,
            {"DB": {"HOST": "db", "PORT": 5432}, "LOG": {"LEVEL": "info"}, "RETRIES": [1, 2, 3]},
            entry_point="SVC",
            replace=True,
        )
        print("written:", written)
        print("tree:", await load_tree(backend, entry_point="SVC"))
    finally:
        await backend.close()


def main() -> None:
    asyncio.run(run())


if __name__ == "__main__":
    main()
