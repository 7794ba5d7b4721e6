"""Minimal example for loading a tree from a NATS JetStream KV bucket."""

import asyncio

from envtree import load_tree, store_tree
from envtree.backends.nats import NatsBackend


async def run() -> None:
    """Store configuration entries in a bucket and load them back as a tree."""
    backend = NatsBackend(url="nats://nats:4222", bucket="envtree", create_bucket=True)
    try:
        _ = await store_tree(backend, {"CACHE": {"TTL": 30.0, "ENABLED": True}}, entry_point="APP")
        print("tree:", await load_tree(backend, entry_point="APP"))
    finally:
        await backend.close()


def main() -> None:
    asyncio.run(run())


if __name__ == "__main__":
    main()
