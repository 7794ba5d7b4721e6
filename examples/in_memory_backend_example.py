"""Minimal example for storing and loading a tree with the in-memory backend."""

from envtree import load_environ, load_tree_sync
from envtree.backends.in_memory import InMemoryBackend


def main() -> None:
    """Snapshot matching environment variables and read them back as a tree."""
    backend = InMemoryBackend(
        {
            "APP__DB__HOST": "localhost",
            "APP__DB__PORT": "5432",
            "APP__FEATURES": '[search, "beta,2"]',
        }
    )
    print("tree:", load_tree_sync(backend, entry_point="APP"))
    print("environ:", load_environ({"APP__DEBUG": "true", "HOME": "/root"}, entry_point="APP"))


if __name__ == "__main__":
    main()
