"""Backend interface definitions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


class Backend(ABC):
    """Async store of flat raw key/value pairs."""

    @abstractmethod
    async def fetch(self, prefix: str) -> list[tuple[str, str]]:
        """Return all ``(key, raw value)`` pairs whose key starts with prefix, sorted by key."""

    @abstractmethod
    async def store(self, items: Mapping[str, str]) -> None:
        """Store raw values, replacing existing keys."""

    @abstractmethod
    async def purge(self, prefix: str) -> int:
        """Delete every key beginning with prefix and return how many were removed."""

    @abstractmethod
    async def delete(self, keys: Iterable[str]) -> int:
        """Delete the given keys and return how many of them existed."""

    @abstractmethod
    async def close(self) -> None:
        """Close any backend resources."""
