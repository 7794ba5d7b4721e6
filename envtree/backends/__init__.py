"""Backend contracts and implementations."""

from .in_memory import InMemoryBackend
from .nats import NatsBackend
from .postgres import PostgresBackend
from .protocol import Backend
from .redis import RedisBackend


__all__ = ["Backend", "InMemoryBackend", "NatsBackend", "PostgresBackend", "RedisBackend"]
