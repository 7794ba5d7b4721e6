"""NATS JetStream KV backend implementation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from typing_extensions import override


try:
    import nats as nats_module
except ImportError:  # pragma: no cover - exercised when dependency is absent
    nats_module = None

from .protocol import Backend


if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


_NOT_FOUND_ERROR_NAMES = {"BucketNotFoundError", "KeyNotFoundError", "NoKeysError"}


def _is_not_found_error(error: Exception) -> bool:
    return error.__class__.__name__ in _NOT_FOUND_ERROR_NAMES


class NatsBackend(Backend):
    """NATS JetStream KV backend.

    The backend uses an existing KV bucket by default.
    Set ``create_bucket=True`` to allow creating it when missing.
    """

    def __init__(
        self,
        url: str = "nats://localhost:4222",
        bucket: str = "envtree",
        *,
        client: Any | None = None,
        create_bucket: bool = False,
    ) -> None:
        """Create a backend using a NATS URL or injected client.

        Parameters
        ----------
        url
            NATS server URL used when ``client`` is not provided.
        bucket
            JetStream KV bucket name.
        client
            Optional injected connected NATS client with ``jetstream`` API.
        create_bucket
            When True, creates bucket if missing. Defaults to False.
        """
        super().__init__()
        self._url = url
        self._bucket_name = bucket
        self._client = client
        self._create_bucket = create_bucket
        self._kv: Any | None = None

    async def _ensure_kv(self) -> Any:
        if self._kv is not None:
            return self._kv

        if self._client is None:
            if nats_module is None:
                msg = "nats-py dependency is required for NatsBackend; install with `pip install envtree[nats]`"
                raise RuntimeError(msg)
            self._client = await nats_module.connect(servers=[self._url])

        jetstream = self._client.jetstream()

        try:
            self._kv = await jetstream.key_value(self._bucket_name)
        except Exception as error:
            if _is_not_found_error(error) and self._create_bucket:
                self._kv = await jetstream.create_key_value(bucket=self._bucket_name)
            else:
                msg = (
                    f"jetstream KV bucket '{self._bucket_name}' is not available; "
                    "create it first or initialize with create_bucket=True"
                )
                raise RuntimeError(msg) from error

        return self._kv

    async def _keys(self, kv: Any, prefix: str) -> list[str]:
        try:
            keys = await kv.keys()
        except Exception as error:
            if _is_not_found_error(error):
                return []
            raise
        return sorted(key for key in keys or () if key.startswith(prefix))

    @override
    async def fetch(self, prefix: str) -> list[tuple[str, str]]:
        kv = await self._ensure_kv()
        pairs: list[tuple[str, str]] = []
        for key in await self._keys(kv, prefix):
            try:
                entry = await kv.get(key)
            except Exception as error:
                if _is_not_found_error(error):
                    continue
                raise
            value = entry.value
            pairs.append((key, value.decode() if isinstance(value, bytes) else value))
        return pairs

    @override
    async def store(self, items: Mapping[str, str]) -> None:
        kv = await self._ensure_kv()
        for key, value in items.items():
            await kv.put(key, value.encode())

    @override
    async def purge(self, prefix: str) -> int:
        kv = await self._ensure_kv()
        keys = await self._keys(kv, prefix)
        for key in keys:
            await kv.delete(key)
        return len(keys)

    @override
    async def delete(self, keys: Iterable[str]) -> int:
        kv = await self._ensure_kv()
        existing = set(await self._keys(kv, ""))
        doomed = [key for key in dict.fromkeys(keys) if key in existing]
        for key in doomed:
            await kv.delete(key)
        return len(doomed)

    @override
    async def close(self) -> None:
        """Close NATS client resources."""
        if self._client is None:
            return
        await self._client.close()
