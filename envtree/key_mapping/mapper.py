"""Key mapping between flat separator-joined keys and tree paths."""

from __future__ import annotations

from envtree.options import DEFAULT_FIELD_SEP


class KeyMapper:
    """Map between flat keys such as ``APP__DB__HOST`` and tree paths.

    With an ``entry_point`` only keys under ``<entry_point><sep>`` belong to
    the mapper and the entry point is not part of the path.
    """

    def __init__(self, entry_point: str | None = None, sep: str = DEFAULT_FIELD_SEP) -> None:
        super().__init__()
        if not sep:
            msg = "sep must not be empty"
            raise ValueError(msg)
        if entry_point is not None:
            if not entry_point:
                msg = "entry_point must not be empty"
                raise ValueError(msg)
            if sep in entry_point:
                msg = "entry_point must not contain separator"
                raise ValueError(msg)

        self.entry_point = entry_point
        self.sep = sep
        self.prefix = f"{entry_point}{sep}" if entry_point is not None else ""

    def full_key(self, *parts: str) -> str:
        """Build a flat key from one or more path segments."""
        if not parts:
            msg = "at least one key part is required"
            raise ValueError(msg)
        for part in parts:
            if not part:
                msg = "key parts must not be empty"
                raise ValueError(msg)
            if self.sep in part:
                msg = "key parts must not contain separator"
                raise ValueError(msg)
        return self.prefix + self.sep.join(parts)

    def matches(self, key: str) -> bool:
        """Return True when a flat key belongs to this entry point."""
        return key.startswith(self.prefix)

    def relative_parts(self, key: str) -> tuple[str, ...]:
        """Split a flat key into the path below the entry point."""
        if not self.matches(key):
            msg = f"key does not match entry point prefix: {key}"
            raise ValueError(msg)

        relative = key.removeprefix(self.prefix)
        if not relative:
            msg = "relative key path must not be empty"
            raise ValueError(msg)
        parts = tuple(relative.split(self.sep))
        if any(not part for part in parts):
            msg = f"invalid key path with empty segment: {key}"
            raise ValueError(msg)
        return parts
