"""Key mapping between flat keys and tree paths."""

from .mapper import KeyMapper


__all__ = ["KeyMapper"]
