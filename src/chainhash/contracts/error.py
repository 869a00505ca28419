"""Error taxonomy shared by the chained hash dictionary containers."""

from __future__ import annotations

from typing import Any


class ChainHashError(Exception):
    """Base exception that carries an optional hint for the caller."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class KeyNotFoundError(ChainHashError, KeyError):
    """Raised by ``get``/``remove`` when the key is absent."""

    def __init__(self, key: Any, *, hint: str | None = None) -> None:
        super().__init__(f"key not found: {key!r}", hint=hint)
        self.key = key

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message instead.
        return str(self.args[0])


class NoSuchElementError(ChainHashError, StopIteration):
    """Raised when an exhausted iterator is asked for another item."""


class ConcurrentModificationError(ChainHashError, RuntimeError):
    """Raised when a table changes structurally under a live iterator."""


class BadInputError(ChainHashError, ValueError):
    """Raised for invalid configuration values or malformed config files."""


class InvariantError(ChainHashError):
    """Raised when internal consistency checks fail."""


__all__ = [
    "ChainHashError",
    "KeyNotFoundError",
    "NoSuchElementError",
    "ConcurrentModificationError",
    "BadInputError",
    "InvariantError",
]
