"""Contract helpers for the chained hash dictionary."""

from .error import (
    BadInputError,
    ChainHashError,
    ConcurrentModificationError,
    InvariantError,
    KeyNotFoundError,
    NoSuchElementError,
)

__all__ = [
    "ChainHashError",
    "KeyNotFoundError",
    "NoSuchElementError",
    "ConcurrentModificationError",
    "BadInputError",
    "InvariantError",
]
