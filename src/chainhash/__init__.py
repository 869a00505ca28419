"""Chained hash dictionary: separate chaining over array-backed pair stores."""

from . import analysis, contracts, core
from .contracts import KeyNotFoundError, NoSuchElementError
from .core import ChainConfig, ChainedHashMap, PairStore

__all__ = [
    "analysis",
    "contracts",
    "core",
    "ChainConfig",
    "ChainedHashMap",
    "PairStore",
    "KeyNotFoundError",
    "NoSuchElementError",
]
