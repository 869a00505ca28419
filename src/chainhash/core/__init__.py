from .chained import ChainConfig, ChainedHashMap, ChainedIterator, bucket_index
from .pair_store import DEFAULT_CHAIN_CAPACITY, PairStore, PairStoreIterator

__all__ = [
    "ChainConfig",
    "ChainedHashMap",
    "ChainedIterator",
    "PairStore",
    "PairStoreIterator",
    "bucket_index",
    "DEFAULT_CHAIN_CAPACITY",
]
