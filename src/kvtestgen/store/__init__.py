"""Storage backends.

Backends are looked up by name; each one is a factory taking a path and
``StoreOptions`` and returning a newly created ``KeyValueStore``.
"""

from pathlib import Path
from typing import Dict, List, Union

from kvtestgen.errors import StoreError
from kvtestgen.store.base import KeyValueStore, StoreFactory, StoreOptions
from kvtestgen.store.dbm_gnu import open_dbm_gnu_store
from kvtestgen.store.gdbm import open_gdbm_store
from kvtestgen.store.memory import MemoryStoreFactory, open_memory_store

_BACKENDS: Dict[str, StoreFactory] = {
    "gdbm": open_gdbm_store,
    "dbm": open_dbm_gnu_store,
    "memory": open_memory_store,
}


def available_backends() -> List[str]:
    return list(_BACKENDS)


def get_backend(name: str) -> StoreFactory:
    try:
        return _BACKENDS[name]
    except KeyError:
        raise ValueError(
            f"unknown store backend {name!r} (expected one of: {', '.join(_BACKENDS)})"
        ) from None


def open_store(backend: str, path: Union[str, Path], options: StoreOptions) -> KeyValueStore:
    """Create a store at ``path`` with the named backend."""
    return get_backend(backend)(path, options)


__all__ = [
    "KeyValueStore",
    "MemoryStoreFactory",
    "StoreError",
    "StoreFactory",
    "StoreOptions",
    "available_backends",
    "get_backend",
    "open_store",
]
