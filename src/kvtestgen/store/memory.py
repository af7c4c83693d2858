"""In-process store for tests and dry runs."""

from pathlib import Path
from typing import Dict, Optional, Union

from kvtestgen.errors import StoreError
from kvtestgen.store.base import KeyValueStore, StoreOptions

# Mirrors gdbm_store's return value for an insert over an existing key
KEY_EXISTS = 1


class MemoryStore(KeyValueStore):
    """Dict-backed store; keeps its contents after close for inspection."""

    def __init__(
        self,
        path: Union[str, Path],
        options: StoreOptions,
        fail_on_key: Optional[bytes] = None,
        fail_code: int = 13,
    ):
        super().__init__(path)
        self.options = options
        self.data: Dict[bytes, bytes] = {}
        self.write_calls = 0
        self._fail_on_key = fail_on_key
        self._fail_code = fail_code

    def count(self) -> int:
        self._check_open()
        return len(self.data)

    def store(self, key: bytes, value: bytes, replace: bool = True) -> None:
        self._check_open()
        if key == self._fail_on_key:
            raise StoreError("write rejected", code=self._fail_code)
        if not replace and key in self.data:
            raise StoreError("cannot replace existing key", code=KEY_EXISTS)
        self.data[key] = value
        self.write_calls += 1

    def _close(self) -> None:
        pass

    def _check_open(self) -> None:
        if self.closed:
            raise StoreError("store is closed")


class MemoryStoreFactory:
    """Creates ``MemoryStore`` objects and remembers them by path.

    ``fail_open`` makes every open fail; ``fail_on_key`` makes the write of
    that key fail; ``preload`` seeds each new store, which simulates an
    engine that does not truncate.
    """

    def __init__(
        self,
        fail_open: Optional[str] = None,
        fail_on_key: Optional[bytes] = None,
        preload: Optional[Dict[bytes, bytes]] = None,
    ):
        self.fail_open = fail_open
        self.fail_on_key = fail_on_key
        self.preload = dict(preload or {})
        self.stores: Dict[str, MemoryStore] = {}

    def __call__(self, path: Union[str, Path], options: StoreOptions) -> MemoryStore:
        if self.fail_open is not None:
            raise StoreError(self.fail_open)
        store = MemoryStore(path, options, fail_on_key=self.fail_on_key)
        store.data.update(self.preload)
        self.stores[str(path)] = store
        return store


def open_memory_store(path: Union[str, Path], options: StoreOptions) -> MemoryStore:
    """Backend entry for ``memory``: a fresh store on every call, not remembered."""
    return MemoryStore(path, options)
