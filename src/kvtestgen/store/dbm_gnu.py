"""Backend on the standard library's ``dbm.gnu`` module.

``dbm.gnu`` exposes neither the block size nor numeric-sync mode, so the
block size is left to gdbm and numeric sync is refused at open time.
"""

from pathlib import Path
from typing import Union

from kvtestgen.errors import StoreError
from kvtestgen.store.base import KeyValueStore, StoreOptions

try:
    import dbm.gnu as _gnu
except ImportError:  # interpreter built without _gdbm
    _gnu = None

KEY_EXISTS = 1


class DbmGnuStore(KeyValueStore):

    def __init__(self, path: Union[str, Path], db):
        super().__init__(path)
        self._db = db

    def count(self) -> int:
        try:
            return len(self._db)
        except _gnu.error as e:
            raise StoreError(f"count failed: {e}") from e

    def store(self, key: bytes, value: bytes, replace: bool = True) -> None:
        try:
            if not replace and key in self._db:
                raise StoreError("cannot replace existing key", code=KEY_EXISTS)
            self._db[key] = value
        except _gnu.error as e:
            raise StoreError(str(e)) from e

    def _close(self) -> None:
        self._db.close()


def open_dbm_gnu_store(path: Union[str, Path], options: StoreOptions) -> DbmGnuStore:
    """Create a new, truncated gdbm file through ``dbm.gnu``."""
    if _gnu is None:
        raise StoreError("dbm.gnu is not available in this Python build")
    if options.numeric_sync:
        raise StoreError("dbm.gnu cannot create numeric-sync databases")
    try:
        db = _gnu.open(str(path), "n", options.file_mode)
    except (_gnu.error, OSError) as e:
        raise StoreError(str(e)) from e
    return DbmGnuStore(path, db)
