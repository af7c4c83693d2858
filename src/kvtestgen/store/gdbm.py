"""Backend binding the system GNU dbm library (libgdbm) through ctypes.

This is the engine the fixtures exist for. Going through the C library
directly, rather than ``dbm.gnu``, gives access to the block size and to
numeric-sync mode (GDBM_NUMSYNC, gdbm >= 1.21).
"""

import ctypes
import ctypes.util
import os
from pathlib import Path
from typing import Optional, Union

from kvtestgen.errors import StoreError
from kvtestgen.store.base import KeyValueStore, StoreOptions

# gdbm.h
GDBM_NEWDB = 3
GDBM_NUMSYNC = 0x2000
GDBM_INSERT = 0
GDBM_REPLACE = 1


class _Datum(ctypes.Structure):
    _fields_ = [("dptr", ctypes.c_char_p), ("dsize", ctypes.c_int)]


def _datum(data: bytes) -> _Datum:
    return _Datum(data, len(data))


_lib: Optional[ctypes.CDLL] = None


def _load_library() -> ctypes.CDLL:
    global _lib
    if _lib is not None:
        return _lib

    name = os.environ.get("KVTESTGEN_LIBGDBM") or ctypes.util.find_library("gdbm")
    if not name:
        raise StoreError("libgdbm not found")
    try:
        lib = ctypes.CDLL(name, use_errno=True)
    except OSError as e:
        raise StoreError(f"cannot load {name}: {e}") from e

    lib.gdbm_open.restype = ctypes.c_void_p
    lib.gdbm_open.argtypes = [ctypes.c_char_p, ctypes.c_int, ctypes.c_int, ctypes.c_int, ctypes.c_void_p]
    lib.gdbm_store.restype = ctypes.c_int
    lib.gdbm_store.argtypes = [ctypes.c_void_p, _Datum, _Datum, ctypes.c_int]
    lib.gdbm_count.restype = ctypes.c_int
    lib.gdbm_count.argtypes = [ctypes.c_void_p, ctypes.POINTER(ctypes.c_ulonglong)]
    lib.gdbm_close.restype = ctypes.c_int
    lib.gdbm_close.argtypes = [ctypes.c_void_p]
    lib.gdbm_strerror.restype = ctypes.c_char_p
    lib.gdbm_strerror.argtypes = [ctypes.c_int]
    if hasattr(lib, "gdbm_errno_location"):
        lib.gdbm_errno_location.restype = ctypes.POINTER(ctypes.c_int)
        lib.gdbm_errno_location.argtypes = []

    _lib = lib
    return lib


def is_available() -> bool:
    """True when libgdbm can be located and loaded."""
    try:
        _load_library()
    except StoreError:
        return False
    return True


def _gdbm_errno(lib: ctypes.CDLL) -> int:
    # gdbm >= 1.14 makes gdbm_errno thread-local behind a function
    if hasattr(lib, "gdbm_errno_location"):
        return lib.gdbm_errno_location()[0]
    return ctypes.c_int.in_dll(lib, "gdbm_errno").value


def _last_error(lib: ctypes.CDLL, what: str) -> StoreError:
    code = _gdbm_errno(lib)
    message = f"{what}: {lib.gdbm_strerror(code).decode('utf-8', errors='replace')}"
    sys_errno = ctypes.get_errno()
    if sys_errno:
        message = f"{message} ({os.strerror(sys_errno)})"
    return StoreError(message, code=code)


class GdbmStore(KeyValueStore):

    def __init__(self, path: Union[str, Path], lib: ctypes.CDLL, dbf: int):
        super().__init__(path)
        self._lib = lib
        self._dbf = dbf

    def count(self) -> int:
        result = ctypes.c_ulonglong(0)
        ctypes.set_errno(0)
        if self._lib.gdbm_count(self._dbf, ctypes.byref(result)) != 0:
            raise _last_error(self._lib, "gdbm_count failed")
        return result.value

    def store(self, key: bytes, value: bytes, replace: bool = True) -> None:
        flag = GDBM_REPLACE if replace else GDBM_INSERT
        ctypes.set_errno(0)
        rc = self._lib.gdbm_store(self._dbf, _datum(key), _datum(value), flag)
        if rc == 1:
            raise StoreError("gdbm_store failed: cannot replace existing key", code=1)
        if rc != 0:
            raise _last_error(self._lib, "gdbm_store failed")

    def _close(self) -> None:
        self._lib.gdbm_close(self._dbf)


def open_gdbm_store(path: Union[str, Path], options: StoreOptions) -> GdbmStore:
    """Create a new, truncated gdbm file at ``path``."""
    lib = _load_library()
    flags = GDBM_NEWDB
    if options.numeric_sync:
        flags |= GDBM_NUMSYNC

    ctypes.set_errno(0)
    dbf = lib.gdbm_open(os.fsencode(path), options.block_size, flags, options.file_mode, None)
    if not dbf:
        raise _last_error(lib, "gdbm_open failed")
    return GdbmStore(path, lib, dbf)
