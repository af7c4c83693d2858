"""Storage engine interface.

Runs only ever create a store, optionally count it, write to it and close
it, so that is the whole interface. Backends report failures by raising
``StoreError``.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Union

from pydantic import BaseModel, ConfigDict, Field

from kvtestgen._internal.settings import DEFAULT_BLOCK_SIZE, DEFAULT_FILE_MODE


class StoreOptions(BaseModel):
    """Options applied when a store is created."""
    block_size: int = Field(default=DEFAULT_BLOCK_SIZE, gt=0)
    numeric_sync: bool = False
    file_mode: int = Field(default=DEFAULT_FILE_MODE, ge=0, le=0o7777)

    model_config = ConfigDict(extra="forbid", frozen=True)


class KeyValueStore(ABC):
    """A newly created, writable key-value store."""

    def __init__(self, path: Union[str, Path]):
        self.path = str(path)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @abstractmethod
    def count(self) -> int:
        """Return the number of records currently in the store."""

    @abstractmethod
    def store(self, key: bytes, value: bytes, replace: bool = True) -> None:
        """Write ``key`` -> ``value``.

        With ``replace`` an existing entry is overwritten. Without it, an
        existing key is an error (code 1) and the entry is left as is.
        """

    def close(self) -> None:
        """Release the store. Calling it more than once is harmless."""
        if self._closed:
            return
        self._closed = True
        self._close()

    @abstractmethod
    def _close(self) -> None:
        ...

    def __enter__(self) -> "KeyValueStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


StoreFactory = Callable[[Union[str, Path], StoreOptions], KeyValueStore]
