"""Key/value record model."""

from typing import List

from pydantic import BaseModel, ConfigDict


def _to_text(data: bytes) -> str:
    # surrogateescape keeps non-UTF-8 bytes representable in JSON
    return data.decode("utf-8", errors="surrogateescape")


class Record(BaseModel):
    """One key/value pair written to the store and mirrored in the oracle."""
    key: bytes
    value: bytes

    model_config = ConfigDict(extra="forbid", frozen=True)

    def as_pair(self) -> List[str]:
        """Return the ``[key, value]`` text pair used in the JSON oracle.

        Bytes are decoded as UTF-8 with ``surrogateescape``. Valid UTF-8,
        which every built-in plan produces, maps to ordinary text. Any other
        byte becomes a lone surrogate, serialized as a ``\\udcXX`` escape:
        Python's json reads it back (``.encode("utf-8", "surrogateescape")``
        restores the bytes), but strict readers such as serde_json reject it.
        Plans meant for such readers must generate UTF-8 keys and values.
        """
        return [_to_text(self.key), _to_text(self.value)]
