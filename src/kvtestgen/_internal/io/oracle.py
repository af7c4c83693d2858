"""Reading and writing oracle files."""

import json
from pathlib import Path
from typing import Union

from kvtestgen.errors import OutputWriteFailed
from kvtestgen.kernel.oracle import OracleDocument


def write_oracle(path: Union[str, Path], document: OracleDocument) -> None:
    """Write the oracle to ``path``, replacing any existing content.

    The file is written in place (not renamed into place) so device paths
    such as /dev/null work as targets.

    Raises:
        OutputWriteFailed: If the file cannot be created or written.
    """
    payload = document.to_json() + "\n"
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(payload)
    except OSError as e:
        raise OutputWriteFailed(str(path), e.strerror or str(e)) from e


def load_oracle(path: Union[str, Path]) -> OracleDocument:
    """Read an oracle file back into an ``OracleDocument``."""
    with open(path, "r", encoding="utf-8") as f:
        return OracleDocument(**json.load(f))
