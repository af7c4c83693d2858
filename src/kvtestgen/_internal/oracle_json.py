"""Byte-stable JSON serialization for oracle documents.

Rules:
- Field order is the insertion order of the object (not sorted)
- Compact separators (",", ":")
- ASCII escaping, so arbitrary key/value bytes never produce invalid UTF-8
- No surrounding whitespace; callers add the trailing newline
"""

import json
from typing import Any


def oracle_dumps(obj: Any) -> str:
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=True)
