"""Failure code constants for kvtestgen runs.

Every terminal failure of a run carries one of these codes, so callers can
branch on the kind of failure without parsing messages.
"""

from enum import Enum


class RunErrorCode(str, Enum):
    """Run failure codes."""

    BAD_PLAN = "BAD_PLAN"
    STORE_OPEN_FAILED = "STORE_OPEN_FAILED"
    CONSISTENCY_CHECK_FAILED = "CONSISTENCY_CHECK_FAILED"
    STORE_WRITE_FAILED = "STORE_WRITE_FAILED"
    OUTPUT_WRITE_FAILED = "OUTPUT_WRITE_FAILED"
