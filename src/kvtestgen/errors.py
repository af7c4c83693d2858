"""Exception types raised by plan generation, storage backends and runs."""

from typing import Optional

from kvtestgen.codes import RunErrorCode


class StoreError(Exception):
    """A storage backend operation failed.

    ``code`` is the backend's own error number (gdbm_errno for the gdbm
    backend), or None when the backend has none to report.
    """

    def __init__(self, message: str, code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        if self.code is None:
            return self.message
        return f"{self.message} (code {self.code})"


class RunError(Exception):
    """Base class for terminal run failures."""

    code: RunErrorCode


class UnknownPlanError(RunError):
    code = RunErrorCode.BAD_PLAN

    def __init__(self, plan: str):
        super().__init__(f"Unknown test plan {plan}")
        self.plan = plan


class StoreOpenFailed(RunError):
    code = RunErrorCode.STORE_OPEN_FAILED

    def __init__(self, path: str, reason: str):
        super().__init__(f"cannot create store {path}: {reason}")
        self.path = path
        self.reason = reason


class ConsistencyCheckFailed(RunError):
    """A freshly created store did not report zero records."""

    code = RunErrorCode.CONSISTENCY_CHECK_FAILED

    def __init__(self, path: str, reason: str, count: Optional[int] = None):
        super().__init__(f"consistency check failed for new store {path}: {reason}")
        self.path = path
        self.reason = reason
        self.count = count


class StoreWriteFailed(RunError):
    code = RunErrorCode.STORE_WRITE_FAILED

    def __init__(self, key: bytes, store_code: Optional[int], reason: str):
        key_text = key.decode("utf-8", errors="backslashreplace")
        super().__init__(f"store write failed, rc {store_code}, key {key_text}: {reason}")
        self.key = key
        self.store_code = store_code
        self.reason = reason


class OutputWriteFailed(RunError):
    code = RunErrorCode.OUTPUT_WRITE_FAILED

    def __init__(self, path: str, reason: str):
        super().__init__(f"cannot write JSON output {path}: {reason}")
        self.path = path
        self.reason = reason
