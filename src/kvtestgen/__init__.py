"""kvtestgen: deterministic GNU dbm fixtures with a JSON oracle."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("kvtestgen")
except PackageNotFoundError:
    __version__ = "dev"

from kvtestgen.api import run, run_all_plans
from kvtestgen.codes import RunErrorCode
from kvtestgen.errors import (
    ConsistencyCheckFailed,
    OutputWriteFailed,
    RunError,
    StoreError,
    StoreOpenFailed,
    StoreWriteFailed,
    UnknownPlanError,
)
from kvtestgen.kernel.plans import available_plans
from kvtestgen.writer import RunResult

__all__ = [
    "__version__",
    "run",
    "run_all_plans",
    "available_plans",
    "RunResult",
    "RunErrorCode",
    "RunError",
    "StoreError",
    "UnknownPlanError",
    "StoreOpenFailed",
    "ConsistencyCheckFailed",
    "StoreWriteFailed",
    "OutputWriteFailed",
]
