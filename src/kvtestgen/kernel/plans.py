"""Test plans: named, pure generators of ordered record sequences.

A plan never touches the clock or the filesystem. Calling the same plan with
the same ``PlanParams`` always yields the same records in the same order,
since the JSON oracle has to match the store exactly.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List

from pydantic import BaseModel, ConfigDict, Field

from kvtestgen._internal.settings import BASIC_RECORD_COUNT
from kvtestgen.errors import UnknownPlanError
from kvtestgen.kernel.records import Record


class PlanParams(BaseModel):
    """Parameters handed to every plan generator."""
    numeric_sync: bool = False
    record_count: int = Field(default=BASIC_RECORD_COUNT, ge=0)

    model_config = ConfigDict(extra="forbid", frozen=True)


PlanFn = Callable[[PlanParams], List[Record]]


@dataclass(frozen=True)
class Plan:
    name: str
    description: str
    generate: PlanFn
    # Run a record-count self-check against the freshly created store
    requires_empty_store: bool = False


def _plan_basic(params: PlanParams) -> List[Record]:
    return [
        Record(key=f"key {i}".encode("ascii"), value=f"value {i}".encode("ascii"))
        for i in range(params.record_count)
    ]


def _plan_empty(params: PlanParams) -> List[Record]:
    return []


_PLANS: Dict[str, Plan] = {
    plan.name: plan
    for plan in (
        Plan(
            name="basic",
            description="N records 'key {i}' -> 'value {i}' in increasing order",
            generate=_plan_basic,
        ),
        Plan(
            name="empty",
            description="no records; checks that a new store starts empty",
            generate=_plan_empty,
            requires_empty_store=True,
        ),
    )
}


def available_plans() -> List[str]:
    """Names of the built-in plans, in registration order."""
    return list(_PLANS)


def get_plan(name: str) -> Plan:
    """Look up a plan by name.

    Raises:
        UnknownPlanError: If no plan is registered under ``name``.
    """
    try:
        return _PLANS[name]
    except KeyError:
        raise UnknownPlanError(name) from None


def generate(name: str, params: PlanParams = PlanParams()) -> List[Record]:
    """Generate the record sequence for plan ``name``."""
    return get_plan(name).generate(params)
