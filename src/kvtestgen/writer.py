"""Dual-sink writer: one pass over a plan's records feeds both the store
and the JSON oracle.

Order of operations is fixed: generate, open, optional empty check, write
every record, close, take the timestamp, write the oracle. The oracle is
only written after the store has been closed successfully, so a failed run
never leaves a JSON file describing data that is not in the store. The
store file of a failed run is left on disk as is.
"""

import time
from pathlib import Path
from typing import Callable, Sequence, Union

from pydantic import BaseModel, ConfigDict

from kvtestgen._internal.io.oracle import write_oracle
from kvtestgen._internal.settings import GeneratorConfig
from kvtestgen.errors import (
    ConsistencyCheckFailed,
    StoreError,
    StoreOpenFailed,
    StoreWriteFailed,
)
from kvtestgen.kernel.oracle import OracleDocument, RunMetadata
from kvtestgen.kernel.plans import Plan, PlanParams, get_plan
from kvtestgen.kernel.records import Record
from kvtestgen.store.base import KeyValueStore, StoreFactory, StoreOptions


class RunResult(BaseModel):
    """Summary of a successful run."""
    plan: str
    store_path: str
    json_path: str
    numeric_sync: bool
    records_written: int
    generated_time: int

    model_config = ConfigDict(extra="forbid", frozen=True)


def _check_empty(store: KeyValueStore) -> None:
    try:
        count = store.count()
    except StoreError as e:
        raise ConsistencyCheckFailed(store.path, f"count failed: {e}") from e
    if count != 0:
        raise ConsistencyCheckFailed(store.path, f"store reports {count} records", count=count)


def _write_store(
    plan: Plan,
    records: Sequence[Record],
    store_path: Union[str, Path],
    options: StoreOptions,
    store_factory: StoreFactory,
) -> int:
    try:
        store = store_factory(store_path, options)
    except (StoreError, OSError) as e:
        raise StoreOpenFailed(str(store_path), str(e)) from e

    written = 0
    with store:
        if plan.requires_empty_store:
            _check_empty(store)
        for record in records:
            try:
                store.store(record.key, record.value, replace=True)
            except StoreError as e:
                raise StoreWriteFailed(record.key, e.code, e.message) from e
            written += 1
    return written


def run_plan(
    plan_name: str,
    numeric_sync: bool,
    store_path: Union[str, Path],
    json_path: Union[str, Path],
    *,
    store_factory: StoreFactory,
    config: GeneratorConfig = GeneratorConfig(),
    clock: Callable[[], float] = time.time,
) -> RunResult:
    """Populate a new store from plan ``plan_name`` and write its oracle.

    Raises:
        UnknownPlanError: Before anything is opened or written.
        StoreOpenFailed: The store could not be created.
        ConsistencyCheckFailed: A new store did not start empty.
        StoreWriteFailed: A record could not be written; no JSON is produced.
        OutputWriteFailed: The oracle could not be written.
    """
    plan = get_plan(plan_name)
    records = plan.generate(PlanParams(numeric_sync=numeric_sync, record_count=config.record_count))
    options = StoreOptions(
        block_size=config.block_size,
        numeric_sync=numeric_sync,
        file_mode=config.file_mode,
    )

    written = _write_store(plan, records, store_path, options, store_factory)

    metadata = RunMetadata(
        generated_by=config.generator_name,
        generated_time=int(clock()),
        data_records=written,
    )
    write_oracle(json_path, OracleDocument.build(metadata, records))

    return RunResult(
        plan=plan.name,
        store_path=str(store_path),
        json_path=str(json_path),
        numeric_sync=numeric_sync,
        records_written=written,
        generated_time=metadata.generated_time,
    )
