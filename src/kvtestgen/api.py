"""Public API for kvtestgen.

``run`` produces one store/oracle pair; ``run_all_plans`` produces the
full fixture set for every plan into a directory.
"""

import os
import time
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Union

from kvtestgen._internal.settings import DEFAULT_BACKEND, DEFAULT_PLAN, GeneratorConfig
from kvtestgen.kernel.plans import available_plans, get_plan
from kvtestgen.writer import RunResult, run_plan
from kvtestgen.store import StoreFactory, get_backend


def _normalize_path(path: Union[str, os.PathLike, Path]) -> Path:
    """Normalize path input to Path object."""
    return Path(path) if not isinstance(path, Path) else path


def _resolve_factory(backend: str, store_factory: Optional[StoreFactory]) -> StoreFactory:
    if store_factory is not None:
        return store_factory
    return get_backend(backend)


def run(
    store_path: Union[str, os.PathLike],
    json_path: Union[str, os.PathLike],
    plan: str = DEFAULT_PLAN,
    numeric_sync: bool = False,
    *,
    backend: str = DEFAULT_BACKEND,
    store_factory: Optional[StoreFactory] = None,
    config: Optional[GeneratorConfig] = None,
    clock: Callable[[], float] = time.time,
) -> RunResult:
    """Generate one fixture: a store at ``store_path`` and its oracle at
    ``json_path``.

    Args:
        store_path: Store file to create (truncated if it exists).
        json_path: Oracle JSON file to write.
        plan: Plan name (see ``available_plans()``).
        numeric_sync: Create the store in numeric-sync mode.
        backend: Backend name, ignored when ``store_factory`` is given.
        store_factory: Explicit factory, e.g. a ``MemoryStoreFactory``.
        config: Generator settings; defaults to ``GeneratorConfig()``.
        clock: Source of the generation timestamp.

    Returns:
        RunResult describing what was written.

    Raises:
        RunError subclasses on any failure; see ``run_plan``.
        ValueError: If ``backend`` is not a known backend name.
    """
    # Plan is resolved before the backend, so a bad plan is reported first
    get_plan(plan)
    factory = _resolve_factory(backend, store_factory)
    return run_plan(
        plan,
        numeric_sync,
        _normalize_path(store_path),
        _normalize_path(json_path),
        store_factory=factory,
        config=config or GeneratorConfig(),
        clock=clock,
    )


def run_all_plans(
    out_dir: Union[str, os.PathLike],
    *,
    suffix: str = "",
    numeric_sync: bool = False,
    plans: Optional[Iterable[str]] = None,
    backend: str = DEFAULT_BACKEND,
    store_factory: Optional[StoreFactory] = None,
    config: Optional[GeneratorConfig] = None,
    clock: Callable[[], float] = time.time,
) -> List[RunResult]:
    """Write ``<plan>.db<suffix>`` and ``<plan>.json<suffix>`` for each plan.

    Plans run in order and the batch stops at the first failure; fixtures
    already produced are kept.
    """
    out = _normalize_path(out_dir)
    plan_names = list(plans) if plans is not None else available_plans()
    for name in plan_names:
        get_plan(name)
    factory = _resolve_factory(backend, store_factory)

    out.mkdir(parents=True, exist_ok=True)
    results: List[RunResult] = []
    for name in plan_names:
        results.append(
            run_plan(
                name,
                numeric_sync,
                out / f"{name}.db{suffix}",
                out / f"{name}.json{suffix}",
                store_factory=factory,
                config=config or GeneratorConfig(),
                clock=clock,
            )
        )
    return results
