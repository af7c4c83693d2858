"""Tests for the dual-sink writer: store and oracle must always agree."""

import json

import pytest

from kvtestgen._internal.settings import GeneratorConfig
from kvtestgen.codes import RunErrorCode
from kvtestgen.errors import (
    ConsistencyCheckFailed,
    OutputWriteFailed,
    StoreError,
    StoreOpenFailed,
    StoreWriteFailed,
    UnknownPlanError,
)
from kvtestgen.store.memory import MemoryStore, MemoryStoreFactory
from kvtestgen.writer import run_plan


def _run(factory, tmp_path, plan="basic", numeric_sync=False, config=None, clock=lambda: 1700000000.7):
    return run_plan(
        plan,
        numeric_sync,
        tmp_path / "out.db",
        tmp_path / "out.json",
        store_factory=factory,
        config=config or GeneratorConfig(record_count=25),
        clock=clock,
    )


def _load(tmp_path):
    return json.loads((tmp_path / "out.json").read_text(encoding="utf-8"))


def test_basic_run_store_and_oracle_agree(memory_factory, tmp_path):
    result = _run(memory_factory, tmp_path)

    store = memory_factory.stores[str(tmp_path / "out.db")]
    oracle = _load(tmp_path)

    assert result.records_written == 25
    assert store.write_calls == 25
    assert oracle["data_records"] == len(oracle["data"]) == len(store.data)
    assert {k.encode(): v.encode() for k, v in oracle["data"]} == store.data
    assert oracle["data"][7] == ["key 7", "value 7"]


def test_store_is_closed_after_run(memory_factory, tmp_path):
    _run(memory_factory, tmp_path)
    assert memory_factory.stores[str(tmp_path / "out.db")].closed


def test_full_basic_plan_order(memory_factory, tmp_path):
    _run(memory_factory, tmp_path, config=GeneratorConfig())
    oracle = _load(tmp_path)

    assert oracle["data_records"] == 10001
    assert len(oracle["data"]) == 10001
    for i, pair in enumerate(oracle["data"]):
        assert pair == [f"key {i}", f"value {i}"]


def test_metadata_fields(memory_factory, tmp_path):
    config = GeneratorConfig(record_count=3, generator_name="othergen")
    result = _run(memory_factory, tmp_path, config=config, clock=lambda: 1234.9)
    oracle = _load(tmp_path)

    assert oracle["generated_by"] == "othergen"
    assert oracle["generated_time"] == "1234"
    assert result.generated_time == 1234


def test_timestamp_taken_after_store_closed(tmp_path):
    events = []

    class RecordingStore(MemoryStore):
        def _close(self):
            events.append("close")

    def factory(path, options):
        return RecordingStore(path, options)

    def clock():
        events.append("clock")
        return 5.0

    _run(factory, tmp_path, clock=clock)
    assert events == ["close", "clock"]


def test_empty_plan_end_to_end(memory_factory, tmp_path):
    result = _run(memory_factory, tmp_path, plan="empty", clock=lambda: 1700000000)

    raw = (tmp_path / "out.json").read_text(encoding="utf-8")
    assert raw == (
        '{"generated_by":"testgen","generated_time":"1700000000","data_records":0,"data":[]}\n'
    )
    assert result.records_written == 0
    assert memory_factory.stores[str(tmp_path / "out.db")].data == {}


def test_runs_are_deterministic(tmp_path):
    first_dir = tmp_path / "a"
    second_dir = tmp_path / "b"
    first_dir.mkdir()
    second_dir.mkdir()

    _run(MemoryStoreFactory(), first_dir, clock=lambda: 1.0)
    _run(MemoryStoreFactory(), second_dir, clock=lambda: 99999.0)

    assert _load(first_dir)["data"] == _load(second_dir)["data"]


def test_numeric_sync_only_changes_store_options(tmp_path):
    plain_dir = tmp_path / "plain"
    numsync_dir = tmp_path / "numsync"
    plain_dir.mkdir()
    numsync_dir.mkdir()
    plain_factory = MemoryStoreFactory()
    numsync_factory = MemoryStoreFactory()

    _run(plain_factory, plain_dir, numeric_sync=False, clock=lambda: 7.0)
    result = _run(numsync_factory, numsync_dir, numeric_sync=True, clock=lambda: 7.0)

    assert (plain_dir / "out.json").read_bytes() == (numsync_dir / "out.json").read_bytes()
    assert numsync_factory.stores[str(numsync_dir / "out.db")].options.numeric_sync is True
    assert plain_factory.stores[str(plain_dir / "out.db")].options.numeric_sync is False
    assert result.numeric_sync is True


def test_config_reaches_store_options(memory_factory, tmp_path):
    config = GeneratorConfig(record_count=1, block_size=4096, file_mode=0o600)
    _run(memory_factory, tmp_path, config=config)

    options = memory_factory.stores[str(tmp_path / "out.db")].options
    assert options.block_size == 4096
    assert options.file_mode == 0o600


def test_unknown_plan_opens_nothing(memory_factory, tmp_path):
    with pytest.raises(UnknownPlanError):
        _run(memory_factory, tmp_path, plan="nosuchplan")

    assert memory_factory.stores == {}
    assert not (tmp_path / "out.json").exists()


def test_store_open_failure(tmp_path):
    factory = MemoryStoreFactory(fail_open="permission denied")

    with pytest.raises(StoreOpenFailed) as excinfo:
        _run(factory, tmp_path)

    assert excinfo.value.code == RunErrorCode.STORE_OPEN_FAILED
    assert "permission denied" in str(excinfo.value)
    assert not (tmp_path / "out.json").exists()


def test_store_open_os_error_is_wrapped(tmp_path):
    def factory(path, options):
        raise PermissionError(13, "Permission denied")

    with pytest.raises(StoreOpenFailed):
        _run(factory, tmp_path)


def test_write_failure_aborts_without_json(tmp_path):
    factory = MemoryStoreFactory(fail_on_key=b"key 10")

    with pytest.raises(StoreWriteFailed) as excinfo:
        _run(factory, tmp_path)

    err = excinfo.value
    assert err.code == RunErrorCode.STORE_WRITE_FAILED
    assert err.key == b"key 10"
    assert err.store_code == 13
    assert "key 10" in str(err)

    store = factory.stores[str(tmp_path / "out.db")]
    # partial store is kept, but closed
    assert store.write_calls == 10
    assert store.closed
    assert not (tmp_path / "out.json").exists()


def test_empty_plan_rejects_non_empty_new_store(tmp_path):
    factory = MemoryStoreFactory(preload={b"stale": b"data"})

    with pytest.raises(ConsistencyCheckFailed) as excinfo:
        _run(factory, tmp_path, plan="empty")

    assert excinfo.value.count == 1
    assert excinfo.value.code == RunErrorCode.CONSISTENCY_CHECK_FAILED
    assert factory.stores[str(tmp_path / "out.db")].closed
    assert not (tmp_path / "out.json").exists()


def test_empty_plan_count_failure_is_consistency_failure(tmp_path):
    class BrokenCountStore(MemoryStore):
        def count(self):
            raise StoreError("count failed", code=5)

    def factory(path, options):
        return BrokenCountStore(path, options)

    with pytest.raises(ConsistencyCheckFailed):
        _run(factory, tmp_path, plan="empty")


def test_basic_plan_skips_empty_check(tmp_path):
    # A pre-populated store is only a defect for the empty plan
    factory = MemoryStoreFactory(preload={b"key 0": b"old"})
    _run(factory, tmp_path)

    assert factory.stores[str(tmp_path / "out.db")].data[b"key 0"] == b"value 0"


def test_output_write_failure_keeps_store(memory_factory, tmp_path):
    with pytest.raises(OutputWriteFailed):
        run_plan(
            "basic",
            False,
            tmp_path / "out.db",
            tmp_path / "no-such-dir" / "out.json",
            store_factory=memory_factory,
            config=GeneratorConfig(record_count=4),
        )

    store = memory_factory.stores[str(tmp_path / "out.db")]
    assert store.closed
    assert len(store.data) == 4
