"""Pytest configuration for tests.

No sys.path hacks - tests should import from installed kvtestgen package.
"""

import pytest

from kvtestgen.store import gdbm as gdbm_backend
from kvtestgen.store.memory import MemoryStoreFactory


def pytest_addoption(parser):
    """Add gated perf test option."""
    parser.addoption(
        "--run-perf",
        action="store_true",
        default=False,
        help="Run performance sentinel benchmarks (gated)."
    )


def pytest_collection_modifyitems(config, items):
    """Skip perf tests unless --run-perf is set, and libgdbm tests without libgdbm."""
    skip_libgdbm = pytest.mark.skip(reason="libgdbm shared library not found")
    have_libgdbm = gdbm_backend.is_available()
    run_perf = config.getoption("--run-perf")
    skip_perf = pytest.mark.skip(reason="perf tests gated; pass --run-perf")
    for item in items:
        if "perf" in item.keywords and not run_perf:
            item.add_marker(skip_perf)
        if "libgdbm" in item.keywords and not have_libgdbm:
            item.add_marker(skip_libgdbm)


@pytest.fixture
def memory_factory():
    return MemoryStoreFactory()


# First four bytes of a gdbm file header, by byte order and offset width
_GDBM_MAGIC = {
    bytes.fromhex("cf9a5713"): "plain",    # LE64
    bytes.fromhex("cd9a5713"): "plain",    # LE32
    bytes.fromhex("13579acf"): "plain",    # BE64
    bytes.fromhex("13579acd"): "plain",    # BE32
    bytes.fromhex("d19a5713"): "numsync",  # LE64
    bytes.fromhex("d09a5713"): "numsync",  # LE32
    bytes.fromhex("13579ad1"): "numsync",  # BE64
    bytes.fromhex("13579ad0"): "numsync",  # BE32
}


@pytest.fixture
def gdbm_header_kind():
    """Return "plain" or "numsync" for a gdbm file, from its header magic."""
    def _kind(path):
        with open(path, "rb") as f:
            magic = f.read(4)
        assert magic in _GDBM_MAGIC, f"not a gdbm header: {magic.hex()}"
        return _GDBM_MAGIC[magic]
    return _kind
