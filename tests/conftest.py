import pytest

from lispy.interpreter import Interpreter
from lispy.runtime_context import tracking

# Every test runs with an AllocationTracker installed so that ownership bugs
# (leaks, double destroys) surface as failures instead of passing silently.


@pytest.fixture(autouse=True)
def _clean_config(monkeypatch):
    for var in ("LISPY_INT_BITS", "LISPY_PROMPT", "LISPY_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture(autouse=True)
def tracker():
    with tracking() as t:
        yield t


@pytest.fixture
def interp():
    return Interpreter()
