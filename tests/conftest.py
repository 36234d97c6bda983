"""
Shared pytest fixtures for callthrottle tests.
"""

import logging
from datetime import datetime
from pathlib import Path

import pytest

from callthrottle.core.simulation import SimulatedScheduler
from callthrottle.instrumentation.recorder import ExecutionRecorder


@pytest.fixture(scope="session")
def test_output_root() -> Path:
    """
    Returns the root test_output directory. Created once per test session.
    Files here persist after tests complete for easy access.
    """
    output_dir = Path(__file__).parent.parent / "test_output"
    output_dir.mkdir(exist_ok=True)
    return output_dir


@pytest.fixture
def test_output_dir(request, test_output_root) -> Path:
    """
    Returns a directory for the current test to write output files.
    Directory structure: test_output/<module_name>/<test_name>/
    """
    module_name = request.module.__name__.split(".")[-1]
    test_dir = test_output_root / module_name / request.node.name
    test_dir.mkdir(parents=True, exist_ok=True)
    return test_dir


@pytest.fixture
def timestamped_output_dir(request, test_output_root) -> Path:
    """
    Like test_output_dir but includes a timestamp, for keeping several runs
    of the same test side by side.
    """
    module_name = request.module.__name__.split(".")[-1]
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    test_dir = test_output_root / module_name / request.node.name / timestamp
    test_dir.mkdir(parents=True, exist_ok=True)
    return test_dir


@pytest.fixture
def sim() -> SimulatedScheduler:
    """A fresh virtual-time scheduler starting at the epoch."""
    return SimulatedScheduler()


@pytest.fixture
def recorder(sim) -> ExecutionRecorder:
    return ExecutionRecorder(sim)


def _reset_library_logger() -> None:
    logger = logging.getLogger("callthrottle")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        if not isinstance(handler, logging.NullHandler):
            handler.close()
    logger.addHandler(logging.NullHandler())
    logger.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def reset_callthrottle_logging():
    """Start and finish every test with the library's silent default logging."""
    _reset_library_logger()
    yield
    _reset_library_logger()
