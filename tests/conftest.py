"""
Shared pytest fixtures.

Every test gets its own context so heaps, finalizer queues and event logs
never leak between tests.
"""

import pytest

from dispose_python import Disposable, RuntimeSettings, TrackingRegistry, create_context


@pytest.fixture()
def ctx():
    context = create_context(RuntimeSettings(log_level="DEBUG"))
    yield context
    context.collect()


@pytest.fixture()
def tracking() -> TrackingRegistry:
    return TrackingRegistry()


class Recorder(Disposable):
    """Plain disposable that counts dispose() calls."""

    def __init__(self, fail: bool = False):
        self.calls = 0
        self.fail = fail

    def dispose(self) -> None:
        self.calls += 1
        if self.fail:
            raise RuntimeError("release failed")


@pytest.fixture()
def recorder_factory():
    return Recorder
