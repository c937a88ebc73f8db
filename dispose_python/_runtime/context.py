"""
Context bundling the shared runtime state of a session.

A context owns the native heap, the finalizer queue and the event log that
disposable instances report to. ``get_default_context()`` lazily creates one
process-wide context, used whenever an instance is built without an explicit
``context=``.
"""

from typing import Optional
import atexit
import logging

from .disposable import Disposable
from .events import EventLog
from .finalizer import FinalizerQueue
from .store import NativeHeap
from .._logging import configure_logging
from .._settings import RuntimeSettings

logger = logging.getLogger(__name__)


class Context(Disposable):
    """
    Shared state for disposable instances.

    Manages:
    - The native heap holding unmanaged buffers
    - The finalizer queue for abandoned, undisposed instances
    - The lifecycle event log
    """

    def __init__(self, settings: Optional[RuntimeSettings] = None):
        if settings is None:
            settings = RuntimeSettings()
        self.settings = settings

        self.heap = NativeHeap()
        self.finalizers = FinalizerQueue(force_gc=settings.force_gc_on_collect)
        self.events = EventLog(
            record=settings.record_events,
            max_events=settings.max_recorded_events,
        )

    def collect(self) -> int:
        """Run every pending automatic cleanup. Returns how many ran."""
        return self.finalizers.collect()

    def dispose(self) -> None:
        """Drain pending cleanups; report buffers nobody released."""
        self.finalizers.dispose()
        leaked = self.heap.live_count()
        if leaked:
            logger.warning("native buffers still allocated", extra={"leaked": leaked})


def create_context(settings: Optional[RuntimeSettings] = None) -> Context:
    """Create a new context and apply its logging settings."""
    ctx = Context(settings)
    configure_logging(ctx.settings.log_level, ctx.settings.log_file)
    return ctx


_default_context: Optional[Context] = None


def get_default_context() -> Context:
    """Get or create the process-wide default context."""
    global _default_context
    if _default_context is None:
        _default_context = create_context()
        if _default_context.settings.collect_on_exit:
            atexit.register(_default_context.collect)
    return _default_context
