"""
Finalizer queue: deferred automatic cleanup.

An undisposed instance that becomes unreachable resurrects itself from
``__del__`` into this queue. Nothing runs until a driver calls ``drain()`` or
``collect()``, which keeps automatic cleanup off the garbage collector's
call stack and makes its timing explicit.
"""

from typing import List, TYPE_CHECKING
import gc
import logging

from .disposable import Disposable

if TYPE_CHECKING:
    from .disposable import DisposableBase

logger = logging.getLogger(__name__)


class FinalizerQueue(Disposable):
    """Pending automatic cleanups, run in the order instances were abandoned."""

    def __init__(self, force_gc: bool = True):
        self.force_gc = force_gc
        self._pending: List["DisposableBase"] = []
        self._draining = False

    def enqueue(self, instance: "DisposableBase") -> None:
        """Queue ``instance`` for automatic cleanup. Called from ``__del__``."""
        if instance._finalize_suppressed:
            return
        if not any(queued is instance for queued in self._pending):
            self._pending.append(instance)

    def suppress(self, instance: "DisposableBase") -> None:
        """Make sure automatic cleanup never runs for ``instance``."""
        instance._finalize_suppressed = True
        self.dequeue(instance)

    def dequeue(self, instance: "DisposableBase") -> None:
        for i, queued in enumerate(self._pending):
            if queued is instance:
                del self._pending[i]
                return

    def pending(self) -> int:
        return len(self._pending)

    def drain(self) -> int:
        """
        Run automatic cleanup for every queued instance.

        Instances abandoned while draining are picked up in the same pass.
        Returns how many cleanup chains ran.
        """
        if self._draining:
            return 0

        finalized = 0
        self._draining = True
        try:
            while self._pending:
                instance = self._pending.pop(0)
                if instance._finalize():
                    finalized += 1
                # Drop the last strong reference before the next item.
                del instance
        finally:
            self._draining = False

        if finalized:
            logger.debug("finalizer queue drained", extra={"finalized": finalized})
        return finalized

    def collect(self) -> int:
        """Surface unreachable instances, then drain the queue."""
        if self.force_gc:
            gc.collect()
        return self.drain()

    def dispose(self) -> None:
        """Run whatever is still pending."""
        self.collect()
