"""
Disposable protocol and the dispose/finalize state machine.

``Disposable`` is the minimal contract shared by everything that owns cleanup
work. ``DisposableBase`` adds the two entry points of the pattern:

* ``dispose()``: deterministic, caller-invoked, releases managed and
  unmanaged state;
* automatic cleanup: runs from the finalizer queue after an undisposed
  instance became unreachable, releases unmanaged state only.

Whichever entry point flips ``disposed`` first wins; the other is a no-op.
"""

from abc import ABC, ABCMeta, abstractmethod
from typing import Optional, TYPE_CHECKING
import logging
import threading

from .._errors import ObjectDisposedError

if TYPE_CHECKING:
    from .context import Context

logger = logging.getLogger(__name__)


class Disposable(ABC):
    """Base class for resources that need explicit cleanup."""

    @abstractmethod
    def dispose(self) -> None:
        """Clean up resources."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.dispose()


class _ArmAfterInit(ABCMeta):
    """Arms automatic cleanup only once the outermost __init__ has returned."""

    def __call__(cls, *args, **kwargs):
        instance = super().__call__(*args, **kwargs)
        if not instance._disposed:
            instance._finalize_suppressed = False
        return instance


class DisposableBase(Disposable, metaclass=_ArmAfterInit):
    """
    Root of a disposal hierarchy.

    Subclasses override ``_dispose_core(releasing_managed)``, release what
    their tier owns and then call ``super()._dispose_core(releasing_managed)``
    themselves. Nothing forwards automatically.

    If an instance is dropped without ``dispose()``, ``__del__`` hands it to
    the context's finalizer queue; the cleanup chain then runs with
    ``releasing_managed=False`` when the queue is drained. An instance whose
    constructor raised is never queued.
    """

    def __init__(self, context: Optional["Context"] = None):
        if context is None:
            from .context import get_default_context

            context = get_default_context()

        self.ctx = context
        self._disposed = False
        self._finalize_suppressed = True
        self._state_lock = threading.Lock()

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    @property
    def display_name(self) -> str:
        """Name used in events and error messages."""
        return type(self).__name__

    def dispose(self) -> None:
        """Run the cleanup chain once; later calls do nothing."""
        if not self._mark_disposed():
            return
        try:
            self._dispose_core(True)
        finally:
            self.ctx.finalizers.suppress(self)

    def ensure_not_disposed(self, object_name: Optional[str] = None) -> None:
        """Raise ObjectDisposedError if this instance has been disposed."""
        if self._disposed:
            raise ObjectDisposedError(object_name or self.display_name)

    @abstractmethod
    def _dispose_core(self, releasing_managed: bool) -> None:
        """Release what this tier owns, then forward to the parent tier."""

    def _record_hook(self, tier: str, releasing_managed: bool) -> None:
        """Report entry into ``tier``'s cleanup hook to the event log."""
        self.ctx.events.emit(self.display_name, tier, releasing_managed)

    def _mark_disposed(self) -> bool:
        """Atomically flip disposed from False to True. Returns True if flipped."""
        with self._state_lock:
            if self._disposed:
                return False
            self._disposed = True
            return True

    def _finalize(self) -> bool:
        """
        Automatic cleanup entry point, called by the finalizer queue.

        Returns True if the cleanup chain ran. Never raises.
        """
        try:
            if not self._mark_disposed():
                return False
            self._dispose_core(False)
        except Exception:
            logger.exception(
                "automatic cleanup failed",
                extra={"instance": self.display_name},
            )
        return True

    def __del__(self):
        # Attributes may be missing if __init__ raised before setting them.
        try:
            if getattr(self, "_disposed", True):
                return
            if getattr(self, "_finalize_suppressed", True):
                return
            self.ctx.finalizers.enqueue(self)
        except Exception:
            logger.exception("could not queue automatic cleanup")
