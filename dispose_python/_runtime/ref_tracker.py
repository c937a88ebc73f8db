"""
Reference tracker nodes for the tracking registry.

Each tracked instance is represented by a ``TrackedReference`` linked into a
doubly-linked list owned by the registry. The node keeps the instance name
and, when the instance allows it, a weak reference, so it can outlive the
instance it describes. Objects that cannot be weakly referenced (ints, strs,
tuples, plain ``object()``, ``__slots__`` classes) are held strongly.
"""

from typing import Any, Optional
import weakref

from .disposable import Disposable


class RefTracker(Disposable):
    """
    Doubly-linked list node.

    A bare ``RefTracker`` is used as the list head (sentinel).
    """

    def __init__(self):
        self._next: Optional["RefTracker"] = None
        self._prev: Optional["RefTracker"] = None

    def link(self, after: "RefTracker") -> None:
        """Link this tracker into a list right after the given node."""
        self._prev = after
        self._next = after._next
        if self._next is not None:
            self._next._prev = self
        after._next = self

    def unlink(self) -> None:
        """Remove this tracker from its list."""
        if self._prev is not None:
            self._prev._next = self._next
        if self._next is not None:
            self._next._prev = self._prev
        self._prev = None
        self._next = None

    def dispose(self) -> None:
        """Clean up this tracker."""
        self.unlink()


def can_be_held_weakly(value: Any) -> bool:
    """Check if a value can be held by a weak reference."""
    if value is None:
        return False
    try:
        weakref.ref(value)
        return True
    except TypeError:
        return False


class TrackedReference(RefTracker):
    """A registry entry describing one tracked instance."""

    def __init__(self, name: str, instance: Any):
        super().__init__()
        self.name = name
        self.key = id(instance)
        self._weak_ref: Optional[weakref.ref] = None
        self._strong_value: Any = None

        if can_be_held_weakly(instance):
            self._weak_ref = weakref.ref(instance)
        else:
            self._strong_value = instance

    @property
    def is_weak(self) -> bool:
        return self._weak_ref is not None

    def target(self) -> Optional[Any]:
        """The tracked instance, or None once it has been collected."""
        if self._weak_ref is not None:
            return self._weak_ref()
        return self._strong_value

    @property
    def alive(self) -> bool:
        if self._weak_ref is not None:
            return self._weak_ref() is not None
        return self._strong_value is not None

    def refers_to(self, instance: Any) -> bool:
        if self._weak_ref is not None:
            return self._weak_ref() is instance
        return self._strong_value is instance

    def dispose(self) -> None:
        super().dispose()
        self._strong_value = None

    def __repr__(self):
        state = "alive" if self.alive else "collected"
        return f"<TrackedReference {self.name} {self.key:#x} {state}>"
