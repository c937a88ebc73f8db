"""
Tracking registry: an observer list of instances created in a session.

Instances append themselves at construction. Only explicit disposal removes
them again, so anything cleaned up by the finalizer queue stays listed until
``clear()``. The registry holds weak references where the instance allows
them and never decides when an instance is cleaned up.
"""

from typing import Any, Iterator, List, Optional

from .disposable import Disposable
from .ref_tracker import RefTracker, TrackedReference


class LiveSnapshot:
    """
    Lazy view over a registry.

    Every iteration walks the list as it is at that moment, so the same
    snapshot can be iterated again after the registry changes.
    """

    def __init__(self, registry: "TrackingRegistry"):
        self._registry = registry

    def __iter__(self) -> Iterator[TrackedReference]:
        return self._registry._iter_entries()

    def __contains__(self, item: Any) -> bool:
        for entry in self:
            if isinstance(item, str):
                if entry.name == item:
                    return True
            elif entry.refers_to(item):
                return True
        return False

    def names(self) -> List[str]:
        return [entry.name for entry in self]


class TrackingRegistry(Disposable):
    """Ordered collection of TrackedReference entries."""

    def __init__(self):
        self._head = RefTracker()
        self._tail: RefTracker = self._head
        self._count = 0

    def register(self, instance: Any, name: Optional[str] = None) -> TrackedReference:
        """Append an entry for ``instance`` and return it."""
        if name is None:
            name = getattr(instance, "instance_name", type(instance).__name__)
        entry = TrackedReference(name, instance)
        entry.link(self._tail)
        self._tail = entry
        self._count += 1
        return entry

    def unregister(self, instance: Any) -> bool:
        """Remove the entry for ``instance``. Returns False if it was not listed."""
        for entry in self._iter_entries():
            if entry.refers_to(instance):
                self._remove(entry)
                return True
        return False

    def snapshot_live(self) -> LiveSnapshot:
        return LiveSnapshot(self)

    def names(self) -> List[str]:
        return [entry.name for entry in self._iter_entries()]

    def clear(self) -> None:
        """Drop every entry, including ones whose instance was collected."""
        while self._head._next is not None:
            self._head._next.dispose()
        self._tail = self._head
        self._count = 0

    def dispose(self) -> None:
        self.clear()

    def __len__(self) -> int:
        return self._count

    def __contains__(self, instance: Any) -> bool:
        return any(entry.refers_to(instance) for entry in self._iter_entries())

    def _remove(self, entry: TrackedReference) -> None:
        if entry is self._tail:
            self._tail = entry._prev
        entry.dispose()
        self._count -= 1

    def _iter_entries(self) -> Iterator[TrackedReference]:
        node = self._head._next
        while node is not None:
            # Read the successor first so the caller may unlink ``node``.
            following = node._next
            yield node
            node = following
