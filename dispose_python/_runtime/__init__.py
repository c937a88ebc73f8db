"""Runtime components for disposal and automatic cleanup."""

from .context import Context, create_context, get_default_context
from .disposable import Disposable, DisposableBase
from .events import EventLog, LifecycleEvent, Phase
from .finalizer import FinalizerQueue
from .ref_tracker import RefTracker, TrackedReference
from .registry import LiveSnapshot, TrackingRegistry
from .store import NativeHeap

__all__ = [
    "Context",
    "create_context",
    "get_default_context",
    "Disposable",
    "DisposableBase",
    "EventLog",
    "LifecycleEvent",
    "Phase",
    "FinalizerQueue",
    "RefTracker",
    "TrackedReference",
    "LiveSnapshot",
    "TrackingRegistry",
    "NativeHeap",
]
