"""
dispose-python: deterministic disposal versus deferred automatic cleanup.

Usage:
    from dispose_python import Derived, TrackingRegistry, get_default_context

    tracking = TrackingRegistry()
    with Derived("d2", tracking) as d:
        d.read_resource()

    Derived("d1", tracking)            # abandoned, never disposed
    get_default_context().collect()    # runs its automatic cleanup
    tracking.names()                   # ["d1"]
"""

from ._errors import (
    DisposalError,
    ObjectDisposedError,
    ResourceReleaseError,
    InvalidHandleError,
    SettingsError,
    SettingsLoadError,
    SettingsValidationError,
)
from ._logging import JsonFormatter, configure_logging, get_logger
from ._settings import RuntimeSettings, load_settings
from ._runtime import (
    Context,
    create_context,
    get_default_context,
    Disposable,
    DisposableBase,
    EventLog,
    LifecycleEvent,
    Phase,
    FinalizerQueue,
    TrackedReference,
    LiveSnapshot,
    TrackingRegistry,
    NativeHeap,
)
from ._tiers import Base, Derived, Generation1, Generation2

__version__ = "0.1.0"

__all__ = [
    "DisposalError",
    "ObjectDisposedError",
    "ResourceReleaseError",
    "InvalidHandleError",
    "SettingsError",
    "SettingsLoadError",
    "SettingsValidationError",
    "JsonFormatter",
    "configure_logging",
    "get_logger",
    "RuntimeSettings",
    "load_settings",
    "Context",
    "create_context",
    "get_default_context",
    "Disposable",
    "DisposableBase",
    "EventLog",
    "LifecycleEvent",
    "Phase",
    "FinalizerQueue",
    "TrackedReference",
    "LiveSnapshot",
    "TrackingRegistry",
    "NativeHeap",
    "Base",
    "Derived",
    "Generation1",
    "Generation2",
]
