"""Lifecycle events emitted by cleanup hooks."""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional
import logging

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    """Which entry point started the cleanup chain."""

    DISPOSE = "dispose"
    AUTOMATIC_CLEANUP = "automatic-cleanup"

    @classmethod
    def for_flag(cls, releasing_managed: bool) -> "Phase":
        return cls.DISPOSE if releasing_managed else cls.AUTOMATIC_CLEANUP


@dataclass(frozen=True)
class LifecycleEvent:
    """One tier hook invocation."""

    instance_name: str
    tier: str
    phase: Phase
    releasing_managed: bool

    @property
    def label(self) -> str:
        return f"{self.tier}.cleanup({self.releasing_managed})"

    def __str__(self):
        return f"[{self.instance_name}].{self.label}"


Listener = Callable[[LifecycleEvent], None]


class EventLog:
    """
    Ordered record of lifecycle events plus listener fan-out.

    Listeners are called for every event even when recording is off. A
    listener that raises is logged and skipped; it never interrupts the
    cleanup chain that emitted the event.
    """

    def __init__(self, record: bool = True, max_events: Optional[int] = None):
        self.record = record
        self.max_events = max_events
        self._events: List[LifecycleEvent] = []
        self._listeners: List[Listener] = []

    def emit(self, instance_name: str, tier: str, releasing_managed: bool) -> LifecycleEvent:
        event = LifecycleEvent(
            instance_name=instance_name,
            tier=tier,
            phase=Phase.for_flag(releasing_managed),
            releasing_managed=releasing_managed,
        )
        if self.record:
            self._events.append(event)
            if self.max_events is not None and len(self._events) > self.max_events:
                del self._events[: len(self._events) - self.max_events]

        logger.debug(
            "cleanup hook",
            extra={"instance": instance_name, "tier": tier, "phase": event.phase.value},
        )

        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("event listener failed", extra={"event": str(event)})
        return event

    def subscribe(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    @property
    def events(self) -> List[LifecycleEvent]:
        return list(self._events)

    def for_instance(self, instance_name: str) -> List[LifecycleEvent]:
        return [e for e in self._events if e.instance_name == instance_name]

    def labels(self, instance_name: Optional[str] = None) -> List[str]:
        events = self._events if instance_name is None else self.for_instance(instance_name)
        return [e.label for e in events]

    def clear(self) -> None:
        self._events.clear()

    def __len__(self) -> int:
        return len(self._events)
