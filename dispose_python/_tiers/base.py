"""Tracked tier: instances list themselves in a TrackingRegistry."""

from typing import Optional, TYPE_CHECKING
import logging

from .._runtime.disposable import DisposableBase

if TYPE_CHECKING:
    from .._runtime.context import Context
    from .._runtime.registry import TrackingRegistry

logger = logging.getLogger(__name__)


class Base(DisposableBase):
    """
    A named instance registered in a tracking registry.

    The registry entry is managed state: only the dispose path removes it.
    Instances cleaned up automatically stay listed.
    """

    def __init__(
        self,
        instance_name: str,
        tracking: "TrackingRegistry",
        *,
        context: Optional["Context"] = None,
    ):
        super().__init__(context)
        self._instance_name = instance_name
        self.tracking = tracking
        self.tracking.register(self, instance_name)

    @property
    def instance_name(self) -> str:
        return self._instance_name

    @property
    def display_name(self) -> str:
        return self._instance_name

    def _dispose_core(self, releasing_managed: bool) -> None:
        self._record_hook("Base", releasing_managed)
        if releasing_managed:
            if self.tracking.unregister(self):
                logger.debug(
                    "removed from tracking list",
                    extra={"instance": self._instance_name, "key": f"{id(self):#018x}"},
                )

    def __repr__(self):
        state = "disposed" if self.is_disposed else "live"
        return f"<{type(self).__name__} {self._instance_name} {state}>"
