"""Tier owning an unmanaged buffer and, optionally, other disposables."""

from typing import List, Optional, Tuple, TYPE_CHECKING
import logging

from .base import Base
from .._errors import ResourceReleaseError
from .._runtime.disposable import Disposable

if TYPE_CHECKING:
    from .._runtime.context import Context
    from .._runtime.registry import TrackingRegistry

logger = logging.getLogger(__name__)


class Derived(Base):
    """
    A tracked instance that copies its name into a native buffer.

    The buffer is unmanaged: it is freed on both cleanup paths. Adopted
    disposables are managed: they are disposed only when the caller
    disposes this instance explicitly.
    """

    def __init__(
        self,
        instance_name: str,
        tracking: "TrackingRegistry",
        *,
        context: Optional["Context"] = None,
    ):
        self._resource_handle: Optional[int] = None
        self._owned: List[Disposable] = []
        super().__init__(instance_name, tracking, context=context)
        try:
            self._resource_handle = self.ctx.heap.alloc(instance_name)
        except BaseException:
            self.tracking.unregister(self)
            raise

    @property
    def resource_handle(self) -> Optional[int]:
        """Heap handle of the buffer, None once released."""
        return self._resource_handle

    @property
    def resource_address(self) -> int:
        self.ensure_not_disposed(self.instance_name)
        return self.ctx.heap.address(self._resource_handle)

    @property
    def owned(self) -> Tuple[Disposable, ...]:
        return tuple(self._owned)

    def read_resource(self) -> str:
        """Return the contents of the native buffer."""
        self.ensure_not_disposed(self.instance_name)
        return self.ctx.heap.read(self._resource_handle)

    def adopt(self, resource: Disposable) -> Disposable:
        """Take ownership of ``resource``; it is disposed along with this instance."""
        self.ensure_not_disposed(self.instance_name)
        self._owned.append(resource)
        return resource

    def _dispose_core(self, releasing_managed: bool) -> None:
        self._record_hook("Derived", releasing_managed)
        try:
            if releasing_managed:
                self._release_owned()
            self._release_unmanaged()
        finally:
            super()._dispose_core(releasing_managed)

    def _release_owned(self) -> None:
        owned, self._owned = self._owned, []
        for resource in reversed(owned):
            try:
                resource.dispose()
            except Exception:
                logger.exception(
                    "failed to dispose owned resource",
                    extra={"instance": self.instance_name, "resource": repr(resource)},
                )

    def _release_unmanaged(self) -> None:
        handle, self._resource_handle = self._resource_handle, None
        if handle is None:
            return
        try:
            address = self.ctx.heap.free(handle)
        except ResourceReleaseError as err:
            logger.warning(
                "unmanaged release failed",
                extra={"instance": self.instance_name, "error": str(err)},
            )
            return
        logger.debug(
            "unmanaged memory freed",
            extra={"instance": self.instance_name, "address": f"{address:#018x}"},
        )
