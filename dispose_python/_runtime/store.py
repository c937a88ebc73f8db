"""
Native heap for unmanaged buffers.

Buffers are ctypes arrays kept alive by the heap itself, not by the objects
that use them. Dropping the owner does not release the memory; only
``free(handle)`` does. That is the "unmanaged resource" every tier has to
release on both the dispose and the automatic cleanup path.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
import ctypes

from .disposable import Disposable
from .._errors import InvalidHandleError


class IdAllocator(ABC):
    """Hands out integer handles."""

    @abstractmethod
    def acquire(self) -> int:
        """Return an unused handle."""

    @abstractmethod
    def release(self, id: int) -> None:
        """Make ``id`` available again."""


class ReuseIdAllocator(IdAllocator):
    """Counts up from ``initial_next``; freed handles are handed out first, oldest first."""

    def __init__(self, initial_next: int = 1):
        self.initial_next = initial_next
        self.next = initial_next
        self._free_list: List[int] = []

    def acquire(self) -> int:
        if self._free_list:
            return self._free_list.pop(0)
        result = self.next
        self.next += 1
        return result

    def release(self, id: int) -> None:
        self._free_list.append(id)

    def reset(self) -> None:
        self._free_list.clear()
        self.next = self.initial_next


class NativeHeap(Disposable):
    """Handle-addressed store of unicode buffers."""

    def __init__(self):
        self._allocator = ReuseIdAllocator(1)
        self._buffers: dict = {}

    def alloc(self, text: str) -> int:
        """Copy ``text`` into a new buffer and return its handle."""
        handle = self._allocator.acquire()
        self._buffers[handle] = ctypes.create_unicode_buffer(text)
        return handle

    def _deref(self, handle: int) -> ctypes.Array:
        buffer = self._buffers.get(handle)
        if buffer is None:
            raise InvalidHandleError(handle)
        return buffer

    def read(self, handle: int) -> str:
        return self._deref(handle).value

    def address(self, handle: int) -> int:
        """Memory address of the buffer behind ``handle``."""
        return ctypes.addressof(self._deref(handle))

    def free(self, handle: int) -> int:
        """
        Release the buffer behind ``handle``.

        Returns the address the buffer lived at. Raises InvalidHandleError
        for unknown or already freed handles.
        """
        buffer = self._deref(handle)
        address = ctypes.addressof(buffer)
        ctypes.memset(address, 0, ctypes.sizeof(buffer))
        del self._buffers[handle]
        self._allocator.release(handle)
        return address

    def is_allocated(self, handle: Optional[int]) -> bool:
        return handle is not None and handle in self._buffers

    def live_count(self) -> int:
        return len(self._buffers)

    def dispose(self) -> None:
        self._buffers.clear()
        self._allocator.reset()
