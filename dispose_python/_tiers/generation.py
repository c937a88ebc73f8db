"""
Untracked two-tier chain.

Neither tier owns anything; they only report their hooks and forward,
which makes them handy for checking hook order in isolation.
"""

from typing import Optional, TYPE_CHECKING

from .._runtime.disposable import DisposableBase

if TYPE_CHECKING:
    from .._runtime.context import Context


class Generation1(DisposableBase):
    def __init__(self, name: str = "generation", *, context: Optional["Context"] = None):
        super().__init__(context)
        self.name = name

    @property
    def display_name(self) -> str:
        return self.name

    def describe(self) -> str:
        self.ensure_not_disposed(self.name)
        return f"{type(self).__name__}({self.name})"

    def _dispose_core(self, releasing_managed: bool) -> None:
        self._record_hook("Generation1", releasing_managed)


class Generation2(Generation1):
    def _dispose_core(self, releasing_managed: bool) -> None:
        self._record_hook("Generation2", releasing_managed)
        super()._dispose_core(releasing_managed)
