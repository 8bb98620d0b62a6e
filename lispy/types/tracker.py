"""Allocation bookkeeping for Values.

The tracker plays the role of an allocator's audit log: every Value registers
itself on construction and unregisters on destroy. Tests install one through
lispy.runtime_context.tracking() and check that an evaluation leaves exactly
the result tree alive.
"""

from __future__ import annotations

from lispy import LispValue
from lispy.errors import LispyOwnershipError


class AllocationTracker:
    def __init__(self):
        self.created: int = 0
        self.destroyed: int = 0
        self._live: dict[int, LispValue] = {}

    def record_create(self, value: LispValue) -> None:
        self.created += 1
        self._live[id(value)] = value

    def record_destroy(self, value: LispValue) -> None:
        if self._live.pop(id(value), None) is None:
            raise LispyOwnershipError(f"Destroying untracked or already destroyed value {value!r}")
        self.destroyed += 1

    @property
    def live_count(self) -> int:
        return len(self._live)

    def live_values(self) -> list[LispValue]:
        return list(self._live.values())

    def leaked(self, *roots: LispValue) -> list[LispValue]:
        """Live values that are not reachable from any of `roots`."""
        reachable: set[int] = set()
        stack = list(roots)
        while stack:
            v = stack.pop()
            reachable.add(id(v))
            stack.extend(v.cells)
        return [v for k, v in self._live.items() if k not in reachable]

    def __repr__(self) -> str:
        return f"<AllocationTracker created={self.created} destroyed={self.destroyed} live={self.live_count}>"
