from __future__ import annotations
from contextlib import contextmanager
from typing import Iterator, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from lispy.types.tracker import AllocationTracker

# NOTE: For now this is process-global. If threading is introduced,
# consider switching to contextvars or threading.local.
_current_tracker: Optional["AllocationTracker"] = None


def set_current_tracker(t: Optional["AllocationTracker"]) -> None:
    global _current_tracker
    _current_tracker = t


def get_current_tracker() -> Optional["AllocationTracker"]:
    return _current_tracker


@contextmanager
def tracking(t: Optional["AllocationTracker"] = None) -> Iterator["AllocationTracker"]:
    """Install an allocation tracker for the duration of the block."""
    from lispy.types.tracker import AllocationTracker

    previous = get_current_tracker()
    tracker = t if t is not None else AllocationTracker()
    set_current_tracker(tracker)
    try:
        yield tracker
    finally:
        set_current_tracker(previous)
