import pytest

from lispy.runtime_context import get_current_tracker, tracking
from lispy.types.tracker import AllocationTracker
from lispy.types.value import count_values, destroy, make_number, make_sexpr

# Each source is evaluated with the allocation tracker watching. Whatever the
# outcome, only the result tree may survive, and destroying it must release
# everything exactly once.
SOURCES = [
    # success paths
    "(+ 1 2 3)",
    "(- 5)",
    "(* 2 (+ 1 1))",
    "(head {1 2 3})",
    "(tail {1 2 3})",
    "(join {1} {2 3} {} {4})",
    "(eval {+ 1 2})",
    "(list 1 2 3)",
    "()",
    "(5)",
    "{1 {2 (3)}}",
    "(eval (head {(+ 1 2) (+ 10 20)}))",
    "(min 5 (max 1 2) 3)",
    # error paths
    "(/ 1 0)",
    "(/ 10 0 5 6)",
    "(% 10 0 1)",
    "(^ 2 -1 3)",
    "(+ 1 (/ 1 0) (head {}))",
    "(head {})",
    "(tail {})",
    "(head {1} {2})",
    "(head 1 2)",
    "(+ 1 {2})",
    "(join {1} 2 {3})",
    "(eval 1)",
    "(foo 1)",
    "(1 2 3)",
    "({1} 2)",
    "(+ 1 999999999999999999999 (head {}))",
    "(list (eval {foo}) (eval {1 2}))",
]


@pytest.mark.parametrize("source", SOURCES)
def test_evaluation_leaves_only_the_result(interp, tracker, source):
    result = interp.eval(source)
    assert tracker.leaked(result) == []
    assert tracker.live_count == count_values(result)

    destroy(result)
    assert tracker.live_count == 0
    assert tracker.created == tracker.destroyed


def test_tracking_restores_previous_tracker(tracker):
    assert get_current_tracker() is tracker
    with tracking() as inner:
        assert get_current_tracker() is inner
        assert inner is not tracker
    assert get_current_tracker() is tracker


def test_values_report_to_the_tracker_they_were_created_under(tracker):
    outer_value = make_number(1)
    with tracking() as inner:
        destroy(outer_value)
        assert inner.destroyed == 0
    assert tracker.destroyed == 1


def test_leaked_lists_unreachable_values():
    t = AllocationTracker()
    with tracking(t):
        kept = make_sexpr()
        lost = make_number(2)
    assert t.leaked(kept) == [lost]
    assert t.live_count == 2
    assert "live=2" in repr(t)
