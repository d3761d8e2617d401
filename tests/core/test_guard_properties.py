"""Property-based tests for the exactly-once cleanup guarantee.

Random sequences of guard operations are replayed against a small model of
who owns the resources; cleanup must run exactly once unless the resources
were stolen, in which case it must never run.
"""

import gc

from hypothesis import given
from hypothesis import strategies as st

from scopedref import AlreadyReleasedError, Present, ScopedRef, SetStatus

OPERATIONS = ["release", "move", "move_into_fresh", "steal", "get", "try_get", "set", "try_set"]


@given(
    resources=st.lists(st.integers(), min_size=1, max_size=4),
    ops=st.lists(st.sampled_from(OPERATIONS), max_size=20),
)
def test_cleanup_runs_at_most_once(resources, ops):
    calls = []
    guard = ScopedRef(lambda *rs: calls.append(rs), *resources)
    expected = tuple(resources)
    stolen = False
    released = False

    for op in ops:
        if op == "release":
            guard.release()
            released = True
        elif op == "move":
            guard = guard.move()
        elif op == "move_into_fresh":
            fresh_calls = []
            fresh = ScopedRef(lambda r: fresh_calls.append(r), "other")
            fresh.move_from(guard)
            assert fresh_calls == ["other"]
            guard = fresh
        elif op == "steal":
            if released:
                try:
                    guard.steal()
                except AlreadyReleasedError:
                    pass
                else:
                    raise AssertionError("steal() on a released guard must raise")
            else:
                assert guard.steal() == expected
                stolen = released = True
        elif op == "get":
            if released:
                try:
                    guard.get()
                except AlreadyReleasedError:
                    pass
                else:
                    raise AssertionError("get() on a released guard must raise")
            else:
                assert guard.get() == expected[0]
        elif op == "try_get":
            assert guard.try_get() == (None if released else Present(expected[0]))
        elif op == "set":
            if not released:
                guard.set(expected[0] + 1)
                expected = (expected[0] + 1, *expected[1:])
        elif op == "try_set":
            status = guard.try_set(0)
            if released:
                assert status is SetStatus.RELEASED
            else:
                assert status is SetStatus.OK
                expected = (0, *expected[1:])

    del guard
    gc.collect()

    if stolen:
        assert calls == []
    else:
        assert calls == [expected]


@given(value=st.integers(), index=st.integers(min_value=0, max_value=3))
def test_try_get_reflects_set(value, index):
    guard = ScopedRef(lambda *_: None, 0, 0, 0, 0)

    guard.set(value, index=index)

    assert guard.try_get(index) == Present(value)
    guard.release()
    assert guard.try_get(index) is None
