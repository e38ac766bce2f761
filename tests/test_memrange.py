import pytest
from hypothesis import given, strategies as st

from chickadee.memrange import MemRange, MemRangeSet, MemRangeSetFull


def as_tuples(mrs):
    return [(r.first, r.last, r.type) for r in mrs]


def test_initial_state():
    mrs = MemRangeSet(100, 8)
    assert len(mrs) == 1
    assert mrs.limit() == 100
    assert list(mrs) == [MemRange(0, 100, 0)]
    assert mrs.type(50) == 0
    mrs.validate()


def test_set_middle_splits_range():
    mrs = MemRangeSet(100, 8)
    mrs.set(10, 20, 1)
    assert as_tuples(mrs) == [(0, 10, 0), (10, 20, 1), (20, 100, 0)]
    assert mrs.type(10) == 1
    assert mrs.type(19) == 1
    assert mrs.type(20) == 0
    mrs.validate()


def test_adjacent_ranges_of_same_type_merge():
    mrs = MemRangeSet(100, 8)
    mrs.set(10, 20, 1)
    mrs.set(20, 30, 1)
    assert as_tuples(mrs) == [(0, 10, 0), (10, 30, 1), (30, 100, 0)]
    mrs.set(10, 30, 0)
    assert as_tuples(mrs) == [(0, 100, 0)]
    mrs.validate()


def test_set_whole_space():
    mrs = MemRangeSet(100, 1)
    mrs.set(0, 100, 3)
    assert as_tuples(mrs) == [(0, 100, 3)]


def test_empty_set_is_noop():
    mrs = MemRangeSet(100, 8)
    mrs.set(40, 40, 2)
    assert as_tuples(mrs) == [(0, 100, 0)]


def test_full_raises_and_leaves_state_unchanged():
    mrs = MemRangeSet(100, 2)
    with pytest.raises(MemRangeSetFull):
        mrs.set(10, 20, 1)
    assert as_tuples(mrs) == [(0, 100, 0)]
    mrs.set(0, 20, 1)
    assert as_tuples(mrs) == [(0, 20, 1), (20, 100, 0)]


def test_invalid_arguments():
    mrs = MemRangeSet(100, 8)
    with pytest.raises(ValueError):
        mrs.set(20, 10, 1)
    with pytest.raises(ValueError):
        mrs.set(0, 101, 1)
    with pytest.raises(ValueError):
        mrs.set(0, 10, 256)
    with pytest.raises(ValueError):
        mrs.type(100)


def test_find():
    mrs = MemRangeSet(100, 8)
    mrs.set(10, 20, 1)
    assert mrs.find(15) == MemRange(10, 20, 1)
    assert mrs.find(100) is None
    assert mrs.find(10).size == 10


def test_log_lines():
    mrs = MemRangeSet(0x100, 4)
    assert mrs.log_lines() == ["[0]: [0x0,0x100)=0"]
    assert mrs.log_lines("mem")[0].startswith("mem[0]: ")


ops = st.lists(
    st.tuples(
        st.integers(min_value=0, max_value=64),
        st.integers(min_value=0, max_value=64),
        st.integers(min_value=0, max_value=3),
    ),
    max_size=20,
)


@given(ops)
def test_random_assignments_keep_invariants(operations):
    mrs = MemRangeSet(64, 200)
    for a, b, t in operations:
        first, last = min(a, b), max(a, b)
        before = [mrs.type(x) for x in range(64)]
        mrs.set(first, last, t)
        mrs.validate()
        for x in range(64):
            expected = t if first <= x < last else before[x]
            assert mrs.type(x) == expected
        ranges = list(mrs)
        assert ranges[0].first == 0
        assert ranges[-1].last == 64
        for left, right in zip(ranges, ranges[1:]):
            assert left.last == right.first
            assert left.type != right.type