import pytest
from hypothesis import given
from hypothesis import strategies as st

from indexedmap.sorting import SortableEntries

int8 = st.integers(min_value=-128, max_value=127)
pair_lists = st.lists(st.tuples(int8, int8), max_size=200)


def make(pairs):
    entries = SortableEntries()
    for key, value in pairs:
        entries._insert_full(key, value)
    return entries


def by_value(k1, v1, k2, v2):
    return (v1 > v2) - (v1 < v2)


def by_key(k1, v1, k2, v2):
    return (k1 > k2) - (k1 < k2)


def assert_index_consistent(entries):
    for position, key in enumerate(entries.keys()):
        assert entries._get_index_of(key) == position


def test_sorted_by_values_is_stable():
    entries = make([(1, 2), (7, 1), (2, 2), (3, 3)])
    assert list(entries.sorted_by(by_value)) == [(7, 1), (1, 2), (2, 2), (3, 3)]


def test_sorted_by_leaves_store_unchanged():
    entries = make([(1, 2), (7, 1), (2, 2), (3, 3)])
    list(entries.sorted_by(by_value))
    assert list(entries.items()) == [(1, 2), (7, 1), (2, 2), (3, 3)]


def test_sorted_unstable_by_keys():
    entries = make([(1, 2), (7, 1), (2, 2), (3, 3)])
    assert [k for k, _ in entries.sorted_unstable_by(by_key)] == [1, 2, 3, 7]


def test_sort_keys_strings():
    entries = make([("lorem", 1), ("ipsum", 2), ("dolor", 3), ("sit", 4), ("amet", 5)])
    entries.sort_keys()
    assert list(entries.keys()) == ["amet", "dolor", "ipsum", "lorem", "sit"]
    assert entries.get_index(1) == ("dolor", 3)
    assert_index_consistent(entries)


def test_sort_unstable_keys():
    entries = make([(5, "a"), (1, "b"), (3, "c")])
    entries.sort_unstable_keys()
    assert list(entries.items()) == [(1, "b"), (3, "c"), (5, "a")]
    assert_index_consistent(entries)


def test_sort_unstable_by_values():
    entries = make([(5, 30), (1, 10), (3, 20)])
    entries.sort_unstable_by(by_value)
    assert list(entries.values()) == [10, 20, 30]
    assert_index_consistent(entries)


def test_sort_by_cached_key_calls_once_per_entry():
    calls = []

    def sort_key(key, value):
        calls.append(key)
        return -key

    entries = make([(k, k) for k in range(10)])
    entries.sort_by_cached_key(sort_key)
    assert sorted(calls) == list(range(10))
    assert list(entries.keys()) == list(range(9, -1, -1))


def test_reverse_simple():
    entries = make([("a", 1), ("b", 2), ("c", 3)])
    entries.reverse()
    assert list(entries.items()) == [("c", 3), ("b", 2), ("a", 1)]
    assert_index_consistent(entries)


@pytest.mark.parametrize(
    "target, expected",
    [(5, (True, 2)), (4, (False, 2)), (0, (False, 0)), (8, (False, 4)), (1, (True, 0))],
)
def test_binary_search_keys(target, expected):
    entries = make([(1, 2), (3, 6), (5, 10), (7, 14)])
    assert entries.binary_search_keys(target) == expected


def test_binary_search_keys_empty():
    assert SortableEntries().binary_search_keys(3) == (False, 0)


def test_binary_search_by():
    entries = make([(1, 2), (3, 6), (5, 10), (7, 14)])
    assert entries.binary_search_by(lambda k, v: (k > 5) - (k < 5)) == (True, 2)
    assert entries.binary_search_by(lambda k, v: (k > 6) - (k < 6)) == (False, 3)


def test_binary_search_by_key():
    entries = make([(1, 2), (3, 6), (5, 10), (7, 14)])
    assert entries.binary_search_by_key(10, lambda k, v: v) == (True, 2)
    assert entries.binary_search_by_key(15, lambda k, v: v) == (False, 4)


def test_partition_point():
    entries = make([(1, 2), (3, 6), (5, 10), (7, 14)])
    assert entries.partition_point(lambda k, v: k < 5) == 2
    assert entries.partition_point(lambda k, v: True) == 4
    assert entries.partition_point(lambda k, v: False) == 0


@given(pair_lists)
def test_sort_by_keys_matches_deduplicated_sort(pairs):
    entries = make(pairs)
    entries.sort_by(by_key)
    assert list(entries.items()) == sorted(dict(pairs).items())
    assert_index_consistent(entries)


@given(pair_lists)
def test_sort_by_values_is_sorted(pairs):
    entries = make(pairs)
    entries.sort_by(by_value)
    values = list(entries.values())
    assert values == sorted(values)
    assert sorted(entries.items()) == sorted(dict(pairs).items())
    assert_index_consistent(entries)


@given(pair_lists)
def test_sort_by_cached_key_reverse_keys(pairs):
    entries = make(pairs)
    entries.sort_by_cached_key(lambda k, v: -k)
    keys = list(entries.keys())
    assert keys == sorted(keys, reverse=True)
    assert_index_consistent(entries)


@given(pair_lists)
def test_reverse_matches_reversed_insertion_order(pairs):
    entries = make(pairs)
    entries.reverse()
    answer = list(dict(pairs).items())[::-1]
    assert list(entries.items()) == answer
    assert_index_consistent(entries)


@given(st.lists(int8, unique=True, max_size=100), int8)
def test_binary_search_keys_position_invariant(keys, target):
    entries = make((k, None) for k in sorted(keys))
    found, index = entries.binary_search_keys(target)
    ordered = sorted(keys)
    assert found == (target in keys)
    if found:
        assert ordered[index] == target
    else:
        assert all(k < target for k in ordered[:index])
        assert all(k > target for k in ordered[index:])