# indexedmap

`indexedmap` provides `IndexMap`, a hash map whose iteration order depends only
on the sequence of insertions and removals, never on the keys' hashes. Every
pair also has a position in the compact range `0..len(map)`, so it can be
reached by key or by index.

## Installation

```
pip install indexedmap
```

## Usage

```python
from indexedmap.map import IndexMap, indexmap

letters = IndexMap()
for ch in "a short treatise on fungi":
    letters.insert(ch, letters.get(ch, 0) + 1)

assert letters["s"] == 2
assert letters["t"] == 3
assert letters.get("y") is None

m = indexmap((1, 2), (7, 1), (2, 2), (3, 3))
assert m.get_index_of(7) == 1
assert m.get_full(2) == (2, 2, 2)
assert m.get_index(0) == (1, 2)
```

`IndexMap(items)` accepts a mapping or an iterable of `(key, value)` pairs;
`IndexMap.with_capacity(n)` creates an empty map with room for `n` pairs.
Iterating over a map yields its keys in order; `keys()`, `values()` and
`items()` iterate in the same order.

### Insertion and lookup

- `insert(key, value)` keeps an existing key in its place and returns the old
  value, or appends the new pair and returns `None`.
- `insert_full(key, value)` also returns the index: `(index, old_value)`.
- `extend(iterable)` inserts pairs in order; when a key repeats, the last
  value wins.
- `get(key, default=None)`, `get_key_value`, `get_full` and `get_index_of`
  look a key up; `contains_key` and `in` test for it.
- `map[key]` raises `KeyError` for a missing key. `map[key] = value` only
  updates an existing key and raises `KeyError` otherwise; use `insert` to add
  pairs.

### Positional access

`get_index`, `set_index_value`, `get_range(start, stop)`, `first` and `last`
work by position. `move_index(from_index, to_index)` and `swap_indices(a, b)`
rearrange pairs and raise `IndexError` for positions out of bounds.

### Removal

- `swap_remove`, `swap_remove_entry`, `swap_remove_full` and
  `swap_remove_index` remove in constant time by moving the last pair into the
  gap, which changes the position of that last pair.
- `shift_remove`, `shift_remove_entry`, `shift_remove_full` and
  `shift_remove_index` shift the following pairs down and keep their order.
- `pop()` removes the last pair, `truncate(length)` keeps the first `length`,
  `retain(keep)` keeps the pairs for which `keep(key, value)` is true, and
  `clear()` removes everything.
- `drain(start, stop)` removes a range at once and returns an iterator over
  the removed pairs; `split_off(at)` moves the pairs from `at` on into a new
  map. Both raise `IndexError` for an invalid range.

Removal by key returns `None` when the key is absent.

### Splicing

```python
m = IndexMap([(0, "_"), (1, "a"), (2, "b"), (3, "c"), (4, "d")])
removed = list(m.splice(2, 4, [(5, "E"), (4, "D"), (3, "C"), (2, "B"), (1, "A")]))

assert removed == [(2, "b"), (3, "c")]
assert list(m.items()) == [(0, "_"), (1, "A"), (5, "E"), (3, "C"), (2, "B"), (4, "D")]
```

Keys already present outside the range get their value updated in place;
other keys are inserted where the range was.

### Sorting and searching

Comparison callbacks return a negative number, zero or a positive number.

```python
m = indexmap((1, 2), (7, 1), (2, 2), (3, 3))
by_value = m.sorted_by(lambda k1, v1, k2, v2: (v1 > v2) - (v1 < v2))
assert list(by_value) == [(7, 1), (1, 2), (2, 2), (3, 3)]

m.sort_keys()
assert m.binary_search_keys(3) == (True, 2)
assert m.binary_search_keys(5) == (False, 3)
```

- In place: `sort_keys`, `sort_by(cmp)`, `sort_unstable_keys`,
  `sort_unstable_by(cmp)`, `sort_by_cached_key(sort_key)`, `reverse`.
- Sorted copies as iterators, leaving the map unchanged: `sorted_by(cmp)`,
  `sorted_unstable_by(cmp)`.
- `binary_search_keys`, `binary_search_by` and `binary_search_by_key` return
  `(found, index)`, where `index` is the match or the insertion point;
  `partition_point(pred)` returns the first position where `pred` is false.

### Equality, copies and capacity

Two maps are equal when they hold the same pairs, in any order. `copy()`
returns a shallow copy with its own order. `capacity()`, `reserve`,
`reserve_exact`, `shrink_to` and `shrink_to_fit` manage capacity; `reserve`
raises `OverflowError` when the required capacity is too large, while
`try_reserve` and `try_reserve_exact` raise
`indexedmap.errors.TryReserveError` instead.

## What the package does not provide

There is no ordered set type; an `IndexMap` with `None` values serves that
purpose. There is no serialization support.

## Running the tests

```
pip install -e ".[test]"
pytest
```