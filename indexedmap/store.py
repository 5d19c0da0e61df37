"""Ordered key/value storage with positional access and a hash index.

Entries live in a dense list, so positions always form the range
``0..len``, and a dictionary maps every key to its position. The order of
the entries depends only on the sequence of operations, never on hashes.
"""

from __future__ import annotations

import copy
import operator
import sys
from dataclasses import dataclass
from itertools import islice
from typing import Any, Callable, Hashable, Iterator, List, Optional, Tuple

from .errors import TryReserveError, TryReserveErrorKind

_MAX_CAPACITY = sys.maxsize
_MIN_NON_ZERO_CAPACITY = 4


@dataclass(slots=True)
class _Bucket:
    key: Any
    value: Any

    def pair(self) -> Tuple[Any, Any]:
        return self.key, self.value


def _count(value: Any, name: str) -> int:
    number = operator.index(value)
    if number < 0:
        raise ValueError(f"{name} must not be negative, got {number}")
    return number


class OrderedEntries:
    """Key/value pairs kept in a stable order with O(1) lookup by key.

    Iterating yields the keys in order. Mutating the store while iterating
    over it gives unspecified results.
    """

    def __init__(self, capacity: int = 0) -> None:
        capacity = _count(capacity, "capacity")
        if capacity > _MAX_CAPACITY:
            raise OverflowError("capacity overflow")
        self._entries: List[_Bucket] = []
        self._indices: dict = {}
        self._capacity = capacity

    # -- size and capacity -------------------------------------------------

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Any]:
        return (bucket.key for bucket in self._entries)

    def is_empty(self) -> bool:
        """Return True if the store holds no entries."""
        return not self._entries

    def capacity(self) -> int:
        """Number of entries the store can hold before it has to grow."""
        return self._capacity

    def _grow(self, additional: Any, *, exact: bool, fallible: bool) -> None:
        additional = _count(additional, "additional")
        required = len(self._entries) + additional
        if required > _MAX_CAPACITY:
            if fallible:
                raise TryReserveError(TryReserveErrorKind.CAPACITY_OVERFLOW)
            raise OverflowError("capacity overflow")
        if required <= self._capacity:
            return
        if exact:
            self._capacity = required
        else:
            self._capacity = min(
                _MAX_CAPACITY,
                max(required, 2 * self._capacity, _MIN_NON_ZERO_CAPACITY),
            )

    def reserve(self, additional: int) -> None:
        """Make room for ``additional`` more entries, over-allocating.

        Raises OverflowError if the required capacity is too large.
        """
        self._grow(additional, exact=False, fallible=False)

    def reserve_exact(self, additional: int) -> None:
        """Make room for ``additional`` more entries without over-allocating."""
        self._grow(additional, exact=True, fallible=False)

    def try_reserve(self, additional: int) -> None:
        """Like :meth:`reserve`, but raise TryReserveError on failure."""
        self._grow(additional, exact=False, fallible=True)

    def try_reserve_exact(self, additional: int) -> None:
        """Like :meth:`reserve_exact`, but raise TryReserveError on failure."""
        self._grow(additional, exact=True, fallible=True)

    def shrink_to_fit(self) -> None:
        """Shrink the capacity as much as possible."""
        self.shrink_to(0)

    def shrink_to(self, min_capacity: int) -> None:
        """Shrink the capacity, keeping at least ``min_capacity`` and the length."""
        target = max(len(self._entries), _count(min_capacity, "min_capacity"))
        if target < self._capacity:
            self._capacity = target

    # -- iteration ---------------------------------------------------------

    def keys(self) -> Iterator[Any]:
        """Iterate over the keys in order."""
        return (bucket.key for bucket in self._entries)

    def values(self) -> Iterator[Any]:
        """Iterate over the values in order."""
        return (bucket.value for bucket in self._entries)

    def items(self) -> Iterator[Tuple[Any, Any]]:
        """Iterate over ``(key, value)`` pairs in order."""
        return (bucket.pair() for bucket in self._entries)

    # -- bulk removal ------------------------------------------------------

    def clear(self) -> None:
        """Remove every entry, keeping the capacity."""
        self._entries.clear()
        self._indices.clear()

    def truncate(self, length: int) -> None:
        """Keep the first ``length`` entries and drop the rest."""
        length = _count(length, "length")
        if length >= len(self._entries):
            return
        for bucket in self._entries[length:]:
            del self._indices[bucket.key]
        del self._entries[length:]

    def _range(self, start: Optional[int], stop: Optional[int]) -> Tuple[int, int]:
        lo = 0 if start is None else operator.index(start)
        hi = len(self._entries) if stop is None else operator.index(stop)
        return lo, hi

    def drain(
        self, start: Optional[int] = None, stop: Optional[int] = None
    ) -> Iterator[Tuple[Any, Any]]:
        """Remove the entries in ``[start, stop)`` and iterate over them.

        The range is removed at once, whether or not the iterator is used.
        Raises IndexError if ``start > stop`` or ``stop`` exceeds the length.
        """
        lo, hi = self._range(start, stop)
        length = len(self._entries)
        if lo < 0 or hi < 0:
            raise IndexError("drain range must not be negative")
        if lo > hi:
            raise IndexError(f"slice index starts at {lo} but ends at {hi}")
        if hi > length:
            raise IndexError(
                f"range end index {hi} out of range for slice of length {length}"
            )
        removed = self._entries[lo:hi]
        del self._entries[lo:hi]
        for bucket in removed:
            del self._indices[bucket.key]
        self._reindex(lo)
        return iter([bucket.pair() for bucket in removed])

    def split_off(self, at: int) -> "OrderedEntries":
        """Split off the entries from ``at`` on into a new store.

        The original keeps ``[0, at)`` and its capacity. Raises IndexError
        if ``at`` exceeds the length.
        """
        at = operator.index(at)
        length = len(self._entries)
        if at < 0 or at > length:
            raise IndexError(f"`at` split index (is {at}) should be <= len (is {length})")
        tail = self._entries[at:]
        del self._entries[at:]
        for bucket in tail:
            del self._indices[bucket.key]
        return self._spawn(tail)

    def pop(self) -> Optional[Tuple[Any, Any]]:
        """Remove and return the last ``(key, value)`` pair, or None if empty."""
        if not self._entries:
            return None
        bucket = self._entries.pop()
        del self._indices[bucket.key]
        return bucket.pair()

    def retain(self, keep: Callable[[Any, Any], bool]) -> None:
        """Keep only the entries for which ``keep(key, value)`` is true.

        Entries are visited in order and the survivors keep their order.
        """
        kept = [bucket for bucket in self._entries if keep(bucket.key, bucket.value)]
        if len(kept) == len(self._entries):
            return
        self._entries[:] = kept
        self._indices = {bucket.key: i for i, bucket in enumerate(kept)}

    # -- positional access -------------------------------------------------

    def _position(self, index: Any) -> Optional[int]:
        index = operator.index(index)
        if 0 <= index < len(self._entries):
            return index
        return None

    def _require_position(self, index: Any) -> int:
        position = self._position(index)
        if position is None:
            raise IndexError(
                f"index {index} out of bounds for length {len(self._entries)}"
            )
        return position

    def get_index(self, index: int) -> Optional[Tuple[Any, Any]]:
        """Return the ``(key, value)`` pair at ``index``, or None."""
        position = self._position(index)
        if position is None:
            return None
        return self._entries[position].pair()

    def set_index_value(self, index: int, value: Any) -> Any:
        """Replace the value at ``index`` and return the old one.

        Raises IndexError if ``index`` is out of bounds.
        """
        bucket = self._entries[self._require_position(index)]
        old, bucket.value = bucket.value, value
        return old

    def get_range(
        self, start: Optional[int] = None, stop: Optional[int] = None
    ) -> Optional[List[Tuple[Any, Any]]]:
        """Return the pairs in ``[start, stop)``, or None for an invalid range."""
        lo, hi = self._range(start, stop)
        if lo < 0 or hi < 0 or lo > hi or hi > len(self._entries):
            return None
        return [bucket.pair() for bucket in self._entries[lo:hi]]

    def first(self) -> Optional[Tuple[Any, Any]]:
        """Return the first ``(key, value)`` pair, or None if empty."""
        return self._entries[0].pair() if self._entries else None

    def last(self) -> Optional[Tuple[Any, Any]]:
        """Return the last ``(key, value)`` pair, or None if empty."""
        return self._entries[-1].pair() if self._entries else None

    def swap_remove_index(self, index: int) -> Optional[Tuple[Any, Any]]:
        """Remove the pair at ``index`` by moving the last pair into its place.

        Returns the removed pair, or None if ``index`` is out of bounds.
        """
        position = self._position(index)
        if position is None:
            return None
        entries = self._entries
        bucket = entries[position]
        last = entries.pop()
        del self._indices[bucket.key]
        if position < len(entries):
            entries[position] = last
            self._indices[last.key] = position
        return bucket.pair()

    def shift_remove_index(self, index: int) -> Optional[Tuple[Any, Any]]:
        """Remove the pair at ``index``, shifting the following pairs down.

        Returns the removed pair, or None if ``index`` is out of bounds.
        """
        position = self._position(index)
        if position is None:
            return None
        bucket = self._entries.pop(position)
        del self._indices[bucket.key]
        self._reindex(position)
        return bucket.pair()

    def move_index(self, from_index: int, to_index: int) -> None:
        """Move the pair at ``from_index`` to ``to_index``, shifting the rest.

        Raises IndexError if either index is out of bounds.
        """
        source = self._require_position(from_index)
        target = self._require_position(to_index)
        if source == target:
            return
        bucket = self._entries.pop(source)
        self._entries.insert(target, bucket)
        self._reindex(min(source, target), max(source, target) + 1)

    def swap_indices(self, a: int, b: int) -> None:
        """Swap the pairs at positions ``a`` and ``b``.

        Raises IndexError if either index is out of bounds.
        """
        first = self._require_position(a)
        second = self._require_position(b)
        entries = self._entries
        entries[first], entries[second] = entries[second], entries[first]
        self._indices[entries[first].key] = first
        self._indices[entries[second].key] = second

    # -- building blocks for keyed access ----------------------------------

    def _reindex(self, start: int = 0, stop: Optional[int] = None) -> None:
        for position, bucket in enumerate(
            islice(self._entries, start, stop), start
        ):
            self._indices[bucket.key] = position

    def _with_entries(self, action: Callable[[List[_Bucket]], None]) -> None:
        """Let ``action`` reorder the bucket list in place, then reindex."""
        action(self._entries)
        self._indices = {bucket.key: i for i, bucket in enumerate(self._entries)}

    def _spawn(self, buckets: List[_Bucket]) -> "OrderedEntries":
        other = copy.copy(self)
        other._entries = buckets
        other._indices = {bucket.key: i for i, bucket in enumerate(buckets)}
        other._capacity = len(buckets)
        return other

    def _get_index_of(self, key: Hashable) -> Optional[int]:
        return self._indices.get(key)

    def _insert_full(self, key: Hashable, value: Any) -> Tuple[int, Any]:
        """Insert or update; return the index and the previous value or None."""
        position = self._indices.get(key)
        if position is not None:
            bucket = self._entries[position]
            old, bucket.value = bucket.value, value
            return position, old
        if len(self._entries) >= self._capacity:
            self.reserve(1)
        position = len(self._entries)
        self._entries.append(_Bucket(key, value))
        self._indices[key] = position
        return position, None

    def _shift_insert_unique(self, index: int, key: Hashable, value: Any) -> None:
        """Insert a key known to be absent at ``index``, shifting the rest up."""
        if len(self._entries) >= self._capacity:
            self.reserve(1)
        self._entries.insert(index, _Bucket(key, value))
        self._reindex(index)

    def _swap_remove_full(self, key: Hashable) -> Optional[Tuple[int, Any, Any]]:
        position = self._indices.get(key)
        if position is None:
            return None
        removed_key, removed_value = self.swap_remove_index(position)
        return position, removed_key, removed_value

    def _shift_remove_full(self, key: Hashable) -> Optional[Tuple[int, Any, Any]]:
        position = self._indices.get(key)
        if position is None:
            return None
        removed_key, removed_value = self.shift_remove_index(position)
        return position, removed_key, removed_value