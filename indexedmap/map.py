"""A hash map whose iteration order follows insertion, not hash values."""

from __future__ import annotations

import copy as _copy
import operator
from collections.abc import Mapping
from typing import Any, Hashable, Iterable, Iterator, Optional, Tuple

from .sorting import SortableEntries
from .store import OrderedEntries, _Bucket

_MISSING_KEY = "IndexMap: key not found"


def _pairs(iterable: Any) -> Iterable[Tuple[Any, Any]]:
    if isinstance(iterable, (Mapping, OrderedEntries)):
        return iterable.items()
    return iterable


class IndexMap(SortableEntries):
    """A hash map that keeps its key/value pairs in a consistent order.

    The order is determined by the sequence of insertions and removals and
    never by the keys' hashes. Pairs occupy the positions ``0..len`` with no
    holes. Inserting an existing key updates its value in place; new keys go
    last.
    """

    def __init__(self, items: Any = None) -> None:
        super().__init__(0)
        if items is not None:
            self.extend(items)

    @classmethod
    def with_capacity(cls, n: int) -> "IndexMap":
        """Create an empty map with room for at least ``n`` pairs."""
        result = cls()
        result.reserve_exact(n)
        return result

    # -- insertion ---------------------------------------------------------

    def insert(self, key: Hashable, value: Any) -> Any:
        """Insert a pair; return the previous value for ``key`` or None."""
        return self._insert_full(key, value)[1]

    def insert_full(self, key: Hashable, value: Any) -> Tuple[int, Any]:
        """Insert a pair; return its index and the previous value or None."""
        return self._insert_full(key, value)

    def extend(self, iterable: Any) -> None:
        """Insert every pair of ``iterable`` in order.

        Existing keys keep their place and get the new value; when a key
        repeats, the last value wins. Mappings contribute their items.
        """
        pairs = _pairs(iterable)
        hint = operator.length_hint(pairs)
        self.reserve(hint if self.is_empty() else (hint + 1) // 2)
        for key, value in pairs:
            self._insert_full(key, value)

    def splice(
        self, start: Optional[int], stop: Optional[int], replace_with: Any
    ) -> Iterator[Tuple[Any, Any]]:
        """Replace the pairs in ``[start, stop)`` with ``replace_with``.

        Returns an iterator over the removed pairs. A key from
        ``replace_with`` already present outside the range has its value
        updated in place; other keys are inserted where the range was.
        Raises IndexError for an invalid range.
        """
        removed = self.drain(start, stop)
        position = 0 if start is None else operator.index(start)
        for key, value in _pairs(replace_with):
            index = self._get_index_of(key)
            if index is not None:
                self.set_index_value(index, value)
            else:
                self._shift_insert_unique(position, key, value)
                position += 1
        return removed

    # -- lookup ------------------------------------------------------------

    def contains_key(self, key: Hashable) -> bool:
        """Return True if ``key`` is in the map."""
        return self._get_index_of(key) is not None

    def __contains__(self, key: Hashable) -> bool:
        return self.contains_key(key)

    def get(self, key: Hashable, default: Any = None) -> Any:
        """Return the value for ``key``, or ``default`` if it is absent."""
        index = self._get_index_of(key)
        if index is None:
            return default
        return self._entries[index].value

    def get_key_value(self, key: Hashable) -> Optional[Tuple[Any, Any]]:
        """Return the stored ``(key, value)`` pair for ``key``, or None."""
        index = self._get_index_of(key)
        if index is None:
            return None
        return self._entries[index].pair()

    def get_full(self, key: Hashable) -> Optional[Tuple[int, Any, Any]]:
        """Return ``(index, key, value)`` for ``key``, or None."""
        index = self._get_index_of(key)
        if index is None:
            return None
        bucket = self._entries[index]
        return index, bucket.key, bucket.value

    def get_index_of(self, key: Hashable) -> Optional[int]:
        """Return the position of ``key``, or None if it is absent."""
        return self._get_index_of(key)

    def __getitem__(self, key: Hashable) -> Any:
        index = self._get_index_of(key)
        if index is None:
            raise KeyError(key)
        return self._entries[index].value

    def __setitem__(self, key: Hashable, value: Any) -> None:
        """Update the value of an existing key.

        New pairs cannot be added this way; use :meth:`insert`. Raises
        KeyError if ``key`` is absent.
        """
        index = self._get_index_of(key)
        if index is None:
            raise KeyError(key)
        self._entries[index].value = value

    # -- removal by key ----------------------------------------------------

    def swap_remove(self, key: Hashable) -> Any:
        """Remove ``key`` by swapping in the last pair; return its value or None."""
        full = self._swap_remove_full(key)
        return None if full is None else full[2]

    def swap_remove_entry(self, key: Hashable) -> Optional[Tuple[Any, Any]]:
        """Like :meth:`swap_remove`, returning the removed ``(key, value)``."""
        full = self._swap_remove_full(key)
        return None if full is None else (full[1], full[2])

    def swap_remove_full(self, key: Hashable) -> Optional[Tuple[int, Any, Any]]:
        """Like :meth:`swap_remove`, returning ``(index, key, value)``."""
        return self._swap_remove_full(key)

    def shift_remove(self, key: Hashable) -> Any:
        """Remove ``key`` keeping the order of the rest; return its value or None."""
        full = self._shift_remove_full(key)
        return None if full is None else full[2]

    def shift_remove_entry(self, key: Hashable) -> Optional[Tuple[Any, Any]]:
        """Like :meth:`shift_remove`, returning the removed ``(key, value)``."""
        full = self._shift_remove_full(key)
        return None if full is None else (full[1], full[2])

    def shift_remove_full(self, key: Hashable) -> Optional[Tuple[int, Any, Any]]:
        """Like :meth:`shift_remove`, returning ``(index, key, value)``."""
        return self._shift_remove_full(key)

    # -- whole-map behaviour -----------------------------------------------

    def copy(self) -> "IndexMap":
        """Return a shallow copy with its own order and index."""
        other = _copy.copy(self)
        other._entries = [_Bucket(b.key, b.value) for b in self._entries]
        other._indices = dict(self._indices)
        return other

    def __eq__(self, other: object) -> bool:
        """Maps are equal when they hold the same pairs, in any order."""
        if not isinstance(other, IndexMap):
            return NotImplemented
        if len(self) != len(other):
            return False
        for bucket in self._entries:
            index = other._get_index_of(bucket.key)
            if index is None or not bucket.value == other._entries[index].value:
                return False
        return True

    def __repr__(self) -> str:
        inner = ", ".join(f"{b.key!r}: {b.value!r}" for b in self._entries)
        return f"{type(self).__name__}({{{inner}}})"


def indexmap(*args: Tuple[Any, Any]) -> IndexMap:
    """Build an IndexMap from ``(key, value)`` pairs given as arguments."""
    result = IndexMap.with_capacity(len(args))
    for key, value in args:
        result.insert(key, value)
    return result