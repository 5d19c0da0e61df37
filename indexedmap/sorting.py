"""Reordering and searching for ordered key/value storage.

Comparison callbacks follow the classic three-way convention: they return a
negative number, zero or a positive number for "less", "equal" and
"greater".
"""

from __future__ import annotations

import functools
from typing import Any, Callable, Iterator, List, Tuple

from .store import OrderedEntries, _Bucket

Comparator = Callable[[Any, Any, Any, Any], int]


def _three_way(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def _bucket_order(cmp: Comparator) -> Callable[[_Bucket], Any]:
    return functools.cmp_to_key(
        lambda left, right: cmp(left.key, left.value, right.key, right.value)
    )


class SortableEntries(OrderedEntries):
    """Ordered entries that can also be sorted, reversed and searched.

    Searches return ``(found, index)``: when ``found`` is true, ``index`` is
    the position of a matching entry; otherwise it is the position where a
    matching entry could be inserted to keep the order sorted.
    """

    # -- sorting in place --------------------------------------------------

    def sort_keys(self) -> None:
        """Sort the entries by key. The sort is stable."""
        self._with_entries(lambda entries: entries.sort(key=lambda b: b.key))

    def sort_by(self, cmp: Comparator) -> None:
        """Sort the entries with ``cmp(key1, value1, key2, value2)``. Stable."""
        order = _bucket_order(cmp)
        self._with_entries(lambda entries: entries.sort(key=order))

    def sort_unstable_keys(self) -> None:
        """Sort the entries by key; equal keys may end up in any order."""
        self.sort_keys()

    def sort_unstable_by(self, cmp: Comparator) -> None:
        """Sort with ``cmp``; entries comparing equal may end up in any order."""
        self.sort_by(cmp)

    def sort_by_cached_key(self, sort_key: Callable[[Any, Any], Any]) -> None:
        """Sort by ``sort_key(key, value)``, called once per entry. Stable."""
        self._with_entries(
            lambda entries: entries.sort(key=lambda b: sort_key(b.key, b.value))
        )

    def reverse(self) -> None:
        """Reverse the order of the entries in place."""
        self._with_entries(lambda entries: entries.reverse())

    # -- sorted copies -----------------------------------------------------

    def sorted_by(self, cmp: Comparator) -> Iterator[Tuple[Any, Any]]:
        """Iterate over the ``(key, value)`` pairs sorted with ``cmp``.

        The store itself is left unchanged. The sort is stable.
        """
        ordered: List[_Bucket] = sorted(self._entries, key=_bucket_order(cmp))
        return iter([bucket.pair() for bucket in ordered])

    def sorted_unstable_by(self, cmp: Comparator) -> Iterator[Tuple[Any, Any]]:
        """Like :meth:`sorted_by`, without promising the order of equal pairs."""
        return self.sorted_by(cmp)

    # -- searching ---------------------------------------------------------

    def _search(self, compare: Callable[[_Bucket], int]) -> Tuple[bool, int]:
        lo, hi = 0, len(self._entries)
        while lo < hi:
            mid = (lo + hi) // 2
            outcome = compare(self._entries[mid])
            if outcome < 0:
                lo = mid + 1
            elif outcome > 0:
                hi = mid
            else:
                return True, mid
        return False, lo

    def binary_search_keys(self, x: Any) -> Tuple[bool, int]:
        """Search entries sorted by key for the key ``x``."""
        return self._search(lambda bucket: _three_way(bucket.key, x))

    def binary_search_by(self, f: Callable[[Any, Any], int]) -> Tuple[bool, int]:
        """Search sorted entries with ``f(key, value)``.

        ``f`` tells how an entry compares with the target: negative if the
        entry is less, zero if it matches, positive if it is greater.
        """
        return self._search(lambda bucket: f(bucket.key, bucket.value))

    def binary_search_by_key(
        self, b: Any, f: Callable[[Any, Any], Any]
    ) -> Tuple[bool, int]:
        """Search entries sorted by ``f(key, value)`` for the value ``b``."""
        return self._search(lambda bucket: _three_way(f(bucket.key, bucket.value), b))

    def partition_point(self, pred: Callable[[Any, Any], bool]) -> int:
        """Return the index of the first entry for which ``pred`` is false.

        The entries must be partitioned: every entry satisfying ``pred``
        comes before every entry that does not.
        """
        lo, hi = 0, len(self._entries)
        while lo < hi:
            mid = (lo + hi) // 2
            bucket = self._entries[mid]
            if pred(bucket.key, bucket.value):
                lo = mid + 1
            else:
                hi = mid
        return lo