"""Errors raised when reserving capacity in an ordered map."""

from __future__ import annotations

import enum
from typing import Any

_PREFIX = "memory allocation failed"


class TryReserveErrorKind(enum.Enum):
    """Why a capacity reservation could not be satisfied."""

    STD = "std"
    CAPACITY_OVERFLOW = "capacity_overflow"
    ALLOC_ERROR = "alloc_error"

    @property
    def reason(self) -> str:
        """The fixed explanation appended to the failure message."""
        return _REASONS.get(self, "")


_REASONS = {
    TryReserveErrorKind.CAPACITY_OVERFLOW: (
        " because the computed capacity exceeded the collection's maximum"
    ),
    TryReserveErrorKind.ALLOC_ERROR: " because the memory allocator returned an error",
}


class TryReserveError(MemoryError):
    """Raised by the ``try_reserve`` family when capacity cannot be reserved.

    ``detail`` carries extra information: for ``STD`` it is the underlying
    error (whose text becomes the message), for ``ALLOC_ERROR`` it describes
    the requested layout.
    """

    def __init__(self, kind: TryReserveErrorKind, detail: Any = None) -> None:
        if not isinstance(kind, TryReserveErrorKind):
            kind = TryReserveErrorKind(kind)
        self.kind = kind
        self.detail = detail
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.kind is TryReserveErrorKind.STD:
            return str(self.detail) if self.detail is not None else _PREFIX
        return _PREFIX + self.kind.reason

    def __repr__(self) -> str:
        return f"TryReserveError(kind={self.kind!r}, detail={self.detail!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TryReserveError):
            return NotImplemented
        return self.kind is other.kind and self.detail == other.detail

    def __hash__(self) -> int:
        try:
            return hash((self.kind, self.detail))
        except TypeError:
            return hash(self.kind)