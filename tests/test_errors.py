import pytest

from indexedmap.errors import TryReserveError, TryReserveErrorKind


def test_capacity_overflow_message():
    err = TryReserveError(TryReserveErrorKind.CAPACITY_OVERFLOW)
    assert str(err) == (
        "memory allocation failed because the computed capacity "
        "exceeded the collection's maximum"
    )


def test_alloc_error_message_ignores_detail():
    err = TryReserveError(TryReserveErrorKind.ALLOC_ERROR, {"size": 64, "align": 8})
    assert str(err) == (
        "memory allocation failed because the memory allocator returned an error"
    )
    assert err.detail == {"size": 64, "align": 8}


def test_std_kind_uses_detail_text():
    err = TryReserveError(TryReserveErrorKind.STD, "underlying failure")
    assert str(err) == "underlying failure"


def test_std_kind_without_detail_falls_back_to_prefix():
    err = TryReserveError(TryReserveErrorKind.STD)
    assert str(err).startswith("memory allocation failed")


def test_kind_given_by_value_is_converted():
    err = TryReserveError("capacity_overflow")
    assert err.kind is TryReserveErrorKind.CAPACITY_OVERFLOW


def test_invalid_kind_rejected():
    with pytest.raises(ValueError):
        TryReserveError("no_such_kind")


def test_equality_by_kind_and_detail():
    a = TryReserveError(TryReserveErrorKind.ALLOC_ERROR, (16, 8))
    b = TryReserveError(TryReserveErrorKind.ALLOC_ERROR, (16, 8))
    c = TryReserveError(TryReserveErrorKind.ALLOC_ERROR, (32, 8))
    d = TryReserveError(TryReserveErrorKind.CAPACITY_OVERFLOW, (16, 8))
    assert a == b
    assert hash(a) == hash(b)
    assert not (a == c)
    assert not (a == d)


def test_hash_with_unhashable_detail():
    a = TryReserveError(TryReserveErrorKind.STD, ["x"])
    b = TryReserveError(TryReserveErrorKind.STD, ["x"])
    assert a == b
    assert hash(a) == hash(b)


def test_raised_as_memory_error():
    err = TryReserveError(TryReserveErrorKind.CAPACITY_OVERFLOW)
    with pytest.raises(MemoryError) as info:
        raise err
    assert info.value is err
    assert info.value.kind is TryReserveErrorKind.CAPACITY_OVERFLOW
    assert str(info.value) == (
        "memory allocation failed because the computed capacity "
        "exceeded the collection's maximum"
    )


def test_reason_property_matches_message_suffix():
    for kind in (TryReserveErrorKind.CAPACITY_OVERFLOW, TryReserveErrorKind.ALLOC_ERROR):
        err = TryReserveError(kind)
        assert str(err) == "memory allocation failed" + kind.reason
    assert TryReserveErrorKind.STD.reason == ""


def test_repr_mentions_kind_and_detail():
    err = TryReserveError(TryReserveErrorKind.ALLOC_ERROR, "layout")
    text = repr(err)
    assert "ALLOC_ERROR" in text
    assert "'layout'" in text