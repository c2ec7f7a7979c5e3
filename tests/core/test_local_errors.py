from __future__ import annotations

import pytest

from faultline.core import errors as errors_module
from faultline.core.errors import (
    Category,
    ErrorCode,
    LocalError,
    is_bad_request_code,
    new_business_fail,
    new_business_temporary,
    new_system_temporary,
)
from faultline.transport.status import StatusCode, TransportStatus


def _raise_and_catch(exc: Exception) -> Exception:
    try:
        raise exc
    except Exception as caught:  # noqa: BLE001
        return caught


@pytest.mark.parametrize(
    ("constructor", "category"),
    [
        (new_business_fail, Category.BUSINESS_FAIL),
        (new_business_temporary, Category.BUSINESS_TEMPORARY),
        (new_system_temporary, Category.SYSTEM_TEMPORARY),
    ],
)
def test_constructors_stamp_category(constructor, category: Category) -> None:
    err = constructor(None, "E1", "bad")

    assert isinstance(err, LocalError)
    assert err.category is category
    assert err.code == "E1"
    assert err.message == "bad"
    assert err.cause is None


def test_constructor_rejects_empty_code() -> None:
    with pytest.raises(ValueError):
        new_business_fail(None, "", "bad")
    with pytest.raises(ValueError):
        new_system_temporary(None, "   ", "bad")


def test_unclassified_is_not_a_constructor_output() -> None:
    with pytest.raises(ValueError):
        LocalError("E1", "bad", Category.UNCLASSIFIED)


def test_fields_are_read_only() -> None:
    err = new_business_fail(None, "E1", "bad")

    with pytest.raises(AttributeError):
        err.code = "E2"  # type: ignore[misc]
    with pytest.raises(AttributeError):
        err.category = Category.SYSTEM_TEMPORARY  # type: ignore[misc]


def test_anchor_captured_at_call_site_when_cause_missing() -> None:
    err = new_business_fail(None, "E1", "bad")

    assert "test_anchor_captured_at_call_site_when_cause_missing" in err.stack_trace
    assert errors_module.__file__ not in err.stack_trace


def test_wrapping_reuses_inner_stack_anchor() -> None:
    inner = new_system_temporary(None, "ErrDbTimeout", "storage timed out")
    outer = new_business_temporary(inner, "ErrOrderPending", "order not ready")

    assert outer.origin is inner.origin
    assert outer.stack_trace == inner.stack_trace


def test_raised_foreign_cause_provides_the_anchor() -> None:
    cause = _raise_and_catch(RuntimeError("disk full"))

    err = new_system_temporary(cause, "ErrStorage", "write failed")

    assert "_raise_and_catch" in err.stack_trace
    assert err.__cause__ is cause


def test_wrapping_does_not_mutate_the_wrapped_error() -> None:
    inner = new_business_fail(None, "E1", "bad")
    outer = new_business_fail(inner, "E2", "worse")

    assert inner.cause is None
    assert outer.cause is inner
    assert str(inner) == "code: E1, cat: BusinessFail, msg: bad"


def test_str_renders_code_category_message_and_cause() -> None:
    inner = new_system_temporary(None, "ErrDb", "timeout")
    outer = new_business_fail(inner, "E1", "declined")

    assert str(outer) == (
        "code: E1, cat: BusinessFail, msg: declined, "
        "causedBy: code: ErrDb, cat: SystemTemporary, msg: timeout"
    )


def test_cause_chain_is_nearest_first_and_follows_foreign_causes() -> None:
    root = ValueError("root")
    middle = RuntimeError("middle")
    middle.__cause__ = root
    inner = new_system_temporary(middle, "ErrInner", "inner")
    outer = new_business_fail(inner, "ErrOuter", "outer")

    assert outer.cause_chain() == (inner, middle, root)


def test_cause_chain_stops_at_transport_status() -> None:
    status = TransportStatus(StatusCode.INTERNAL, "{}")
    status.__cause__ = RuntimeError("local detail of the remote side")

    err = new_system_temporary(status, "ErrUpstream", "upstream failed")

    assert err.cause_chain() == (status,)


def test_cause_chain_survives_cycles() -> None:
    first = RuntimeError("first")
    second = RuntimeError("second")
    first.__cause__ = second
    second.__cause__ = first

    err = new_system_temporary(first, "ErrLoop", "loop")

    assert err.cause_chain() == (first, second)


def test_category_properties() -> None:
    assert not Category.BUSINESS_FAIL.retryable
    assert Category.BUSINESS_TEMPORARY.retryable
    assert Category.SYSTEM_TEMPORARY.retryable
    assert Category.UNCLASSIFIED.resolve() is Category.SYSTEM_TEMPORARY
    assert Category.BUSINESS_TEMPORARY.is_business
    assert not Category.UNCLASSIFIED.is_business


def test_bad_request_code_detection() -> None:
    assert is_bad_request_code(ErrorCode.BAD_REQUEST)
    assert is_bad_request_code("ErrBadRequest")
    assert not is_bad_request_code("E1")


def test_local_error_can_be_raised_and_caught() -> None:
    with pytest.raises(LocalError) as exc:
        raise new_business_fail(None, "E1", "bad")

    assert exc.value.code == "E1"
