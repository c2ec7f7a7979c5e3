from __future__ import annotations

from faultline.core.errors import Category, ErrorCode, new_business_fail
from faultline.schemas.wire_error import RemoteError, WireError
from faultline.services.codec import WireCodec
from faultline.services.resolution import ErrorResolver, ErrorSource
from faultline.transport.status import StatusCode, TransportStatus


def test_resolve_none_returns_none(codec: WireCodec) -> None:
    assert ErrorResolver(codec).resolve(None, "gateway") is None


def test_structured_status_wins_over_transport_code(codec: WireCodec) -> None:
    remote = WireError(code="ErrStockLow", module_name="inventory", category=Category.BUSINESS_FAIL)
    status = TransportStatus(StatusCode.DEADLINE_EXCEEDED, codec.encode(remote))

    resolved = ErrorResolver(codec).resolve(status, "gateway")

    assert resolved is not None
    assert resolved.source is ErrorSource.REMOTE
    assert resolved.wire == remote
    assert resolved.category is Category.BUSINESS_FAIL
    assert resolved.transport_code is StatusCode.DEADLINE_EXCEEDED
    assert not resolved.retryable


def test_opaque_status_is_foreign_system_temporary(codec: WireCodec) -> None:
    resolved = ErrorResolver(codec).resolve(
        TransportStatus(StatusCode.UNAVAILABLE, "connection refused"), "gateway"
    )

    assert resolved is not None
    assert resolved.source is ErrorSource.OPAQUE_STATUS
    assert resolved.peer_unreachable
    assert resolved.is_foreign
    assert resolved.wire.code == ErrorCode.UNAVAILABLE
    assert resolved.category is Category.SYSTEM_TEMPORARY


def test_opaque_internal_status_is_not_unreachable(codec: WireCodec) -> None:
    resolved = ErrorResolver(codec).resolve(TransportStatus(StatusCode.INTERNAL, "x"), "gateway")

    assert resolved is not None
    assert not resolved.peer_unreachable


def test_wire_values_resolve_as_wire(codec: WireCodec) -> None:
    wire = WireError(code="E1", category=Category.BUSINESS_TEMPORARY)
    resolver = ErrorResolver(codec)

    for err in (wire, RemoteError(wire)):
        resolved = resolver.resolve(err, "gateway")
        assert resolved is not None
        assert resolved.source is ErrorSource.WIRE
        assert resolved.wire is wire


def test_local_error_resolves_with_module_name(codec: WireCodec) -> None:
    resolved = ErrorResolver(codec).resolve(new_business_fail(None, "E1", "bad"), "gateway")

    assert resolved is not None
    assert resolved.source is ErrorSource.LOCAL
    assert resolved.wire.module_name == "gateway"
    assert not resolved.is_foreign


def test_unclassified_category_resolves_to_system_temporary(codec: WireCodec) -> None:
    wire = WireError.model_validate({"code": "E1", "category": "Catastrophic"})

    resolved = ErrorResolver(codec).resolve(wire, "gateway")

    assert resolved is not None
    assert resolved.wire.category is Category.UNCLASSIFIED
    assert resolved.category is Category.SYSTEM_TEMPORARY


def test_foreign_connection_error_marks_peer_unreachable(codec: WireCodec) -> None:
    resolved = ErrorResolver(codec).resolve(ConnectionResetError("reset"), "gateway")

    assert resolved is not None
    assert resolved.source is ErrorSource.FOREIGN
    assert resolved.peer_unreachable
    assert resolved.wire.code == ErrorCode.INTERNAL


def test_foreign_error_is_system_temporary(codec: WireCodec) -> None:
    resolved = ErrorResolver(codec).resolve(ValueError("bad state"), "gateway")

    assert resolved is not None
    assert resolved.category is Category.SYSTEM_TEMPORARY
    assert not resolved.peer_unreachable
