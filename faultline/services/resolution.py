"""One-shot classification of an inbound error into a tagged result."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from faultline.core.errors import Category, LocalError
from faultline.schemas.wire_error import RemoteError, WireError
from faultline.services.codec import WireCodec
from faultline.transport.status import StatusCode, TransportStatus


class ErrorSource(StrEnum):
    """Where a resolved error came from."""

    REMOTE = "remote"
    OPAQUE_STATUS = "opaque_status"
    WIRE = "wire"
    LOCAL = "local"
    FOREIGN = "foreign"


@dataclass(frozen=True, slots=True)
class ResolvedError:
    """An error classified once and carried as-is afterwards."""

    source: ErrorSource
    wire: WireError
    peer_unreachable: bool = False
    transport_code: StatusCode | None = None

    @property
    def category(self) -> Category:
        return self.wire.category.resolve()

    @property
    def retryable(self) -> bool:
        return self.category.retryable

    @property
    def is_foreign(self) -> bool:
        return self.source in (ErrorSource.FOREIGN, ErrorSource.OPAQUE_STATUS)


class ErrorResolver:
    """Classify errors in priority order.

    1. a transport status whose message decodes as a WireError;
    2. a transport status from a peer that does not speak the wire format;
    3. a WireError value, or a RemoteError carrying one;
    4. a LocalError;
    5. anything else, as SystemTemporary.

    A structured remote error always wins over what the transport code says,
    so a deadline status carrying a BusinessFail payload stays BusinessFail.
    """

    def __init__(self, codec: WireCodec) -> None:
        self.codec = codec

    def resolve(
        self,
        err: BaseException | WireError | None,
        module_name: str,
    ) -> ResolvedError | None:
        if err is None:
            return None

        if isinstance(err, TransportStatus):
            decoded, ok = self.codec.decode(err.message)
            if ok and decoded is not None:
                return ResolvedError(
                    source=ErrorSource.REMOTE,
                    wire=decoded,
                    transport_code=err.code,
                )
            return ResolvedError(
                source=ErrorSource.OPAQUE_STATUS,
                wire=self.codec.opaque_status_to_wire(err, module_name),
                peer_unreachable=err.code is StatusCode.UNAVAILABLE,
                transport_code=err.code,
            )

        if isinstance(err, WireError):
            return ResolvedError(source=ErrorSource.WIRE, wire=err)
        if isinstance(err, RemoteError):
            return ResolvedError(source=ErrorSource.WIRE, wire=err.wire)

        if isinstance(err, LocalError):
            return ResolvedError(source=ErrorSource.LOCAL, wire=self.codec.to_wire(err, module_name))

        return ResolvedError(
            source=ErrorSource.FOREIGN,
            wire=self.codec.foreign_to_wire(err, module_name),
            peer_unreachable=isinstance(err, ConnectionError),
        )


__all__ = ["ErrorResolver", "ErrorSource", "ResolvedError"]
