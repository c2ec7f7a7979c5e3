"""RPC transport primitives consumed by the error pipeline."""

from faultline.transport.status import StatusCode, TransportStatus

__all__ = ["StatusCode", "TransportStatus"]
