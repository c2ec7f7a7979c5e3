"""Structured error taxonomy that survives RPC and HTTP boundaries."""

__version__ = "0.1.0"

from faultline.core.errors import (
    Category,
    ErrorCode,
    LocalError,
    new_business_fail,
    new_business_temporary,
    new_system_temporary,
)
from faultline.schemas.wire_error import RemoteError, WireError
from faultline.services.codec import WireCodec
from faultline.services.status_mapper import TransportStatusMapper
from faultline.services.translator import HttpOutcome, ResponseTranslator
from faultline.transport.status import StatusCode, TransportStatus

__all__ = [
    "__version__",
    "Category",
    "ErrorCode",
    "HttpOutcome",
    "LocalError",
    "RemoteError",
    "ResponseTranslator",
    "StatusCode",
    "TransportStatus",
    "TransportStatusMapper",
    "WireCodec",
    "WireError",
    "new_business_fail",
    "new_business_temporary",
    "new_system_temporary",
]
