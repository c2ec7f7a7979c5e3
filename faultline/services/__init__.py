"""Error pipeline services: codec, resolution, transport mapping and translation."""

from faultline.services.codec import WireCodec
from faultline.services.resolution import ErrorResolver, ErrorSource, ResolvedError
from faultline.services.status_mapper import TransportStatusMapper, status_code_for
from faultline.services.translator import HttpOutcome, ResponseTranslator

__all__ = [
    "ErrorResolver",
    "ErrorSource",
    "HttpOutcome",
    "ResolvedError",
    "ResponseTranslator",
    "TransportStatusMapper",
    "WireCodec",
    "status_code_for",
]
