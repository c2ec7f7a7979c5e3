"""Public exports for Pydantic schemas."""

from __future__ import annotations

from .envelope import (
    CODE_OK,
    GeneralResponse,
    OrderClause,
    OrderParams,
    PagingParams,
    PagingResponse,
    PagingResult,
    TimeRangeParams,
)
from .wire_error import RemoteError, WireError

__all__ = [
    "CODE_OK",
    "GeneralResponse",
    "OrderClause",
    "OrderParams",
    "PagingParams",
    "PagingResponse",
    "PagingResult",
    "RemoteError",
    "TimeRangeParams",
    "WireError",
]
