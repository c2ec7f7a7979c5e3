"""HTTP response envelope and request helper models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Final, NamedTuple

from pydantic import BaseModel, ConfigDict, Field

from faultline.core.errors import ErrorCode, new_business_fail

CODE_OK: Final[str] = "OK"

ORDER_ASC: Final[str] = "ASC"
ORDER_DESC: Final[str] = "DESC"

DEFAULT_PAGE_LIMIT: Final[int] = 10


class GeneralResponse(BaseModel):
    """Envelope shared by every HTTP response.

    ``code`` is ``OK`` on success and a symbolic error code otherwise; callers
    branch on it. ``msg`` is empty on success.
    """

    code: str = Field(description="OK for normal cases and ErrXXX for errors")
    msg: str = Field(default="", description="Human readable message for errors")
    data: Any | None = Field(default=None, description="Optional payload")

    def to_body(self) -> dict[str, Any]:
        body = self.model_dump(mode="json", by_alias=True)
        if body.get("data") is None:
            body.pop("data", None)
        return body


class PagingResponse(GeneralResponse):
    """Envelope for list endpoints."""

    model_config = ConfigDict(populate_by_name=True)

    items: Any | None = Field(default=None, alias="list", description="Result list")
    size: int = Field(default=0, description="Page size used for this response")
    total: int = Field(default=0, description="Total results available")
    page: int = Field(default=1, description="Page number, starting from 1")

    def to_body(self) -> dict[str, Any]:
        body = super().to_body()
        if body.get("list") is None:
            body.pop("list", None)
        return body


@dataclass(frozen=True, slots=True)
class PagingResult:
    """Paging outcome reported by the data layer."""

    offset: int
    limit: int
    total: int

    @property
    def page(self) -> int:
        if self.limit == 0:
            return 1
        return self.offset // self.limit + 1


class PagingParams(BaseModel):
    offset: int = 0
    limit: int = DEFAULT_PAGE_LIMIT
    need_total: bool = False

    def normalized(self) -> "PagingParams":
        """Return a copy with an out-of-range offset/limit replaced by defaults."""
        return self.model_copy(
            update={
                "limit": self.limit if self.limit > 0 else DEFAULT_PAGE_LIMIT,
                "offset": max(self.offset, 0),
            }
        )

    def to_page_num_size(self) -> tuple[int, int]:
        params = self.normalized()
        return params.offset // params.limit + 1, params.limit


class OrderClause(NamedTuple):
    column: str
    descending: bool


class OrderParams(BaseModel):
    order_by: str = Field(default="", description="Column name; empty disables sorting")
    order_direction: str = Field(default="", description="ASC or DESC")

    def to_order_clause(self) -> OrderClause | None:
        """Translate the request into an order clause.

        Raises a BusinessFail ``ErrBadRequest`` error for an unknown direction.
        """
        if not self.order_by or not self.order_direction:
            return None
        direction = self.order_direction.upper()
        if direction not in (ORDER_ASC, ORDER_DESC):
            raise new_business_fail(None, ErrorCode.BAD_REQUEST, "bad order params")
        return OrderClause(column=self.order_by, descending=direction == ORDER_DESC)


@dataclass(frozen=True, slots=True)
class TimeRangeParams:
    start_time: datetime | None = None
    end_time: datetime | None = None

    @classmethod
    def from_timestamps(
        cls, start_timestamp: int | None, end_timestamp: int | None
    ) -> "TimeRangeParams":
        return cls(
            start_time=_from_unix(start_timestamp),
            end_time=_from_unix(end_timestamp),
        )


def _from_unix(value: int | None) -> datetime | None:
    if value is None:
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc)


__all__ = [
    "CODE_OK",
    "GeneralResponse",
    "OrderClause",
    "OrderParams",
    "PagingParams",
    "PagingResponse",
    "PagingResult",
    "TimeRangeParams",
]
