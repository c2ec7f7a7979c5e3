"""Envelope writer used by route handlers."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import status
from fastapi.responses import JSONResponse

from faultline.api.exception_handlers import BAD_REQUEST_MESSAGE, translated_response
from faultline.core.errors import ErrorCode
from faultline.schemas.envelope import CODE_OK, GeneralResponse, PagingResponse, PagingResult
from faultline.services.translator import ResponseTranslator


class ResponseWriter:
    """Write ``{code, msg, data}`` envelopes.

    ``respond`` is the raw ``(status, body)`` writer; the helpers build on it.
    The error helpers return ``None`` when given no error so handlers can write
    ``if (resp := writer.error(err)) is not None: return resp``.
    """

    def __init__(
        self,
        translator: ResponseTranslator,
        logger: logging.Logger | None = None,
        *,
        response_log: bool = False,
    ) -> None:
        self.translator = translator
        self.logger = logger or logging.getLogger("faultline.responses")
        self.response_log = response_log

    def respond(self, status_code: int, code: str, msg: str, data: Any = None) -> JSONResponse:
        body = GeneralResponse(code=code, msg=msg, data=data).to_body()
        return self._write(status_code, body)

    def ok(self, data: Any = None) -> JSONResponse:
        return self.respond(status.HTTP_200_OK, CODE_OK, "", data)

    def paging(self, result: PagingResult, data: Any, items: Any) -> JSONResponse:
        body = PagingResponse(
            code=CODE_OK,
            data=data,
            items=items,
            size=result.limit,
            total=result.total,
            page=result.page,
        ).to_body()
        return self._write(status.HTTP_200_OK, body)

    def error(self, err: BaseException | None) -> JSONResponse | None:
        if err is None:
            return None
        return translated_response(self.translator, err)

    def bad_request(self, err: BaseException | None, user_message: str = "") -> JSONResponse | None:
        if err is None:
            return None
        self.logger.debug("bad request", extra={"error": str(err)})
        if user_message:
            message = user_message
        elif self.translator.debug:
            message = str(err)
        else:
            message = BAD_REQUEST_MESSAGE
        return self.respond(status.HTTP_400_BAD_REQUEST, ErrorCode.BAD_REQUEST, message)

    def internal_error(self, err: BaseException | None) -> JSONResponse | None:
        if err is None:
            return None
        self.logger.error(
            "internal error",
            exc_info=(type(err), err, err.__traceback__),
        )
        message = str(err) if self.translator.debug else self.translator.generic_message
        return self.respond(status.HTTP_500_INTERNAL_SERVER_ERROR, ErrorCode.INTERNAL, message)

    def require_param(self, name: str, value: str | None) -> JSONResponse | None:
        """Return a 400 response when a query/path parameter is empty."""
        if value:
            return None
        return self.respond(
            status.HTTP_400_BAD_REQUEST, ErrorCode.BAD_REQUEST, f"param missing: {name}"
        )

    def require_field(self, name: str, value: str | None) -> JSONResponse | None:
        """Return a 400 response when a body field is empty."""
        if value:
            return None
        return self.respond(
            status.HTTP_400_BAD_REQUEST, ErrorCode.BAD_REQUEST, f"body field missing: {name}"
        )

    def _write(self, status_code: int, body: dict[str, Any]) -> JSONResponse:
        if self.response_log:
            self.logger.info(
                "resp",
                extra={"status_code": status_code, "response_code": body.get("code")},
            )
        return JSONResponse(status_code=status_code, content=body)


__all__ = ["ResponseWriter"]
