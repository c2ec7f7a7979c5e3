"""FastAPI exception handlers routing every error through the translator."""

from __future__ import annotations

from http import HTTPStatus
from typing import Awaitable, Callable, Sequence, cast

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from faultline.core.errors import ErrorCode, LocalError, new_business_fail
from faultline.core.middleware import ERROR_CATEGORY_HEADER
from faultline.schemas.envelope import GeneralResponse
from faultline.schemas.wire_error import RemoteError
from faultline.services.translator import ResponseTranslator
from faultline.transport.status import TransportStatus

ExceptionHandlerCallable = Callable[[Request, Exception], Awaitable[Response]]

BAD_REQUEST_MESSAGE = "Bad request. Check your input."


def register_exception_handlers(app: FastAPI, translator: ResponseTranslator) -> None:
    """Attach global exception handlers to the FastAPI app."""

    async def translated_error_handler(request: Request, exc: Exception) -> JSONResponse:
        return translated_response(translator, exc)

    async def request_validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        message = BAD_REQUEST_MESSAGE
        if translator.debug:
            message = _format_validation_errors(exc) or BAD_REQUEST_MESSAGE
        return translated_response(
            translator,
            new_business_fail(exc, ErrorCode.BAD_REQUEST, message),
        )

    for exc_class in (LocalError, TransportStatus, RemoteError, Exception):
        app.add_exception_handler(exc_class, translated_error_handler)
    app.add_exception_handler(
        RequestValidationError,
        cast(ExceptionHandlerCallable, request_validation_exception_handler),
    )
    app.add_exception_handler(
        StarletteHTTPException,
        cast(ExceptionHandlerCallable, http_exception_handler),
    )


def translated_response(translator: ResponseTranslator, exc: BaseException) -> JSONResponse:
    outcome = translator.translate(exc)
    if outcome is None:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=GeneralResponse(
                code=ErrorCode.INTERNAL, msg=translator.generic_message
            ).to_body(),
        )
    return JSONResponse(
        status_code=outcome.status_code,
        content=outcome.body,
        headers={ERROR_CATEGORY_HEADER: str(outcome.category)},
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    message = str(exc.detail or HTTPStatus(exc.status_code).phrase)
    body = GeneralResponse(code=_default_code_for_status(exc.status_code), msg=message)
    return JSONResponse(
        status_code=exc.status_code,
        content=body.to_body(),
        headers=exc.headers,
    )


def _format_validation_errors(exc: RequestValidationError) -> str:
    formatted: list[str] = []
    for error in exc.errors():
        field = _format_error_location(error.get("loc") or ())
        formatted.append(f"{field}: {error.get('msg', 'Invalid value')}")
    return "; ".join(formatted)


def _format_error_location(location: Sequence[object]) -> str:
    filtered = [str(part) for part in location if part not in {"body", "query", "path"}]
    if not filtered:
        filtered = [str(part) for part in location]
    return ".".join(filtered) if filtered else "_schema"


def _default_code_for_status(status_code: int) -> str:
    mapping: dict[int, ErrorCode] = {
        status.HTTP_400_BAD_REQUEST: ErrorCode.BAD_REQUEST,
        status.HTTP_404_NOT_FOUND: ErrorCode.NOT_FOUND,
        status.HTTP_503_SERVICE_UNAVAILABLE: ErrorCode.UNAVAILABLE,
    }
    return str(mapping.get(status_code, ErrorCode.INTERNAL))


__all__ = [
    "BAD_REQUEST_MESSAGE",
    "http_exception_handler",
    "register_exception_handlers",
    "translated_response",
]
