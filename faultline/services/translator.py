"""Render any inbound error as a client-visible HTTP status and envelope."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Final

from fastapi import status

from faultline.core.errors import Category, is_bad_request_code
from faultline.schemas.envelope import GeneralResponse
from faultline.schemas.wire_error import WireError
from faultline.services.codec import WireCodec
from faultline.services.resolution import ErrorResolver, ResolvedError

DEFAULT_GENERIC_MESSAGE: Final[str] = "Internal server error"


@dataclass(frozen=True, slots=True)
class HttpOutcome:
    """HTTP status plus the JSON envelope to write."""

    status_code: int
    body: dict[str, Any] = field(default_factory=dict)
    category: Category = Category.SYSTEM_TEMPORARY


TranslationObserver = Callable[[ResolvedError, HttpOutcome], None]


class ResponseTranslator:
    """Outermost error boundary.

    Business outcomes are not transport failures: BusinessFail and
    BusinessTemporary render as HTTP 200 with the error ``code`` in the
    envelope, except bad-request codes which render as 400. Everything else
    renders as 500 (503 when the peer was unreachable) and hides internal
    detail unless ``debug`` is enabled.
    """

    def __init__(
        self,
        codec: WireCodec,
        logger: logging.Logger | None = None,
        *,
        debug: bool = False,
        module_name: str = "gateway",
        generic_message: str = DEFAULT_GENERIC_MESSAGE,
        observer: TranslationObserver | None = None,
    ) -> None:
        self.codec = codec
        self.resolver = ErrorResolver(codec)
        self.logger = logger or logging.getLogger("faultline.translator")
        self.debug = debug
        self.module_name = module_name
        self.generic_message = generic_message
        self.observer = observer

    def resolve(self, err: BaseException | WireError | None) -> ResolvedError | None:
        return self.resolver.resolve(err, self.module_name)

    def translate(self, err: BaseException | WireError | None) -> HttpOutcome | None:
        resolved = self.resolve(err)
        if resolved is None:
            return None

        outcome = self.render(resolved)
        self._log(resolved, outcome, err)
        if self.observer is not None:
            self.observer(resolved, outcome)
        return outcome

    def render(self, resolved: ResolvedError) -> HttpOutcome:
        wire = resolved.wire
        category = resolved.category

        if category is Category.BUSINESS_FAIL and is_bad_request_code(wire.code):
            return _outcome(
                status.HTTP_400_BAD_REQUEST, wire.code, _business_message(wire), category
            )
        if category.is_business:
            return _outcome(status.HTTP_200_OK, wire.code, _business_message(wire), category)

        status_code = (
            status.HTTP_503_SERVICE_UNAVAILABLE
            if resolved.peer_unreachable
            else status.HTTP_500_INTERNAL_SERVER_ERROR
        )
        message = self.generic_message
        if self.debug and wire.debug_message:
            message = wire.debug_message
        return _outcome(status_code, wire.code, message, category)

    def _log(
        self,
        resolved: ResolvedError,
        outcome: HttpOutcome,
        err: BaseException | WireError | None,
    ) -> None:
        wire = resolved.wire
        extra = {
            "error_code": wire.code,
            "error_category": str(wire.category),
            "error_source": str(resolved.source),
            "error_module": wire.module_name,
            "status_code": outcome.status_code,
        }
        if resolved.category.is_business:
            self.logger.info("business error response", extra=extra)
            return

        exc_info = None
        if resolved.is_foreign and isinstance(err, BaseException):
            exc_info = (type(err), err, err.__traceback__)
        self.logger.error(
            "system error response: %s",
            wire.debug_message or wire.code,
            exc_info=exc_info,
            extra=extra,
        )


def _business_message(wire: WireError) -> str:
    return wire.user_message or wire.debug_message


def _outcome(status_code: int, code: str, message: str, category: Category) -> HttpOutcome:
    body = GeneralResponse(code=code, msg=message).to_body()
    return HttpOutcome(status_code=status_code, body=body, category=category)


__all__ = [
    "DEFAULT_GENERIC_MESSAGE",
    "HttpOutcome",
    "ResponseTranslator",
    "TranslationObserver",
]
