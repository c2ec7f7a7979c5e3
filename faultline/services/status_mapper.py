"""Map errors onto transport statuses at RPC boundaries."""

from __future__ import annotations

import functools
import inspect
import logging
from typing import Any, Callable, TypeVar, cast

from faultline.core.errors import Category, is_bad_request_code
from faultline.services.codec import WireCodec
from faultline.services.resolution import ErrorResolver
from faultline.transport.status import StatusCode, TransportStatus

F = TypeVar("F", bound=Callable[..., Any])


def status_code_for(category: Category, code: str) -> StatusCode:
    """Fixed category to transport status table."""
    category = category.resolve()
    if category is Category.BUSINESS_FAIL and is_bad_request_code(code):
        return StatusCode.INVALID_ARGUMENT
    if category.is_business:
        return StatusCode.FAILED_PRECONDITION
    return StatusCode.INTERNAL


class TransportStatusMapper:
    """Turn any error into a transport status carrying the encoded WireError.

    Mapping is idempotent: a status this mapper produced (its message decodes
    as a WireError) is returned unchanged, so intermediate hops that only
    forward an error never double-wrap it.
    """

    def __init__(self, codec: WireCodec, logger: logging.Logger | None = None) -> None:
        self.codec = codec
        self.resolver = ErrorResolver(codec)
        self.logger = logger or logging.getLogger("faultline.rpc")

    def map(self, module_name: str, err: BaseException | None) -> TransportStatus | None:
        if err is None:
            return None

        if isinstance(err, TransportStatus):
            _, ok = self.codec.decode(err.message)
            if ok:
                return err

        resolved = self.resolver.resolve(err, module_name)
        if resolved is None:
            return None

        wire = resolved.wire
        status = TransportStatus(status_code_for(wire.category, wire.code), self.codec.encode(wire))

        extra = {
            "error_code": wire.code,
            "error_category": str(wire.category),
            "error_source": str(resolved.source),
            "error_module": module_name,
            "transport_code": status.code.name,
        }
        if resolved.is_foreign:
            self.logger.warning(
                "unclassified error crossing rpc boundary",
                exc_info=(type(err), err, err.__traceback__),
                extra=extra,
            )
        else:
            self.logger.debug("mapped error to transport status", extra=extra)
        return status

    def boundary(self, module_name: str) -> Callable[[F], F]:
        """Decorate an RPC handler so escaping exceptions leave as transport statuses."""

        def decorator(func: F) -> F:
            if inspect.iscoroutinefunction(func):

                @functools.wraps(func)
                async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                    try:
                        return await func(*args, **kwargs)
                    except Exception as exc:
                        status = self._mapped(module_name, exc)
                        if status is exc:
                            raise
                        raise status from exc

                return cast(F, async_wrapper)

            @functools.wraps(func)
            def wrapper(*args: Any, **kwargs: Any) -> Any:
                try:
                    return func(*args, **kwargs)
                except Exception as exc:
                    status = self._mapped(module_name, exc)
                    if status is exc:
                        raise
                    raise status from exc

            return cast(F, wrapper)

        return decorator

    def _mapped(self, module_name: str, exc: Exception) -> TransportStatus:
        status = self.map(module_name, exc)
        # map() only returns None for a None input
        return cast(TransportStatus, status)


__all__ = ["TransportStatusMapper", "status_code_for"]
