"""Conversion between in-process errors and the JSON wire form.

Causes are flattened nearest first: ``causes[0]`` is the error the outermost
value wrapped directly and the last entry is the root cause. A cause that
itself arrived from another process keeps its own nested ``causes``.
"""

from __future__ import annotations

import json
from typing import Final

from pydantic import ValidationError

from faultline.core.errors import Category, ErrorCode, LocalError, StackAnchor
from faultline.schemas.wire_error import RemoteError, WireError
from faultline.transport.status import StatusCode, TransportStatus

DEFAULT_MAX_CAUSE_DEPTH: Final[int] = 20

_STATUS_CODE_ERRORS: Final[dict[StatusCode, ErrorCode]] = {
    StatusCode.CANCELLED: ErrorCode.CANCELLED,
    StatusCode.DEADLINE_EXCEEDED: ErrorCode.DEADLINE_EXCEEDED,
    StatusCode.UNAVAILABLE: ErrorCode.UNAVAILABLE,
}


class WireCodec:
    """Encode and decode structured errors.

    ``include_stack_trace`` is the debug policy for outgoing errors: when it
    is off the stack trace never leaves the process. ``max_cause_depth`` caps
    how deep decoded ``causes`` may nest; deeper levels are dropped.
    """

    def __init__(
        self,
        *,
        include_stack_trace: bool = False,
        max_cause_depth: int = DEFAULT_MAX_CAUSE_DEPTH,
    ) -> None:
        if max_cause_depth < 1:
            raise ValueError("max_cause_depth must be a positive integer.")
        self.include_stack_trace = include_stack_trace
        self.max_cause_depth = max_cause_depth

    def to_wire(self, err: BaseException, module_name: str) -> WireError:
        """Convert any exception into a WireError."""
        if isinstance(err, LocalError):
            return WireError(
                code=err.code,
                module_name=module_name,
                user_message=err.message,
                debug_message=str(err),
                stack_trace=err.stack_trace if self.include_stack_trace else "",
                category=err.category,
                causes=tuple(self._cause_to_wire(cause, module_name) for cause in err.cause_chain()),
            )
        if isinstance(err, RemoteError):
            return err.wire
        if isinstance(err, TransportStatus):
            decoded, ok = self.decode(err.message)
            if ok and decoded is not None:
                return decoded
            return self.opaque_status_to_wire(err, module_name)
        return self.foreign_to_wire(err, module_name)

    def opaque_status_to_wire(self, status: TransportStatus, module_name: str) -> WireError:
        """Wrap a status from a peer that does not speak the wire format."""
        return WireError(
            code=str(_STATUS_CODE_ERRORS.get(status.code, ErrorCode.INTERNAL)),
            module_name=module_name,
            debug_message=status.message or status.code.name,
            category=Category.SYSTEM_TEMPORARY,
        )

    def foreign_to_wire(self, err: BaseException, module_name: str) -> WireError:
        """Wrap an exception outside the taxonomy as SystemTemporary ``ErrInternal``.

        The exception text (or its class name) is the only detail kept, in
        ``debugMessage``; clients never see a transport-specific code for it.
        """
        stack_trace = ""
        if self.include_stack_trace and err.__traceback__ is not None:
            anchor = StackAnchor.from_exception(err)
            stack_trace = anchor.stack_trace if anchor is not None else ""
        return WireError(
            code=str(ErrorCode.INTERNAL),
            module_name=module_name,
            debug_message=str(err) or type(err).__name__,
            stack_trace=stack_trace,
            category=Category.SYSTEM_TEMPORARY,
        )

    def encode(self, wire: WireError) -> str:
        """Serialize to canonical compact JSON with every field present."""
        return wire.model_dump_json(by_alias=True)

    def decode(self, raw: str | bytes | None) -> tuple[WireError | None, bool]:
        """Parse ``raw`` as a WireError; never raises.

        Returns ``(None, False)`` when ``raw`` is not a WireError, in which
        case callers treat the whole string as an opaque debug message.
        """
        if raw is None:
            return None, False
        if isinstance(raw, bytes):
            try:
                raw = raw.decode("utf-8")
            except UnicodeDecodeError:
                return None, False
        try:
            payload = json.loads(raw)
        except (TypeError, ValueError, RecursionError):
            return None, False
        if not isinstance(payload, dict):
            return None, False
        try:
            wire = WireError.model_validate(_prune_causes(payload, self.max_cause_depth))
        except ValidationError:
            return None, False
        return wire, True

    def _cause_to_wire(self, cause: BaseException, module_name: str) -> WireError:
        if isinstance(cause, LocalError):
            return WireError(
                code=cause.code,
                module_name=module_name,
                user_message=cause.message,
                debug_message=str(cause),
                category=cause.category,
            )
        if isinstance(cause, (RemoteError, TransportStatus)):
            return self.to_wire(cause, module_name)
        return WireError(
            code=str(ErrorCode.INTERNAL),
            module_name=module_name,
            debug_message=str(cause) or type(cause).__name__,
            category=Category.SYSTEM_TEMPORARY,
        )


def _prune_causes(payload: dict[str, object], depth: int) -> dict[str, object]:
    causes = payload.get("causes")
    if not isinstance(causes, list):
        return payload
    pruned = dict(payload)
    if depth <= 0:
        pruned["causes"] = []
        return pruned
    pruned["causes"] = [
        _prune_causes(cause, depth - 1) if isinstance(cause, dict) else cause for cause in causes
    ]
    return pruned


__all__ = ["DEFAULT_MAX_CAUSE_DEPTH", "WireCodec"]
