"""Generic ``(code, message)`` status carried by RPC transports."""

from __future__ import annotations

from enum import IntEnum


class StatusCode(IntEnum):
    """Transport status codes, numerically compatible with gRPC."""

    OK = 0
    CANCELLED = 1
    UNKNOWN = 2
    INVALID_ARGUMENT = 3
    DEADLINE_EXCEEDED = 4
    NOT_FOUND = 5
    ALREADY_EXISTS = 6
    PERMISSION_DENIED = 7
    RESOURCE_EXHAUSTED = 8
    FAILED_PRECONDITION = 9
    ABORTED = 10
    OUT_OF_RANGE = 11
    UNIMPLEMENTED = 12
    INTERNAL = 13
    UNAVAILABLE = 14
    DATA_LOSS = 15
    UNAUTHENTICATED = 16


class TransportStatus(Exception):
    """Error status as seen by the RPC layer: an opaque code and a message string."""

    def __init__(self, code: StatusCode | int, message: str = "") -> None:
        super().__init__(int(code), message)
        self._code = StatusCode(code)
        self._message = message

    @property
    def code(self) -> StatusCode:
        return self._code

    @property
    def message(self) -> str:
        return self._message

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TransportStatus):
            return NotImplemented
        return self._code == other._code and self._message == other._message

    def __hash__(self) -> int:
        return hash((self._code, self._message))

    def __str__(self) -> str:
        return f"rpc error: code = {self._code.name} desc = {self._message}"

    def __repr__(self) -> str:
        return f"TransportStatus(code={self._code.name}, message={self._message!r})"


__all__ = ["StatusCode", "TransportStatus"]
