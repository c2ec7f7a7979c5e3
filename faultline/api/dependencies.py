"""FastAPI dependencies exposing the error pipeline wired by ``create_app``."""

from __future__ import annotations

from fastapi import Request

from faultline.api.responses import ResponseWriter
from faultline.services.status_mapper import TransportStatusMapper
from faultline.services.translator import ResponseTranslator


def get_translator(request: Request) -> ResponseTranslator:
    return request.app.state.translator  # type: ignore[no-any-return]


def get_response_writer(request: Request) -> ResponseWriter:
    return request.app.state.response_writer  # type: ignore[no-any-return]


def get_status_mapper(request: Request) -> TransportStatusMapper:
    return request.app.state.status_mapper  # type: ignore[no-any-return]


__all__ = ["get_response_writer", "get_status_mapper", "get_translator"]
