"""FastAPI application factory and entrypoint."""

from __future__ import annotations

import logging

from fastapi import FastAPI

from faultline import __version__
from faultline.api.exception_handlers import register_exception_handlers
from faultline.api.responses import ResponseWriter
from faultline.api.routes import root_router
from faultline.core.config import Settings, settings
from faultline.core.logging import configure_logging
from faultline.core.metrics import record_translation, setup_metrics
from faultline.core.middleware import AccessLogMiddleware, RequestIDMiddleware
from faultline.services.codec import WireCodec
from faultline.services.status_mapper import TransportStatusMapper
from faultline.services.translator import ResponseTranslator

configure_logging(settings.log_level)


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build and configure the FastAPI application."""

    config = app_settings or settings

    application = FastAPI(
        title=config.project_name,
        version=__version__,
        docs_url="/docs" if config.debug else None,
        redoc_url="/redoc" if config.debug else None,
    )

    codec = WireCodec(
        include_stack_trace=config.include_stack_trace,
        max_cause_depth=config.max_cause_depth,
    )
    translator = ResponseTranslator(
        codec,
        logging.getLogger("faultline.translator"),
        debug=config.debug,
        module_name=config.module_name,
        generic_message=config.generic_error_message,
        observer=record_translation if config.metrics_enabled else None,
    )
    application.state.translator = translator
    application.state.status_mapper = TransportStatusMapper(
        codec, logging.getLogger("faultline.rpc")
    )
    application.state.response_writer = ResponseWriter(
        translator,
        logging.getLogger("faultline.responses"),
        response_log=config.response_log,
    )

    register_exception_handlers(application, translator)

    if config.metrics_enabled:
        setup_metrics(application)

    application.add_middleware(AccessLogMiddleware)
    application.add_middleware(RequestIDMiddleware)

    application.include_router(root_router)

    return application


app = create_app()

__all__ = ["app", "create_app"]
