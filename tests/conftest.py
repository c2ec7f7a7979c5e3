from __future__ import annotations

import logging
import os
from typing import Final

import pytest

_TEST_ENV_VARS: Final[dict[str, str]] = {
    "APP_ENV": "test",
    "MODULE_NAME": "gateway",
}

for key, value in _TEST_ENV_VARS.items():
    os.environ.setdefault(key, value)

from faultline.services.codec import WireCodec  # noqa: E402
from faultline.services.status_mapper import TransportStatusMapper  # noqa: E402
from faultline.services.translator import ResponseTranslator  # noqa: E402


@pytest.fixture()
def codec() -> WireCodec:
    return WireCodec()


@pytest.fixture()
def debug_codec() -> WireCodec:
    return WireCodec(include_stack_trace=True)


@pytest.fixture()
def mapper(codec: WireCodec) -> TransportStatusMapper:
    return TransportStatusMapper(codec, logging.getLogger("tests.rpc"))


@pytest.fixture()
def translator(codec: WireCodec) -> ResponseTranslator:
    return ResponseTranslator(codec, logging.getLogger("tests.translator"))


@pytest.fixture()
def debug_translator(codec: WireCodec) -> ResponseTranslator:
    return ResponseTranslator(codec, logging.getLogger("tests.translator"), debug=True)
