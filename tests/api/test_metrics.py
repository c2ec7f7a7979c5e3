from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient
from prometheus_client import REGISTRY

from faultline.core.errors import Category, new_business_fail
from faultline.core.metrics import record_translation
from faultline.main import app
from faultline.services.codec import WireCodec
from faultline.services.translator import ResponseTranslator


def _translated_total(category: str, source: str, status: str) -> float:
    value = REGISTRY.get_sample_value(
        "faultline_errors_translated_total",
        {"category": category, "source": source, "status": status},
    )
    return value or 0.0


@pytest.mark.asyncio
async def test_metrics_endpoint_exposes_request_metrics_with_request_id() -> None:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        request_id = "metrics-test-123"
        await client.get("/health", headers={"X-Request-ID": request_id})
        response = await client.get("/metrics")

    assert response.status_code == 200
    body = response.text
    assert "http_requests_total" in body
    assert 'handler="/health"' in body
    assert f'request_id="{request_id}"' in body


def test_record_translation_counts_by_category_and_status() -> None:
    translator = ResponseTranslator(WireCodec(), observer=record_translation)
    before = _translated_total(str(Category.BUSINESS_FAIL), "local", "200")

    translator.translate(new_business_fail(None, "ErrCardDeclined", "card declined"))
    translator.translate(new_business_fail(None, "ErrCardDeclined", "card declined"))

    assert _translated_total(str(Category.BUSINESS_FAIL), "local", "200") == before + 2


def test_record_translation_counts_foreign_errors() -> None:
    translator = ResponseTranslator(WireCodec(), observer=record_translation)
    before = _translated_total("SystemTemporary", "foreign", "503")

    translator.translate(ConnectionResetError("reset"))

    assert _translated_total("SystemTemporary", "foreign", "503") == before + 1
