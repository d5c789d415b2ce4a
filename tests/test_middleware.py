import json
import asyncio

import pytest
from starlette.requests import Request
from starlette.responses import JSONResponse

from customer_service.api.middleware import REQUEST_ID_HEADER, request_context
from customer_service.core.config import settings


def make_request(headers=None) -> Request:
    raw_headers = [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()]
    return Request({
        "type": "http",
        "method": "GET",
        "path": "/v1/customers",
        "headers": raw_headers,
        "query_string": b"",
    })


@pytest.mark.asyncio
async def test_request_deadline_returns_504(monkeypatch):
    monkeypatch.setattr(settings, "request_timeout_seconds", 0.05)

    async def slow_handler(request):
        await asyncio.sleep(1)
        return JSONResponse({"status": "late"})

    response = await request_context(make_request({REQUEST_ID_HEADER: "req-slow"}), slow_handler)

    assert response.status_code == 504
    assert json.loads(response.body) == {"error": "request timed out", "kind": "timeout", "field": None}
    assert response.headers[REQUEST_ID_HEADER] == "req-slow"


@pytest.mark.asyncio
async def test_fast_request_passes_through():
    async def handler(request):
        return JSONResponse({"status": "ok"})

    response = await request_context(make_request(), handler)

    assert response.status_code == 200
    assert response.headers[REQUEST_ID_HEADER]


@pytest.mark.asyncio
async def test_unhandled_error_becomes_500_with_request_id():
    async def broken_handler(request):
        raise RuntimeError("boom")

    response = await request_context(make_request({REQUEST_ID_HEADER: "req-500"}), broken_handler)

    assert response.status_code == 500
    assert json.loads(response.body)["kind"] == "internal"
    assert response.headers[REQUEST_ID_HEADER] == "req-500"
