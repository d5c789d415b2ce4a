import time
import uuid
import asyncio

from fastapi import Request, status
from fastapi.responses import JSONResponse
from loguru import logger

from customer_service.api.errors import error_body
from customer_service.core.config import settings

REQUEST_ID_HEADER = "X-Request-ID"


async def request_context(request: Request, call_next):
    """Bind a request id to every log line and enforce the request deadline"""
    request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
    with logger.contextualize(request_id=request_id):
        logger.info(f"Request started: {request.method} {request.url.path}")
        start = time.perf_counter()
        try:
            response = await asyncio.wait_for(call_next(request), timeout=settings.request_timeout_seconds)
        except asyncio.TimeoutError:
            logger.error(f"Request timed out after {settings.request_timeout_seconds}s")
            response = JSONResponse(
                status_code=status.HTTP_504_GATEWAY_TIMEOUT,
                content=error_body("request timed out", "timeout"),
            )
        except Exception:
            logger.exception(f"Request failed: {request.method} {request.url.path}")
            response = JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=error_body("internal error", "internal"),
            )
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"Request completed: {request.method} {request.url.path} "
            f"status={response.status_code} duration={duration_ms:.1f}ms"
        )
    response.headers[REQUEST_ID_HEADER] = request_id
    return response
