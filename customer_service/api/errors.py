from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from customer_service.core.errors import CustomerServiceError, ErrorKind, ValidationFailed

STATUS_BY_KIND = {
    ErrorKind.INVALID_ARGUMENT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    ErrorKind.PRECONDITION_FAILED: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.VERIFICATION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.STORAGE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def error_body(message: str, kind: str, field: str | None = None) -> dict:
    return {"error": message, "kind": kind, "field": field}


async def customer_service_error_handler(request: Request, exc: CustomerServiceError) -> JSONResponse:
    status_code = STATUS_BY_KIND[exc.kind]
    field = exc.field if isinstance(exc, ValidationFailed) else None
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected ({exc.kind.value}): {exc.message}")
    return JSONResponse(status_code=status_code, content=error_body(exc.message, exc.kind.value, field))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed JSON, wrong body shape or unparsable query values"""
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = [part for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    field = str(loc[-1]) if loc else None
    if first.get("type") == "json_invalid":
        message, field = "invalid JSON body", None
    else:
        message = f"invalid {field or 'request'}: {first.get('msg', 'malformed input')}"
    logger.warning(f"{request.method} {request.url.path} rejected (invalid_argument): {message}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(message, ErrorKind.INVALID_ARGUMENT.value, field),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.opt(exception=exc).error(f"{request.method} {request.url.path} internal failure")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("internal error", "internal"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CustomerServiceError, customer_service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
