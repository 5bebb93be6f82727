"""
Uniform JSON error bodies.

Every failure leaves the API as ``ErrorResponse``: a machine-readable
``error_code``, the message, a recovery ``hint``, the exception's structured
``details`` and the request ``path``. Domain exceptions pick their status
from ``STATUS_BY_TYPE``; anything unexpected becomes a 500.
"""

import traceback
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from src.application.dto.responses import ErrorResponse
from src.config import get_logger
from src.core.exceptions import (
    CategoryError,
    ConfigurationError,
    DocumentNumberTakenError,
    ExchangeRateFetchError,
    GoPartsError,
    NotFoundError,
    QuoteError,
    StorageError,
    ValidationError,
)

logger = get_logger(__name__)

# Checked in order; StorageError subclasses must precede StorageError.
STATUS_BY_TYPE: tuple[tuple[type[Exception], int], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (CategoryError, status.HTTP_409_CONFLICT),
    (QuoteError, status.HTTP_409_CONFLICT),
    (DocumentNumberTakenError, status.HTTP_409_CONFLICT),
    (ExchangeRateFetchError, status.HTTP_502_BAD_GATEWAY),
    (StorageError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (ConfigurationError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (ValueError, status.HTTP_400_BAD_REQUEST),
)

HINTS: dict[str, str] = {
    "CATEGORY_NOT_FOUND": "Check the category ID; GET /api/categories lists them.",
    "PART_NOT_FOUND": "Check the part ID; GET /api/parts searches the catalog.",
    "CUSTOMER_NOT_FOUND": "Check the customer ID; GET /api/customers lists them.",
    "SUPPLIER_NOT_FOUND": "Check the supplier ID; GET /api/suppliers lists them.",
    "QUOTE_NOT_FOUND": "Check the quote ID; GET /api/quotes lists them.",
    "ORDER_NOT_FOUND": "Check the order ID; GET /api/orders lists them.",
    "EXCHANGE_RATE_NOT_FOUND": "No rate stored yet. Run POST /api/exchange-rates/refresh first.",
    "DUPLICATE_CATEGORY": "Choose a different category name.",
    "CATEGORY_IN_USE": "Merge the category into another one or reassign its parts first.",
    "CATEGORY_REORDER_FAILED": "Reload categories; details.current_order holds the stored order.",
    "QUOTE_ALREADY_CONVERTED": "Converted quotes are read-only. Work on the linked order instead.",
    "INVALID_QUOTE_TRANSITION": (
        "Use one of: draft, sent, accepted, rejected, expired, converted_to_order."
    ),
    "DATABASE_ERROR": "A database operation failed. Check server logs.",
    "DOCUMENT_NUMBER_TAKEN": "Number generation collided repeatedly. Resend the request.",
    "EXCHANGE_RATE_FETCH_FAILED": "Rate providers are unreachable. Retry later.",
    "VALIDATION_ERROR": "Correct the field named in details and resend.",
}

FALLBACK_HINTS: dict[int, str] = {
    400: "Check the request parameters and body.",
    404: "The requested resource was not found.",
    409: "The request conflicts with the current state of the resource.",
    422: "Check the request body fields and types.",
    500: "An internal error occurred. Check server logs.",
    502: "An upstream service failed. Retry later.",
}

_HTTP_ERROR_CODES = {
    400: "BAD_REQUEST",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    422: "UNPROCESSABLE_ENTITY",
}


def status_for(exc: Exception) -> int:
    return next(
        (code for exc_type, code in STATUS_BY_TYPE if isinstance(exc, exc_type)),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def _hint(error_code: str, status_code: int) -> str:
    return HINTS.get(error_code) or FALLBACK_HINTS.get(status_code, "")


def _json(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def error_response(request: Request, exc: Exception) -> JSONResponse:
    """Build the error body for exc and log it (with a traceback for 5xx)."""
    status_code = status_for(exc)
    if isinstance(exc, GoPartsError):
        error_code, message, details = exc.to_dict().values()
    else:
        error_code, message, details = type(exc).__name__, str(exc), {}

    server_side = status_code >= 500
    (logger.error if server_side else logger.warning)(
        "request_error",
        path=request.url.path,
        status=status_code,
        error_code=error_code,
        error=message,
        traceback=traceback.format_exc() if server_side else None,
    )
    return _json(
        status_code,
        ErrorResponse(
            error_code=error_code,
            message=message,
            hint=_hint(error_code, status_code),
            details=details,
            path=request.url.path,
        ),
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Last-resort conversion for exceptions no handler claimed."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            return error_response(request, e)


async def _domain_error(request: Request, exc: Exception) -> JSONResponse:
    return error_response(request, exc)


async def _request_validation_error(request: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, RequestValidationError)
    problems = [
        f"{'.'.join(str(p) for p in error['loc'])}: {error['msg']}" for error in exc.errors()
    ]
    return _json(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        ErrorResponse(
            error_code="VALIDATION_ERROR",
            message="Request validation failed",
            hint=FALLBACK_HINTS[422],
            detail="; ".join(problems),
            path=request.url.path,
        ),
    )


async def _http_error(request: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, HTTPException)
    error_code = _HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR")
    return _json(
        exc.status_code,
        ErrorResponse(
            error_code=error_code,
            message=str(exc.detail or "An error occurred"),
            hint=_hint(error_code, exc.status_code),
            path=request.url.path,
        ),
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register the domain, request-validation and HTTP error handlers on app."""
    app.add_exception_handler(GoPartsError, _domain_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(HTTPException, _http_error)
