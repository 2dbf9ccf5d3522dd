"""FastAPI entrypoint for the product transactions HTTP endpoints."""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Any

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.requests import Request
from fastapi.responses import JSONResponse

from shared import config as _config
from backend.clients.dataset_client import UpstreamFetchError
from backend.factory import build_transaction_service
from backend.services.transaction_service import DEFAULT_PAGE, DEFAULT_PER_PAGE, TransactionService
from shared.models import ErrorResponse


logger = logging.getLogger(__name__)


_LEADING_INTEGER_PATTERN = re.compile(r"^\s*([+-]?\d+)")
_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {500: {"model": ErrorResponse}}


@lru_cache(maxsize=1)
def get_transaction_service() -> TransactionService:
    """Create and cache the transaction service once per process.

    The service holds no data; the dataset is fetched again for every request.
    """

    return build_transaction_service()


def _parse_positive_int(value: str | None, default: int) -> int:
    """Parse the leading integer of a query value; missing, invalid or non-positive values use the default."""

    if value is None:
        return default
    match = _LEADING_INTEGER_PATTERN.match(value)
    if match is None:
        return default
    parsed = int(match.group(1))
    return parsed if parsed > 0 else default


def _error_response(message: str) -> JSONResponse:
    return JSONResponse(status_code=500, content=ErrorResponse(message=message).model_dump())


app = FastAPI(title="Product Transactions API")

ALLOW_ORIGINS = _config.cors_allow_origins()


@app.middleware("http")
async def log_http_requests(request: Request, call_next):
    """Log incoming requests, HTTP status codes and unexpected errors."""

    logger.info("http_request_received method=%s path=%s", request.method, request.url.path)
    try:
        response = await call_next(request)
    except Exception:
        logger.exception(
            "http_request_failed method=%s path=%s",
            request.method,
            request.url.path,
        )
        raise

    logger.info(
        "http_response_sent method=%s path=%s status_code=%s",
        request.method,
        request.url.path,
        response.status_code,
    )
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOW_ORIGINS,
    allow_methods=["GET"],
    allow_headers=["*"],
)

logger.info("cors_allow_origins=%s", ALLOW_ORIGINS)


@app.exception_handler(Exception)
async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
    """Return a JSON 500 response for unhandled exceptions."""

    logger.exception(
        "unhandled_exception method=%s path=%s exception_type=%s message=%s",
        request.method,
        request.url.path,
        type(exc).__name__,
        str(exc),
        exc_info=exc,
    )
    return _error_response("Internal Server Error")


@app.get("/health")
def health() -> dict[str, str]:
    """Healthcheck endpoint."""

    return {"status": "ok"}


@app.get("/api/transactions", responses=_ERROR_RESPONSES)
def list_transactions(
    search: str | None = None,
    page: str | None = None,
    per_page: str | None = Query(default=None, alias="perPage"),
) -> Any:
    """Return one page of transactions matching the search text."""

    page_number = _parse_positive_int(page, DEFAULT_PAGE)
    page_size = _parse_positive_int(per_page, DEFAULT_PER_PAGE)
    try:
        result = get_transaction_service().list_transactions(
            search=search or "",
            page=page_number,
            per_page=page_size,
        )
    except UpstreamFetchError:
        logger.exception("transactions_fetch_failed page=%s per_page=%s", page_number, page_size)
        return _error_response("Error fetching transactions")

    return {
        "transactions": [item.model_dump(mode="json", by_alias=True) for item in result.items],
        "total": result.total,
        "page": result.page,
        "perPage": result.per_page,
    }


@app.get("/api/transaction-stats", responses=_ERROR_RESPONSES)
def transaction_stats(month: str | None = None) -> Any:
    """Return the per price range histogram of a month."""

    try:
        buckets = get_transaction_service().price_range_stats(month)
    except UpstreamFetchError:
        logger.exception("transaction_stats_fetch_failed month=%s", month)
        return _error_response("Error fetching transaction stats")

    return {"data": [bucket.model_dump() for bucket in buckets]}


@app.get("/api/transaction-summary", responses=_ERROR_RESPONSES)
def transaction_summary(month: str | None = None) -> Any:
    """Return total sales and sold / not sold counts of a month."""

    try:
        summary = get_transaction_service().monthly_summary(month)
    except UpstreamFetchError:
        logger.exception("transaction_summary_fetch_failed month=%s", month)
        return _error_response("Error fetching transaction summary")

    return summary.model_dump(by_alias=True)


@app.get("/api/category-count", responses=_ERROR_RESPONSES)
def category_count(month: str | None = None) -> Any:
    """Return the number of transactions per category for a month."""

    try:
        counts = get_transaction_service().category_counts(month)
    except UpstreamFetchError:
        logger.exception("category_count_fetch_failed month=%s", month)
        return _error_response("Error fetching category counts")

    return [row.model_dump() for row in counts]
