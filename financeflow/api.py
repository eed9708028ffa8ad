"""HTTP API exposing transactions and analytics over FastAPI."""

import logging
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from financeflow.domain.transactions import FieldError
from financeflow.errors import InternalError, NotFoundError, ValidationError
from financeflow.services import AnalyticsService, TransactionService
from financeflow.store.base import TransactionStore

logger = logging.getLogger(__name__)

NO_STORE = {"Cache-Control": "no-store"}


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


def _validation_failed(errors: list[FieldError]) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"message": "Validation failed", "errors": [err.to_dict() for err in errors]},
    )


def _internal_error(message: str) -> JSONResponse:
    logger.exception(message)
    return _message(500, message)


def _parse_id(raw: str) -> int | None:
    try:
        return int(raw)
    except ValueError:
        return None


async def _read_body(request: Request) -> Any:
    """Decode the JSON body, or None if it is missing or malformed."""
    try:
        return await request.json()
    except ValueError:
        return None


def create_app(store: TransactionStore, analytics: AnalyticsService | None = None) -> FastAPI:
    """Build the API around an explicit store handle.

    Args:
        store: Record store shared by all routes.
        analytics: Optional analytics service, e.g. with a fixed clock.

    Returns:
        Configured FastAPI application.
    """
    app = FastAPI(title="FinanceFlow", version="0.1.0")
    transactions = TransactionService(store)
    analytics = analytics or AnalyticsService(store)

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return _message(500, "Internal server error")

    @app.get("/transactions")
    def list_transactions() -> Response:
        try:
            return JSONResponse([txn.to_dict() for txn in transactions.list()])
        except InternalError:
            return _internal_error("Failed to fetch transactions")

    @app.get("/transactions/{txn_id}")
    def get_transaction(txn_id: str) -> Response:
        parsed_id = _parse_id(txn_id)
        if parsed_id is None:
            return _message(400, "Invalid transaction ID")

        try:
            txn = transactions.get(parsed_id)
        except InternalError:
            return _internal_error("Failed to fetch transaction")

        if txn is None:
            return _message(404, "Transaction not found")
        return JSONResponse(txn.to_dict())

    @app.post("/transactions")
    async def create_transaction(request: Request) -> Response:
        payload = await _read_body(request)
        try:
            txn = await run_in_threadpool(transactions.create, payload)
        except ValidationError as e:
            return _validation_failed(e.errors)
        except InternalError:
            return _internal_error("Failed to create transaction")
        return JSONResponse(status_code=201, content=txn.to_dict())

    @app.put("/transactions/{txn_id}")
    async def update_transaction(txn_id: str, request: Request) -> Response:
        parsed_id = _parse_id(txn_id)
        if parsed_id is None:
            return _message(400, "Invalid transaction ID")

        payload = await _read_body(request)
        try:
            txn = await run_in_threadpool(transactions.update, parsed_id, payload)
        except ValidationError as e:
            return _validation_failed(e.errors)
        except NotFoundError:
            return _message(404, "Transaction not found")
        except InternalError:
            return _internal_error("Failed to update transaction")
        return JSONResponse(txn.to_dict())

    @app.delete("/transactions/{txn_id}")
    def delete_transaction(txn_id: str) -> Response:
        parsed_id = _parse_id(txn_id)
        if parsed_id is None:
            return _message(400, "Invalid transaction ID")

        try:
            deleted = transactions.delete(parsed_id)
        except InternalError:
            return _internal_error("Failed to delete transaction")

        if not deleted:
            return _message(404, "Transaction not found")
        return Response(status_code=204)

    @app.get("/analytics/categories")
    def category_analytics() -> Response:
        try:
            rows = analytics.category_breakdown()
        except InternalError:
            return _internal_error("Failed to fetch category analytics")
        return JSONResponse([row.to_dict() for row in rows], headers=NO_STORE)

    @app.get("/analytics/monthly-expenses")
    def monthly_expenses() -> Response:
        try:
            rows = analytics.monthly_expense_series()
        except InternalError:
            return _internal_error("Failed to fetch monthly expenses")
        return JSONResponse([row.to_dict() for row in rows], headers=NO_STORE)

    @app.get("/analytics/summary")
    def summary() -> Response:
        try:
            result = analytics.summary()
        except InternalError:
            return _internal_error("Failed to fetch summary data")
        return JSONResponse(result.to_dict(), headers=NO_STORE)

    return app
