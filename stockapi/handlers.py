"""
Request handlers for the stock REST operations.

Each handler decodes its input (FastAPI validates path and body against the
models), calls one StockDB operation and returns the response body. Errors
propagate as StockAPIError subclasses and are rendered by the app's
exception handlers.
"""

from typing import List

from fastapi import Depends, Request

from .db_client import StockDB
from .errors import NotFoundError
from .models import MutationResponse, Stock, StockCreate, StockId, StockUpdate


def get_db(request: Request) -> StockDB:
    """Dependency to provide the database client bound to the app."""
    return request.app.state.db


def create_stock(stock: StockCreate, db: StockDB = Depends(get_db)) -> MutationResponse:
    """Create a new stock."""
    stock_id = db.create(stock)
    return MutationResponse(id=stock_id, message="stock created successfully")


def get_stock(stock_id: StockId, db: StockDB = Depends(get_db)) -> Stock:
    """Get a single stock by id."""
    return db.read_one(stock_id)


def get_all_stocks(db: StockDB = Depends(get_db)) -> List[Stock]:
    """Get every stock."""
    return db.read_all()


def update_stock(stock_id: StockId, stock: StockUpdate,
                 db: StockDB = Depends(get_db)) -> MutationResponse:
    """Apply a partial update to an existing stock."""
    updated_rows = db.update(stock_id, stock)
    if updated_rows == 0:
        raise NotFoundError(f"Stock {stock_id} not found")

    return MutationResponse(
        id=stock_id,
        message=f"Stock updated successfully. Total rows/records affected {updated_rows}"
    )


def delete_stock(stock_id: StockId, db: StockDB = Depends(get_db)) -> MutationResponse:
    """Delete a stock. Deleting a missing id succeeds with zero rows affected."""
    deleted_rows = db.delete(stock_id)
    return MutationResponse(
        id=stock_id,
        message=f"Stock deleted successfully. Total rows/records {deleted_rows}"
    )


def ping() -> str:
    """Liveness check. Does not touch the database."""
    return "pong"
