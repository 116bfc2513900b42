"""
Static route table for Stock API.
"""

from typing import List

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from . import handlers
from .models import MutationResponse, Stock

# (method, path, handler, response model)
ROUTES = [
    ("GET", "/api/stock/{stock_id}", handlers.get_stock, Stock),
    ("GET", "/api/stock", handlers.get_all_stocks, List[Stock]),
    ("POST", "/api/newstock", handlers.create_stock, MutationResponse),
    ("PUT", "/api/stock/{stock_id}", handlers.update_stock, MutationResponse),
    ("DELETE", "/api/deletestock/{stock_id}", handlers.delete_stock, MutationResponse),
]


def build_router() -> APIRouter:
    """Build the API router from the static route table."""
    router = APIRouter(redirect_slashes=False)

    for method, path, endpoint, response_model in ROUTES:
        router.add_api_route(
            path,
            endpoint,
            methods=[method],
            response_model=response_model,
            tags=["Stocks"],
        )

    router.add_api_route(
        "/ping",
        handlers.ping,
        methods=["GET"],
        response_class=PlainTextResponse,
        tags=["Health"],
    )

    return router
