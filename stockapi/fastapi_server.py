"""
FastAPI application for Stock API.

Builds the app around an explicitly constructed StockDB and maps errors to
HTTP responses.
"""

import time

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .db_client import StockDB
from .errors import StockAPIError, ValidationError
from .router import build_router


async def stock_api_error_handler(request: Request, exc: StockAPIError) -> JSONResponse:
    """Render a StockAPIError with its status code."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def request_validation_error_handler(request: Request,
                                           exc: RequestValidationError) -> JSONResponse:
    """Malformed ids and bodies are client errors (400), not 422."""
    problems = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    )
    logger.debug(f"Rejected {request.method} {request.url.path}: {problems}")
    return await stock_api_error_handler(request, ValidationError(f"Invalid request: {problems}"))


async def route_not_found_handler(request: Request, exc: StarletteHTTPException):
    """Unmatched paths get a fixed plain-text body; other HTTP errors keep the default."""
    if exc.status_code == 404:
        return PlainTextResponse("Route not found", status_code=404)
    return await http_exception_handler(request, exc)


def create_app(db: StockDB) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        db: Database client shared by all requests

    Returns:
        FastAPI: Configured application
    """
    app = FastAPI(
        title="Stock API",
        description="REST API for creating, reading, updating and deleting stocks",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        redirect_slashes=False
    )
    app.state.db = db

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.debug(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)")
        return response

    app.add_exception_handler(StockAPIError, stock_api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, route_not_found_handler)

    app.include_router(build_router())

    return app
