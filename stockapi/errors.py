"""
Error taxonomy for Stock API.

Every error carries the HTTP status code the API layer responds with.
"""


class StockAPIError(Exception):
    """Base class for errors surfaced to API clients."""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(StockAPIError):
    """Malformed input: non-integer id or undecodable body."""
    status_code = 400


class NotFoundError(StockAPIError):
    """No stock row matches the requested id."""
    status_code = 404


class PersistenceError(StockAPIError):
    """Any database-layer failure (connectivity, constraint, query)."""
    status_code = 500
