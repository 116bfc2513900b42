"""
Pydantic models for request and response bodies.
"""

import re
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

INT64_MIN = -2**63
INT64_MAX = 2**63 - 1

_STOCK_ID_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_stock_id(value):
    """Accept only plain base-10 integers that fit a 64-bit column."""
    if isinstance(value, str):
        if not _STOCK_ID_PATTERN.fullmatch(value):
            raise ValueError("id must be an integer")
        value = int(value)
    elif isinstance(value, bool) or not isinstance(value, int):
        raise ValueError("id must be an integer")

    if not INT64_MIN <= value <= INT64_MAX:
        raise ValueError("id is out of range")
    return value


StockId = Annotated[int, BeforeValidator(parse_stock_id)]


class StockCreate(BaseModel):
    """
    Request body for creating a stock.

    Omitted fields are stored as their zero value. Any id sent by the client
    is ignored.
    """
    name: str = ""
    price: float = 0
    company: str = ""


class StockUpdate(BaseModel):
    """
    Request body for a partial update.

    Fields left at their zero value ("" or 0) keep the stored value, so an
    explicit update to an empty name or a zero price is not possible.
    """
    name: str = ""
    price: float = 0
    company: str = ""


class Stock(BaseModel):
    """A persisted stock row."""
    model_config = ConfigDict(populate_by_name=True)

    stock_id: int = Field(alias="stockid")
    name: str
    price: float
    company: str


class MutationResponse(BaseModel):
    """Response for create, update and delete operations."""
    id: int
    message: str
