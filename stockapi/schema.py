"""
Table definition for the stocks table.
"""

from loguru import logger
from sqlalchemy import Column, Engine, Integer, MetaData, Numeric, Table, Text

metadata = MetaData()

stocks = Table(
    "stocks",
    metadata,
    Column("stockid", Integer, primary_key=True, autoincrement=True),
    Column("name", Text, nullable=False),
    Column("price", Numeric, nullable=False),
    Column("company", Text, nullable=False),
)


def create_schema(engine: Engine) -> None:
    """Create the stocks table if it does not exist yet."""
    metadata.create_all(engine, checkfirst=True)
    logger.info(f"Ensured table '{stocks.name}' exists on {engine.url.render_as_string(hide_password=True)}")
