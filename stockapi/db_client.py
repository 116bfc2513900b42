"""
Database client for Stock API.

Provides SQLAlchemy-based access to the stocks table. Every operation issues a
single parameterized statement against the shared engine, and database
failures are raised as PersistenceError so they stay confined to the request
that triggered them.
"""

from typing import List, Optional

from loguru import logger
from sqlalchemy import create_engine, text, Engine
from sqlalchemy.exc import SQLAlchemyError

from .config import get_settings
from .errors import NotFoundError, PersistenceError
from .models import Stock, StockCreate, StockUpdate


class StockDB:
    """
    Stock API database client.

    Owns the connection pool (a SQLAlchemy engine) and implements the CRUD
    operations on the stocks table.
    """

    def __init__(self, dsn: Optional[str] = None, engine: Optional[Engine] = None):
        """
        Initialize database client.

        Args:
            dsn: Database connection string. If None, uses settings from config.
            engine: Pre-built engine to use instead of creating one from dsn.
        """
        if engine is None:
            settings = get_settings()
            if dsn is None:
                dsn = settings.postgres_url
            engine = create_engine(
                dsn,
                echo=settings.echo_sql,
                pool_size=settings.pool_size,
                pool_pre_ping=settings.pool_pre_ping,
            )

        self.engine: Engine = engine

        logger.debug(f"Initialized StockDB with engine: {self.engine.url.render_as_string(hide_password=True)}")

    @staticmethod
    def _row_to_stock(row) -> Stock:
        # NULLs from tables created outside create_schema read as zero values
        return Stock(
            stock_id=row[0],
            name=row[1] if row[1] is not None else "",
            price=float(row[2]) if row[2] is not None else 0.0,
            company=row[3] if row[3] is not None else "",
        )

    def ping(self) -> None:
        """
        Verify the database is reachable.

        Raises:
            PersistenceError: If a connection cannot be opened or used
        """
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1")).fetchone()
        except SQLAlchemyError as e:
            logger.error(f"Database unreachable: {e}")
            raise PersistenceError("Database unreachable") from e

    def create(self, stock: StockCreate) -> int:
        """
        Insert a new stock and return its generated id.

        Args:
            stock: Name, price and company of the new stock

        Returns:
            int: The server-assigned stockid
        """
        query = """
            INSERT INTO stocks (name, price, company)
            VALUES (:name, :price, :company)
            RETURNING stockid
        """

        try:
            with self.engine.begin() as conn:
                result = conn.execute(text(query), {
                    'name': stock.name,
                    'price': stock.price,
                    'company': stock.company
                })
                stock_id = result.scalar_one()

            logger.info(f"Inserted a single record {stock_id}")
            return stock_id

        except SQLAlchemyError as e:
            logger.error(f"Unable to insert stock: {e}")
            raise PersistenceError("Unable to create stock") from e

    def read_one(self, stock_id: int) -> Stock:
        """
        Fetch a single stock by id.

        Args:
            stock_id: Stock identifier

        Returns:
            Stock: The matching stock

        Raises:
            NotFoundError: If no row has this id
        """
        query = """
            SELECT stockid, name, price, company
            FROM stocks
            WHERE stockid = :stockid
        """

        try:
            with self.engine.connect() as conn:
                row = conn.execute(text(query), {'stockid': stock_id}).fetchone()

        except SQLAlchemyError as e:
            logger.error(f"Unable to get stock {stock_id}: {e}")
            raise PersistenceError(f"Unable to get stock {stock_id}") from e

        if row is None:
            raise NotFoundError(f"Stock {stock_id} not found")

        return self._row_to_stock(row)

    def read_all(self) -> List[Stock]:
        """
        Fetch every stock in the table.

        Returns:
            List[Stock]: All stocks, in storage order (possibly empty)
        """
        query = "SELECT stockid, name, price, company FROM stocks"

        try:
            with self.engine.connect() as conn:
                rows = conn.execute(text(query)).fetchall()

            logger.debug(f"Retrieved {len(rows)} stocks")
            return [self._row_to_stock(row) for row in rows]

        except SQLAlchemyError as e:
            logger.error(f"Unable to get all stocks: {e}")
            raise PersistenceError("Unable to get all stocks") from e

    def update(self, stock_id: int, stock: StockUpdate) -> int:
        """
        Merge a partial update into an existing stock.

        Fields holding their zero value ("" or 0) keep the stored value.

        Args:
            stock_id: Stock identifier
            stock: Incoming field values

        Returns:
            int: Number of rows affected (0 if the id does not exist)
        """
        query = """
            UPDATE stocks
            SET name = COALESCE(NULLIF(:name, ''), name),
                price = COALESCE(NULLIF(:price, 0), price),
                company = COALESCE(NULLIF(:company, ''), company)
            WHERE stockid = :stockid
        """

        try:
            with self.engine.begin() as conn:
                result = conn.execute(text(query), {
                    'stockid': stock_id,
                    'name': stock.name,
                    'price': stock.price,
                    'company': stock.company
                })
                rows_affected = result.rowcount

            logger.info(f"Total rows/records affected {rows_affected}")
            return rows_affected

        except SQLAlchemyError as e:
            logger.error(f"Unable to update stock {stock_id}: {e}")
            raise PersistenceError(f"Unable to update stock {stock_id}") from e

    def delete(self, stock_id: int) -> int:
        """
        Delete a stock by id.

        Args:
            stock_id: Stock identifier

        Returns:
            int: Number of rows affected (0 if the id does not exist)
        """
        query = "DELETE FROM stocks WHERE stockid = :stockid"

        try:
            with self.engine.begin() as conn:
                result = conn.execute(text(query), {'stockid': stock_id})
                rows_affected = result.rowcount

            logger.info(f"Total rows/records affected {rows_affected}")
            return rows_affected

        except SQLAlchemyError as e:
            logger.error(f"Unable to delete stock {stock_id}: {e}")
            raise PersistenceError(f"Unable to delete stock {stock_id}") from e

    def count(self) -> int:
        """Return the number of rows in the stocks table."""
        try:
            with self.engine.connect() as conn:
                return conn.execute(text("SELECT COUNT(*) FROM stocks")).scalar_one()
        except SQLAlchemyError as e:
            logger.error(f"Unable to count stocks: {e}")
            raise PersistenceError("Unable to count stocks") from e

    def dispose(self) -> None:
        """Close all pooled connections."""
        self.engine.dispose()
