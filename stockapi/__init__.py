"""
Stock API Package

This package contains a small REST service for managing stock records
stored in a PostgreSQL table.

Modules:
- config: Environment configuration and settings
- logging_setup: Loguru sink configuration
- errors: Error taxonomy mapped to HTTP status codes
- models: Pydantic request and response models
- db_client: SQLAlchemy-based data-access client for the stocks table
- schema: Table definition and schema creation
- handlers: Request handlers for the REST operations
- router: Static route table
- fastapi_server: Application factory and error mapping
- cli: Command-line interface (serve, init-db, status)
"""

__version__ = "0.1.0"
