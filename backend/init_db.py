from database import engine, Base, SessionLocal
from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
import logging

import models  # noqa: F401  registers the tables on Base.metadata
from constants import TableNames
from repositories.settings_repository import SettingsRepository

logger = logging.getLogger(__name__)


def _check_column_exists(inspector, table: str, column: str) -> bool:
    """Check if a column exists in a table"""
    columns = [col['name'] for col in inspector.get_columns(table)]
    return column in columns


def _add_column_if_missing(db_engine: Engine, inspector, table: str, column: str, column_def: str) -> bool:
    """Add a column to a table if it doesn't exist"""
    if not _check_column_exists(inspector, table, column):
        logger.info(f"Running migration: Adding '{column}' column to {table} table...")
        with db_engine.connect() as conn:
            conn.execute(text(f"ALTER TABLE {table} ADD COLUMN {column} {column_def}"))
            conn.commit()
        logger.info(f"✅ Migration complete: '{column}' column added to {table}")
        return True
    return False


def _run_essential_migrations(db_engine: Engine) -> int:
    """
    Upgrade databases created by older versions in place.

    The first schema had no client address fields and stored prices only
    in the settings row.
    """
    inspector = inspect(db_engine)
    tables = inspector.get_table_names()
    migrations_run = 0

    if TableNames.CLIENTS in tables:
        for column in ('street', 'street_number', 'cross_streets', 'phone'):
            if _add_column_if_missing(db_engine, inspector, TableNames.CLIENTS, column, "TEXT NOT NULL DEFAULT ''"):
                migrations_run += 1

    if TableNames.ORDERS in tables:
        for column in ('unit_cost_per_dozen', 'unit_sale_per_dozen'):
            if _add_column_if_missing(db_engine, inspector, TableNames.ORDERS, column, "FLOAT NOT NULL DEFAULT 0"):
                migrations_run += 1

    return migrations_run


def init_database(db_engine: Engine = engine, session_factory: sessionmaker = SessionLocal):
    """
    Create missing tables, upgrade old schemas and seed the settings row.

    Safe to run on every startup.
    """
    Base.metadata.create_all(bind=db_engine)

    migrations_run = _run_essential_migrations(db_engine)
    if migrations_run:
        logger.info(f"Applied {migrations_run} schema migration(s)")

    with session_factory() as db:
        if SettingsRepository(db).ensure_exists():
            logger.info("Seeded default settings (cost 0, sale 0)")

    logger.info("Database initialized")
