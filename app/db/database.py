# /app/db/database.py

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from app.config import DATABASE_URL, DB_CONNECT_TIMEOUT


def build_engine(database_url: str = DATABASE_URL) -> Engine:
    """
    Creates the SQLAlchemy engine for the hosted Postgres (Supabase) database.
    No connection is opened until the first query.
    """
    # The 'check_same_thread' argument is only needed for SQLite; Postgres
    # drivers take a connect timeout instead.
    if database_url.startswith("sqlite"):
        engine_args = {"connect_args": {"check_same_thread": False}}
    elif database_url.startswith("postgresql"):
        engine_args = {"connect_args": {"connect_timeout": DB_CONNECT_TIMEOUT}, "pool_pre_ping": True}
    else:
        engine_args = {}
    return create_engine(database_url, **engine_args)
