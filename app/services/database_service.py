# /app/services/database_service.py

"""
The application's database collaborator.

`DatabaseService` wraps the hosted Postgres database behind the `DataClient`
contract. Besides delegating queries to the SQL repository it keeps the
connection state the health endpoint reports (status, last error, offline
mode), caches the teacher and calendar reads the pages hit on every load,
and serves built-in fallback data while the database is unreachable.

One instance lives for the whole process on `app.state.db_service`.
"""

import asyncio
import datetime
import logging
import threading
import time
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from fastapi import Request
from sqlalchemy.engine import Engine
from sqlalchemy.exc import NoSuchTableError, SQLAlchemyError

from app.config import DATA_CACHE_TTL_SECONDS, DB_MAX_CONNECTION_ATTEMPTS
from app.db.database import build_engine

from ..models.schedule_model import CalendarEntry, Teacher
from .database_helpers import fallback_data
from .database_helpers.data_client import ConnectionStatus, DatabaseError, DatabaseOfflineError
from .database_helpers.table_repository_sql import TableRepositorySQL

logger = logging.getLogger(__name__)

# Tables tried in order by ping(); the first one that answers proves connectivity.
PING_TABLES = [
    "Clovers1A-Course-Calendar",
    "Teachers",
    "Students-English",
    "Sprouts1-Course-Calendar",
]

TEACHERS_TABLE = "Teachers"
TEACHERS_FETCH_LIMIT = 100


def _to_plain(value: Any) -> Any:
    # Postgres hands back date/time/Decimal objects; the pages expect JSON scalars.
    if isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    return value


def _plain_row(row: Dict[str, Any]) -> Dict[str, Any]:
    return {key: _to_plain(value) for key, value in row.items()}


class DatabaseService:
    def __init__(self, engine: Optional[Engine] = None,
                 max_connection_attempts: int = DB_MAX_CONNECTION_ATTEMPTS,
                 cache_ttl_seconds: float = DATA_CACHE_TTL_SECONDS):
        self.engine = engine if engine is not None else build_engine()
        self.table_repo = TableRepositorySQL(self.engine)
        self.max_connection_attempts = max_connection_attempts
        self.cache_ttl_seconds = cache_ttl_seconds

        self._status = ConnectionStatus.DISCONNECTED
        self._last_error: Optional[Exception] = None
        self._offline = False
        self._connection_attempts = 0
        self._cache: Dict[str, Tuple[float, Any]] = {}
        self._lock = threading.Lock()

    # --- CONNECTION STATE ---
    def get_status(self) -> ConnectionStatus: return self._status
    def get_last_error(self) -> Optional[Exception]: return self._last_error
    def is_offline(self) -> bool: return self._offline

    def _update_status(self, status: ConnectionStatus, error: Optional[Exception] = None) -> None:
        with self._lock:
            old_status = self._status
            changed = old_status != status or str(self._last_error or "") != str(error or "")
            self._status = status
            self._last_error = error
        if changed:
            suffix = f" ({error})" if error else ""
            logger.info(f"[DB] Connection status changed: {old_status.value} -> {status.value}{suffix}")

    def _ping_sync(self) -> bool:
        if self._offline:
            logger.info("[DB] Offline mode enabled, skipping connection attempt")
            return False

        self._update_status(ConnectionStatus.CONNECTING)
        self._connection_attempts += 1

        last_error: Optional[Exception] = None
        for table_name in PING_TABLES + [None]:
            try:
                self.table_repo.probe(table_name)
                logger.debug(f"[DB] Connection successful using {table_name or 'SELECT 1'}")
                self._connection_attempts = 0
                self._offline = False
                self._update_status(ConnectionStatus.CONNECTED)
                return True
            except SQLAlchemyError as e:
                last_error = e
                logger.debug(f"[DB] Connection failed using {table_name or 'SELECT 1'}, trying next option...")

        error = DatabaseError(f"All connection attempts failed: {last_error}")
        self._update_status(ConnectionStatus.ERROR, error)
        logger.warning(
            f"[DB] Connection attempt {self._connection_attempts}/{self.max_connection_attempts} failed: {last_error}"
        )
        if self._connection_attempts >= self.max_connection_attempts:
            logger.warning("[DB] Max connection attempts reached, entering offline mode")
            self._offline = True
        return False

    async def ping(self) -> bool:
        """Probes the database in a worker thread so the event loop keeps serving."""
        return await asyncio.to_thread(self._ping_sync)

    async def reconnect(self) -> bool:
        logger.info("[DB] Manual reconnection triggered")
        self._connection_attempts = 0
        self._offline = False
        connected = await self.ping()
        if connected:
            self.clear_cache()
        return connected

    # --- CACHE ---
    def _cached(self, key: str) -> Optional[Any]:
        entry = self._cache.get(key)
        if entry and time.monotonic() - entry[0] < self.cache_ttl_seconds:
            return entry[1]
        return None

    def _store(self, key: str, value: Any) -> None:
        self._cache[key] = (time.monotonic(), value)

    def clear_cache(self) -> None:
        logger.info("[DB] Clearing data cache")
        self._cache.clear()

    # --- RAW TABLE ACCESS (DataClient) ---
    def get_table_rows(self, table_name: str, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        if self._offline:
            raise DatabaseOfflineError("Database is in offline mode")
        try:
            return [_plain_row(row) for row in self.table_repo.get_rows(table_name, limit=limit)]
        except NoSuchTableError:
            raise
        except SQLAlchemyError as e:
            self._update_status(ConnectionStatus.ERROR, e)
            raise DatabaseError(f"Query on {table_name} failed: {e}") from e

    def call_rpc(self, function_name: str, params: Optional[Dict[str, Any]] = None) -> List[Any]:
        if self._offline:
            raise DatabaseOfflineError("Database is in offline mode")
        try:
            return self.table_repo.call_function(function_name, params)
        except SQLAlchemyError as e:
            raise DatabaseError(f"RPC {function_name} failed: {e}") from e

    def table_exists(self, table_name: str) -> bool:
        if self._offline:
            return table_name in fallback_data.KNOWN_TABLES
        return self.table_repo.table_exists(table_name)

    def count_rows(self, table_name: str) -> int:
        if self._offline:
            raise DatabaseOfflineError("Database is in offline mode")
        try:
            return self.table_repo.count_rows(table_name)
        except NoSuchTableError:
            raise
        except SQLAlchemyError as e:
            raise DatabaseError(f"Count on {table_name} failed: {e}") from e

    def list_tables(self) -> Tuple[List[str], str]:
        """
        Returns the table names and where they came from: the `get_tables`
        database function, the SQL schema, or the built-in list.
        """
        if self._offline:
            return list(fallback_data.KNOWN_TABLES), "fallback"
        try:
            return [str(name) for name in self.call_rpc("get_tables")], "rpc"
        except DatabaseError as e:
            logger.debug(f"[DB] get_tables RPC unavailable, reading schema instead: {e}")
        try:
            tables = self.table_repo.list_table_names()
            if tables:
                return tables, "schema"
        except SQLAlchemyError as e:
            logger.error(f"[DB] Error listing tables from schema: {e}")
        return list(fallback_data.KNOWN_TABLES), "fallback"

    # --- TEACHERS ---
    def get_teachers(self) -> List[Teacher]:
        if self._offline:
            logger.info("[DB] In offline mode, using fallback teachers")
            return [Teacher.model_validate(row) for row in fallback_data.fallback_teachers()]

        cached = self._cached("teachers")
        if cached is not None:
            return cached

        rows = self.get_table_rows(TEACHERS_TABLE, limit=TEACHERS_FETCH_LIMIT)
        if not rows:
            logger.warning("[DB] No teachers found in database, returning fallback data")
            return [Teacher.model_validate(row) for row in fallback_data.fallback_teachers()]

        teachers = []
        for row in rows:
            row.setdefault("Teacher_Type", "Unknown")
            if not row.get("Teacher_name"):
                logger.warning(f"[DB] Teacher row without a name: {row}")
                row["Teacher_name"] = "Unknown Teacher"
            teachers.append(Teacher.model_validate(row))
        logger.info(f"[DB] Returning {len(teachers)} teachers")
        self._store("teachers", teachers)
        return teachers

    def get_teacher_by_id(self, teacher_id: int) -> Optional[Teacher]:
        return next((t for t in self.get_teachers() if t.Teacher_ID == teacher_id), None)

    def get_teachers_by_type(self, teacher_type: str) -> List[Teacher]:
        wanted = teacher_type.lower()
        return [t for t in self.get_teachers() if (t.Teacher_Type or "").lower() == wanted]

    # --- CALENDARS ---
    def get_calendar_tables(self) -> List[str]:
        if self._offline:
            return fallback_data.known_calendar_tables()
        cached = self._cached("calendar_tables")
        if cached is not None:
            return cached
        tables, _ = self.list_tables()
        calendar_tables = [name for name in tables if fallback_data.is_calendar_table(name)]
        if not calendar_tables:
            return fallback_data.known_calendar_tables()
        self._store("calendar_tables", calendar_tables)
        return calendar_tables

    def get_calendar_entries(self, table_name: str) -> List[CalendarEntry]:
        if not fallback_data.is_calendar_table(table_name):
            raise ValueError(f"Table {table_name} is not a calendar table")

        if self._offline:
            logger.info(f"[DB] In offline mode, using fallback calendar for {table_name}")
            return [CalendarEntry.model_validate(row) for row in fallback_data.fallback_calendar(table_name)]

        cache_key = f"calendar:{table_name}"
        cached = self._cached(cache_key)
        if cached is not None:
            return cached

        entries = [CalendarEntry.model_validate(row) for row in self.get_table_rows(table_name)]
        self._store(cache_key, entries)
        return entries

    def get_all_calendar_entries(self) -> List[CalendarEntry]:
        entries: List[CalendarEntry] = []
        for table_name in self.get_calendar_tables():
            entries.extend(self.get_calendar_entries(table_name))
        return entries


# --- DEPENDENCY PROVIDER ---
def get_db_service(request: Request) -> DatabaseService:
    """
    FastAPI dependency that provides the process-wide DatabaseService.
    Tests swap the instance by building their own app with create_app().
    """
    return request.app.state.db_service
