# /app/services/database_helpers/table_repository_sql.py

"""
Raw SQLAlchemy Core queries against the scheduler's tables.

The schema is owned by the hosted database, not by this application, so
tables are reflected on first use instead of being declared as ORM models.
Table names such as "Clovers1A-Course-Calendar" contain hyphens; SQLAlchemy
quotes them for us.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import MetaData, Table, func, inspect, select, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import NoSuchTableError


class TableRepositorySQL:
    def __init__(self, engine: Engine):
        self.engine = engine
        self.metadata = MetaData()

    def _table(self, table_name: str) -> Table:
        if table_name in self.metadata.tables:
            return self.metadata.tables[table_name]
        return Table(table_name, self.metadata, autoload_with=self.engine)

    def table_exists(self, table_name: str) -> bool:
        try:
            self._table(table_name)
            return True
        except NoSuchTableError:
            return False

    def get_rows(self, table_name: str, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        table = self._table(table_name)
        query = select(table)
        if limit is not None:
            query = query.limit(limit)
        with self.engine.connect() as conn:
            return [dict(row._mapping) for row in conn.execute(query)]

    def count_rows(self, table_name: str) -> int:
        table = self._table(table_name)
        with self.engine.connect() as conn:
            return conn.execute(select(func.count()).select_from(table)).scalar_one()

    def list_table_names(self) -> List[str]:
        return inspect(self.engine).get_table_names()

    def call_function(self, function_name: str, params: Optional[Dict[str, Any]] = None) -> List[Any]:
        """
        Calls a Postgres function the way Supabase's `rpc()` does, by selecting
        from it with named arguments. Single-column results are flattened.
        """
        params = params or {}
        preparer = self.engine.dialect.identifier_preparer
        arguments = ", ".join(f"{preparer.quote(name)} => :{name}" for name in params)
        statement = text(f"SELECT * FROM {preparer.quote(function_name)}({arguments})")
        with self.engine.connect() as conn:
            result = conn.execute(statement, params)
            rows = [dict(row._mapping) for row in result]
        if rows and len(rows[0]) == 1:
            return [next(iter(row.values())) for row in rows]
        return rows

    def probe(self, table_name: Optional[str] = None) -> None:
        """Runs the cheapest query that proves the connection works."""
        with self.engine.connect() as conn:
            if table_name is None:
                conn.execute(text("SELECT 1"))
            else:
                conn.execute(select(func.count()).select_from(self._table(table_name)))
