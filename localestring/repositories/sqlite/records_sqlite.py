from __future__ import annotations

import logging
import sqlite3
from typing import Any, Optional

from localestring.fields.constraints import ConstraintKind
from localestring.infrastructure.query_builder import QueryBuilder
from localestring.schema import Schema

from ..records import RecordsRepo

logger = logging.getLogger(__name__)


class RecordsRepoSqlite(RecordsRepo):
    """SQLite implementation of :class:`RecordsRepo` for one schema.

    Every leaf column is stored as TEXT; composed fields contribute one
    column per child.
    """

    def __init__(self, conn: sqlite3.Connection, schema: Schema) -> None:
        self._conn = conn
        self._schema = schema
        columns = ", ".join(f"{column} TEXT" for column in schema.columns()[1:])
        self._conn.execute(
            f"CREATE TABLE IF NOT EXISTS {schema.table} "
            f"({schema.primary_key} INTEGER PRIMARY KEY, {columns})"
        )
        for constraint in schema.constraints():
            unique = "UNIQUE " if constraint.kind is ConstraintKind.UNIQUE else ""
            self._conn.execute(
                f"CREATE {unique}INDEX IF NOT EXISTS {constraint.index_name(schema.table)} "
                f"ON {schema.table} ({', '.join(constraint.columns)})"
            )
        self._conn.commit()

    @property
    def schema(self) -> Schema:
        return self._schema

    def _row_to_record(self, row: tuple[Any, ...]) -> dict[str, Any]:
        return self._schema.hydrate(dict(zip(self._schema.columns(), row)))

    def get_by_id(self, record_id: int) -> Optional[dict[str, Any]]:
        cols = ", ".join(self._schema.columns())
        cur = self._conn.execute(
            f"SELECT {cols} FROM {self._schema.table} WHERE {self._schema.primary_key} = ?",
            (record_id,),
        )
        row = cur.fetchone()
        if row:
            return self._row_to_record(row)
        return None

    def select(
        self, query: QueryBuilder, *, limit: int = 100, offset: int = 0
    ) -> list[dict[str, Any]]:
        sql, params = query.select_sql(self._schema.columns())
        sql += f" ORDER BY {self._schema.primary_key} LIMIT ? OFFSET ?"
        logger.debug("Select records", extra={"sql": sql, "params": params})
        cur = self._conn.execute(sql, (*params, limit, offset))
        return [self._row_to_record(row) for row in cur.fetchall()]

    def insert(self, record: dict[str, Any]) -> int:
        values = self._schema.dry(record)
        record_id = record.get(self._schema.primary_key)
        if record_id is not None:
            values = {self._schema.primary_key: record_id, **values}
        cols = ", ".join(values)
        marks = ", ".join("?" for _ in values)
        cur = self._conn.execute(
            f"INSERT INTO {self._schema.table} ({cols}) VALUES ({marks})",
            tuple(values.values()),
        )
        self._conn.commit()
        rowid = cur.lastrowid
        if rowid is None:
            raise RuntimeError(f"SQLite insert failed: no lastrowid (table: {self._schema.table})")
        record[self._schema.primary_key] = int(rowid)
        return int(rowid)

    def update(self, record: dict[str, Any]) -> None:
        values = self._schema.dry(record)
        assignments = ", ".join(f"{column} = ?" for column in values)
        self._conn.execute(
            f"UPDATE {self._schema.table} SET {assignments} WHERE {self._schema.primary_key} = ?",
            (*values.values(), record[self._schema.primary_key]),
        )
        self._conn.commit()

    def delete(self, record_id: int) -> None:
        self._conn.execute(
            f"DELETE FROM {self._schema.table} WHERE {self._schema.primary_key} = ?",
            (record_id,),
        )
        self._conn.commit()
