from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Optional, Sequence

from ..core.exceptions import NotFound, Rejected
from .connection import DatabaseConnection
from .mysql_base import db_cursor, fetchall, fetchone
from .table_store import Row, TableStore


def _db_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    return value


class MySQLTableStore(TableStore):
    """TableStore backed by MySQL.

    Table and column names cannot be bound as parameters, so every identifier is
    checked against ``schema`` (table -> columns) before it reaches SQL.
    """

    def __init__(self, conn_factory: DatabaseConnection, *, schema: Mapping[str, Sequence[str]]):
        self._conn_factory = conn_factory
        self._schema = {t: tuple(cols) for t, cols in schema.items()}

    def _columns(self, table: str, names) -> list[str]:
        cols = self._schema.get(table)
        if cols is None:
            raise Rejected(f"Unknown table: {table}", table=table)
        out = []
        for name in names:
            if name not in cols:
                raise Rejected(f"Unknown column: {table}.{name}", table=table)
            out.append(name)
        return out

    def _get_by_id(self, cur, table: str, row_id: int) -> Optional[Row]:
        cur.execute(f"SELECT * FROM {table} WHERE id=%s", (int(row_id),))
        return fetchone(cur)

    def select(
        self,
        table: str,
        filters: Optional[Mapping[str, Any]] = None,
        *,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> Sequence[Row]:
        filters = dict(filters or {})
        cols = self._columns(table, filters.keys())
        sql = f"SELECT * FROM {table}"
        if cols:
            sql += " WHERE " + " AND ".join(f"{c}=%s" for c in cols)
        if order_by:
            self._columns(table, [order_by])
            sql += f" ORDER BY {order_by} {'DESC' if descending else 'ASC'}, id {'DESC' if descending else 'ASC'}"
        else:
            sql += " ORDER BY id ASC"

        with db_cursor(self._conn_factory, table=table) as (_, cur):
            cur.execute(sql, tuple(_db_value(filters[c]) for c in cols))
            return fetchall(cur)

    def insert(self, table: str, values: Mapping[str, Any]) -> Row:
        cols = self._columns(table, values.keys())
        placeholders = ",".join(["%s"] * len(cols))

        with db_cursor(self._conn_factory, table=table) as (_, cur):
            cur.execute(
                f"INSERT INTO {table}({', '.join(cols)}) VALUES({placeholders})",
                tuple(_db_value(values[c]) for c in cols),
            )
            row = self._get_by_id(cur, table, int(cur.lastrowid))
            if not row:
                raise Rejected("Inserted row could not be read back", table=table)
            return row

    def update(self, table: str, row_id: int, values: Mapping[str, Any]) -> Row:
        cols = self._columns(table, values.keys())
        if not cols:
            raise Rejected("Nothing to update", table=table)

        with db_cursor(self._conn_factory, table=table) as (_, cur):
            cur.execute(
                f"UPDATE {table} SET {', '.join(f'{c}=%s' for c in cols)} WHERE id=%s",
                tuple(_db_value(values[c]) for c in cols) + (int(row_id),),
            )
            if cur.rowcount <= 0:
                raise NotFound(f"{table} row {row_id} not found", table=table)
            row = self._get_by_id(cur, table, row_id)
            if not row:
                raise NotFound(f"{table} row {row_id} not found", table=table)
            return row

    def delete(self, table: str, row_id: int) -> None:
        self._columns(table, [])
        with db_cursor(self._conn_factory, table=table) as (_, cur):
            cur.execute(f"DELETE FROM {table} WHERE id=%s", (int(row_id),))
            if cur.rowcount <= 0:
                raise NotFound(f"{table} row {row_id} not found", table=table)

    def upsert(self, table: str, values: Mapping[str, Any], *, conflict: Sequence[str]) -> Row:
        cols = self._columns(table, values.keys())
        keys = self._columns(table, conflict)
        replace = [c for c in cols if c not in keys]
        if not replace:
            raise Rejected("Upsert needs at least one non-key column", table=table)
        placeholders = ",".join(["%s"] * len(cols))

        with db_cursor(self._conn_factory, table=table) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO {table}({', '.join(cols)})
                VALUES({placeholders})
                ON DUPLICATE KEY UPDATE {', '.join(f'{c}=VALUES({c})' for c in replace)}
                """,
                tuple(_db_value(values[c]) for c in cols),
            )

            # lastrowid is 0 when the statement hit the existing row; read it back by key.
            cur.execute(
                f"SELECT * FROM {table} WHERE {' AND '.join(f'{k}=%s' for k in keys)}",
                tuple(_db_value(values[k]) for k in keys),
            )
            row = fetchone(cur)
            if not row:
                raise Rejected("Upserted row could not be read back", table=table)
            return row
