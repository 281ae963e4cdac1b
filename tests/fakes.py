from __future__ import annotations

import threading
import time
from collections import defaultdict
from datetime import datetime

from src.attendance_ledger.attendance_ledger.core.exceptions import NotFound, Rejected


class InMemoryTableStore:
    """TableStore fake with optional unique keys, call log and injected failures."""

    def __init__(self, *, unique=None):
        self.tables: dict[str, dict[int, dict]] = defaultdict(dict)
        self.calls: list[tuple[str, str]] = []
        self.fail: dict[tuple[str, str], Exception] = {}
        self._next_id: dict[str, int] = defaultdict(int)
        self._unique = dict(unique or {})
        self._lock = threading.RLock()

    def seed(self, table: str, **values) -> dict:
        with self._lock:
            return self._insert(table, values)

    def rows(self, table: str) -> list[dict]:
        return [dict(r) for _, r in sorted(self.tables[table].items())]

    def _enter(self, op: str, table: str) -> None:
        self.calls.append((op, table))
        exc = self.fail.get((op, table))
        if exc is not None:
            raise exc

    def _insert(self, table: str, values) -> dict:
        for key_cols in self._unique.get(table, ()):
            for row in self.tables[table].values():
                if all(row.get(c) == values.get(c) for c in key_cols):
                    raise Rejected(f"duplicate key {key_cols}", table=table)
        self._next_id[table] += 1
        row = dict(values)
        row["id"] = self._next_id[table]
        self.tables[table][row["id"]] = row
        return dict(row)

    def select(self, table, filters=None, *, order_by=None, descending=False):
        self._enter("select", table)
        with self._lock:
            rows = [
                dict(r)
                for r in self.tables[table].values()
                if all(r.get(k) == v for k, v in (filters or {}).items())
            ]
        if order_by:
            rows.sort(key=lambda r: (r[order_by], r["id"]), reverse=descending)
        else:
            rows.sort(key=lambda r: r["id"])
        return rows

    def insert(self, table, values):
        self._enter("insert", table)
        with self._lock:
            return self._insert(table, values)

    def update(self, table, row_id, values):
        self._enter("update", table)
        with self._lock:
            row = self.tables[table].get(int(row_id))
            if row is None:
                raise NotFound(f"{table} row {row_id} not found", table=table)
            row.update(values)
            return dict(row)

    def delete(self, table, row_id):
        self._enter("delete", table)
        with self._lock:
            if self.tables[table].pop(int(row_id), None) is None:
                raise NotFound(f"{table} row {row_id} not found", table=table)

    def upsert(self, table, values, *, conflict):
        self._enter("upsert", table)
        with self._lock:
            for row in self.tables[table].values():
                if all(row.get(c) == values.get(c) for c in conflict):
                    row.update({k: v for k, v in values.items() if k not in conflict})
                    return dict(row)
            return self._insert(table, values)


class SlowSelectStore(InMemoryTableStore):
    """Widens the gap between a lookup and the write that depends on it."""

    def __init__(self, *, delay: float = 0.05, **kwargs):
        super().__init__(**kwargs)
        self._delay = delay

    def select(self, table, filters=None, **kwargs):
        rows = super().select(table, filters, **kwargs)
        time.sleep(self._delay)
        return rows


def seed_student(store, *, name, roll_num, status="active", created_at=None, table="students") -> int:
    row = store.seed(
        table,
        name=name,
        roll_num=roll_num,
        status=status,
        created_at=created_at or datetime(2024, 1, 1, 8, 0, 0),
    )
    return row["id"]
