from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errors

from ..core.exceptions import NotReachable, Rejected, StoreError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

_REJECTED_ERRORS = (errors.IntegrityError, errors.DataError, errors.ProgrammingError)


def translate_error(exc: mysql.connector.Error, *, table: Optional[str] = None) -> StoreError:
    """Map a driver error onto the store error taxonomy."""

    if isinstance(exc, _REJECTED_ERRORS):
        return Rejected(str(exc.msg or exc), table=table)
    return NotReachable(str(exc.msg or exc), table=table)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True, table: Optional[str] = None):
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        logger.error("Cannot connect to store (table=%s): %s", table, e.msg)
        raise NotReachable(str(e.msg or e), table=table) from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as e:
        conn.rollback()
        logger.error("Store error (table=%s): %s", table, e.msg)
        raise translate_error(e, table=table) from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])
