from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from mysql.connector import Error as MySQLError

from ..core.exceptions import RecordStoreError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (conn, cursor) on a fresh connection; commit on success, rollback on error.

    Driver errors surface as RecordStoreError so callers never depend on mysql-connector.
    """
    try:
        conn = conn_factory.connect()
    except MySQLError as e:
        raise RecordStoreError(f"Database unavailable: {e}") from e
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except MySQLError as e:
        conn.rollback()
        raise RecordStoreError(str(e)) from e
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


def in_clause(values) -> str:
    """Placeholders for an IN (...) filter; never empty."""
    return ", ".join(["%s"] * max(len(values), 1))
