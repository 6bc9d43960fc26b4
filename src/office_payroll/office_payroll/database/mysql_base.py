from __future__ import annotations

from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence, Tuple

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import DuplicateRecordError, StoreError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (conn, cursor); commit on success, roll back on any error.

    Everything executed inside one block shares a single transaction.
    mysql-connector errors are re-raised as StoreError.
    """
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        raise StoreError(f"تعذر الاتصال بقاعدة البيانات: {e}") from e
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.IntegrityError as e:
        conn.rollback()
        if e.errno == errorcode.ER_DUP_ENTRY:
            raise DuplicateRecordError(str(e)) from e
        raise StoreError(str(e)) from e
    except mysql.connector.Error as e:
        conn.rollback()
        raise StoreError(str(e)) from e
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


def in_clause(values: Sequence[Any]) -> Tuple[str, Tuple[Any, ...]]:
    """Build ``%s,%s,...`` placeholders for an IN (...) filter."""
    if not values:
        raise ValueError("IN clause needs at least one value")
    return ",".join(["%s"] * len(values)), tuple(values)


def as_decimal(value: Any) -> Optional[Decimal]:
    """Normalize DECIMAL/float/int columns to Decimal, keeping NULL as None."""
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))
