from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import ConflictError, RepositoryError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

_TIMEOUT_ERRNOS = {
    errorcode.ER_LOCK_WAIT_TIMEOUT,
    3024,  # ER_QUERY_TIMEOUT: max_execution_time exceeded
}


def _translate(error: mysql.connector.Error) -> Exception:
    if isinstance(error, mysql.connector.IntegrityError) and error.errno == errorcode.ER_DUP_ENTRY:
        return ConflictError("Duplicate row")
    if error.errno in _TIMEOUT_ERRNOS:
        return RepositoryError("Database operation timed out")
    return RepositoryError("Database operation failed")


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Borrow a connection for one unit of work.

    Commits on success, rolls back on any error. Driver errors leave this
    block as ``RepositoryError`` (or ``ConflictError`` for duplicate keys).
    """

    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as e:
        conn.rollback()
        logger.warning("Database error errno=%s: %s", getattr(e, "errno", None), e)
        raise _translate(e) from e
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


def as_float(value: Any) -> Optional[float]:
    """DECIMAL columns come back as Decimal; the domain works in floats."""

    if value is None:
        return None
    return float(value)
