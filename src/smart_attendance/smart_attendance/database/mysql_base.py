from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Borrow a pooled connection and run one transaction on it.

    Commits when the block finishes, rolls back and re-raises on error.
    """
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary, buffered=True)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
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


def is_duplicate_key(error: Exception) -> bool:
    """True for MySQL ER_DUP_ENTRY (1062)."""
    return getattr(error, "errno", None) == 1062


def is_missing_parent(error: Exception) -> bool:
    """True for MySQL ER_NO_REFERENCED_ROW_2 (1452)."""
    return getattr(error, "errno", None) == 1452
