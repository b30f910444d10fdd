"""
Thin helpers over `Session.execute(text(...))`

Routers keep their SQL inline; these only remove the result-handling
boilerplate and make sure writes are committed.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import text
from sqlalchemy.orm import Session

# Every list endpoint returns the newest rows first, capped at this many.
LIST_LIMIT = 100


def fetch_all(db: Session, sql: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
    """Run a SELECT and return rows as dicts."""
    result = db.execute(text(sql), params or {})
    return [dict(row) for row in result.mappings().all()]


def fetch_one(db: Session, sql: str, params: Optional[Dict[str, Any]] = None) -> Optional[Dict[str, Any]]:
    """Run a SELECT and return the first row as a dict, or None."""
    row = db.execute(text(sql), params or {}).mappings().first()
    return dict(row) if row is not None else None


def write_returning(db: Session, sql: str, params: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """
    Run an INSERT/UPDATE/DELETE ... RETURNING, commit, and return the row.

    Returns None, after rolling back, when the statement matched no row.
    """
    row = db.execute(text(sql), params).mappings().first()
    if row is None:
        db.rollback()
        return None
    data = dict(row)
    db.commit()
    return data


def build_filters(filters: Dict[str, Any]) -> tuple:
    """
    Build a WHERE clause from equality filters, skipping None values.

    Column names come from the router, never from the request; values are
    bound as parameters.

    Returns:
        Tuple of (where_sql, params); where_sql is "" when nothing applies
    """
    clauses = []
    params: Dict[str, Any] = {}
    for column, value in filters.items():
        if value is None:
            continue
        clauses.append(f"{column} = :{column}")
        params[column] = value
    where_sql = f"WHERE {' AND '.join(clauses)}" if clauses else ""
    return where_sql, params
