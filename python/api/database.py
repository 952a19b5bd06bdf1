"""
Database Connection Module

Provides the connection to the hosted PostgreSQL database and thin
parameterised helpers used by the route modules.
"""

import os
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, sessionmaker

# Database URL from environment
DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"postgresql://{os.getenv('POSTGRES_USER', 'postgres')}:"
    f"{os.getenv('POSTGRES_PASSWORD', 'postgres')}@"
    f"{os.getenv('POSTGRES_HOST', 'localhost')}:"
    f"{os.getenv('POSTGRES_PORT', '5432')}/"
    f"{os.getenv('POSTGRES_DB', 'quickflow')}"
)

# Create engine
engine = create_engine(
    DATABASE_URL,
    pool_pre_ping=True,
    pool_size=5,
    max_overflow=10,
)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextmanager
def get_db_context() -> Generator[Session, None, None]:
    """Get database session as context manager.

    Yields:
        Database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _rows(db: Session, query: str, params: dict) -> list[dict]:
    result = db.execute(text(query), params)
    if not result.returns_rows:
        return []
    columns = list(result.keys())
    return [dict(zip(columns, row)) for row in result.fetchall()]


def execute_query(query: str, params: dict | None = None) -> list[dict]:
    """Execute raw SQL query and return results as dictionaries.

    Statements that return rows (SELECT, or writes with RETURNING) are
    committed before the rows are handed back.

    Args:
        query: SQL query string
        params: Query parameters

    Returns:
        List of result dictionaries
    """
    with get_db_context() as db:
        rows = _rows(db, query, params or {})
        db.commit()
        return rows


def _where(where: dict) -> tuple[str, dict]:
    clauses = []
    params = {}
    for column, value in where.items():
        key = f"w_{column}"
        clauses.append(f"{column} = :{key}")
        params[key] = value
    return " AND ".join(clauses), params


def insert_row(db: Session, table: str, data: dict, returning: str = "id") -> dict | None:
    """INSERT one row inside the caller's session without committing."""
    columns = ", ".join(data.keys())
    placeholders = ", ".join(f":{k}" for k in data.keys())
    query = f"INSERT INTO {table} ({columns}) VALUES ({placeholders}) RETURNING {returning}"

    results = _rows(db, query, data)
    return results[0] if results else None


def delete_rows(db: Session, table: str, where: dict, returning: str = "id") -> list[dict]:
    """DELETE ... WHERE col = value AND ... inside the caller's session without committing."""
    if not where:
        raise ValueError("delete_rows requires a WHERE filter")

    where_clause, where_params = _where(where)
    query = f"DELETE FROM {table} WHERE {where_clause} RETURNING {returning}"

    return _rows(db, query, where_params)


def execute_insert(
    table: str,
    data: dict,
    returning: str = "id",
) -> dict | None:
    """Execute INSERT and return the inserted row.

    Args:
        table: Table name
        data: Column-value dictionary
        returning: Columns to return (default: id)

    Returns:
        Inserted row or None
    """
    with get_db_context() as db:
        row = insert_row(db, table, data, returning)
        db.commit()
        return row


def execute_update(
    table: str,
    data: dict,
    where: dict,
    returning: str = "id",
) -> list[dict]:
    """Execute UPDATE ... WHERE col = value AND ... and return affected rows.

    Args:
        table: Table name
        data: Column-value dictionary to set
        where: Column-value equality filter (must not be empty)
        returning: Columns to return

    Returns:
        Updated rows
    """
    if not where:
        raise ValueError("execute_update requires a WHERE filter")

    assignments = ", ".join(f"{k} = :{k}" for k in data.keys())
    where_clause, where_params = _where(where)
    query = f"UPDATE {table} SET {assignments} WHERE {where_clause} RETURNING {returning}"

    return execute_query(query, {**data, **where_params})


def execute_delete(table: str, where: dict, returning: str = "id") -> list[dict]:
    """Execute DELETE ... WHERE col = value AND ... and return deleted rows."""
    if not where:
        raise ValueError("execute_delete requires a WHERE filter")

    with get_db_context() as db:
        rows = delete_rows(db, table, where, returning)
        db.commit()
        return rows
