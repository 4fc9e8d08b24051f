"""SQLite storage for the restaurant data and small SQL helpers."""

from __future__ import annotations

import os
import sqlite3
from collections.abc import Sequence
from typing import Any, Union

_SCHEMA = """
CREATE TABLE IF NOT EXISTS categories (
    category_id INTEGER PRIMARY KEY AUTOINCREMENT,
    category_name TEXT NOT NULL COLLATE NOCASE
);
CREATE TABLE IF NOT EXISTS foods (
    food_id INTEGER PRIMARY KEY AUTOINCREMENT,
    food_name TEXT NOT NULL COLLATE NOCASE,
    category_id INTEGER NULL REFERENCES categories(category_id),
    price REAL NOT NULL DEFAULT 0
);
CREATE TABLE IF NOT EXISTS tables (
    table_id INTEGER PRIMARY KEY AUTOINCREMENT,
    table_number INTEGER NOT NULL,
    capacity INTEGER NOT NULL,
    status_id INTEGER NOT NULL DEFAULT 0
);
CREATE TABLE IF NOT EXISTS users (
    user_id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_name TEXT NOT NULL COLLATE NOCASE,
    password TEXT NOT NULL,
    full_name TEXT NOT NULL COLLATE NOCASE,
    phone_number TEXT,
    birth TEXT,
    gender_id INTEGER NOT NULL DEFAULT 0,
    role_id INTEGER NOT NULL DEFAULT 0
);
CREATE TABLE IF NOT EXISTS bills (
    bill_id INTEGER PRIMARY KEY AUTOINCREMENT,
    table_id INTEGER NOT NULL REFERENCES tables(table_id),
    total_price REAL NOT NULL DEFAULT 0,
    paid_date TEXT NULL
);
CREATE TABLE IF NOT EXISTS bill_items (
    bill_item_id INTEGER PRIMARY KEY AUTOINCREMENT,
    bill_id INTEGER NOT NULL REFERENCES bills(bill_id),
    food_id INTEGER NOT NULL REFERENCES foods(food_id),
    quantity INTEGER NOT NULL,
    description TEXT,
    sub_total REAL NOT NULL DEFAULT 0
);
"""

Params = Sequence[Any]


class DatabaseError(Exception):
    """Raised when the database cannot be opened or a statement fails."""


class Database:
    """A connection to the restaurant database with autocommit statements."""

    def __init__(self, path: Union[str, os.PathLike] = ":memory:") -> None:
        try:
            self._conn = sqlite3.connect(os.fspath(path), isolation_level=None)
            self._conn.execute("PRAGMA foreign_keys = ON")
        except sqlite3.Error as exc:
            raise DatabaseError(f"Connection failed - {exc}") from exc

    def create_schema(self) -> None:
        """Create every table the application needs, keeping existing data."""
        try:
            self._conn.executescript(_SCHEMA)
        except sqlite3.Error as exc:
            raise DatabaseError(f"create schema failed - {exc}") from exc

    def _run(self, sql: str, params: Params) -> sqlite3.Cursor:
        try:
            return self._conn.execute(sql, tuple(params))
        except sqlite3.Error as exc:
            raise DatabaseError(f"statement failed - {exc}") from exc

    def execute(self, sql: str, params: Params = ()) -> int | None:
        """Run a statement and return the id of the row it inserted, if any."""
        return self._run(sql, params).lastrowid

    def fetch_all(self, sql: str, params: Params = ()) -> list[tuple]:
        """Run a query and return every row."""
        cursor = self._run(sql, params)
        try:
            return cursor.fetchall()
        except sqlite3.Error as exc:
            raise DatabaseError(f"fetch failed - {exc}") from exc

    def fetch_one(self, sql: str, params: Params = ()) -> tuple | None:
        """Run a query and return its first row, or None when it has none."""
        cursor = self._run(sql, params)
        try:
            return cursor.fetchone()
        except sqlite3.Error as exc:
            raise DatabaseError(f"fetch failed - {exc}") from exc

    def close(self) -> None:
        """Close the connection; closing twice is harmless."""
        self._conn.close()

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def like_pattern(keyword: str) -> str:
    """Wrap a keyword for a substring LIKE match."""
    return f"%{keyword}%"


def order_by_clause(column: str, ascending: bool = True) -> str:
    """Build an ORDER BY clause for one column."""
    return " ORDER BY " + column + (" ASC" if ascending else " DESC")