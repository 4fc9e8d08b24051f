"""Storage access for dining tables."""

from __future__ import annotations

import logging

from .database import Database, DatabaseError, order_by_clause
from .models import Table

_log = logging.getLogger(__name__)

_BASE_QUERY = "SELECT t.table_id, t.table_number, t.capacity, t.status_id FROM tables t"


def _to_table(row: tuple) -> Table:
    return Table(id=row[0], number=row[1], capacity=row[2], status_id=row[3])


class TableDAL:
    """Reads and writes rows of the tables table."""

    def __init__(self, db: Database) -> None:
        self.db = db

    def _query(self, suffix: str, params=()) -> list[Table]:
        return [_to_table(row) for row in self.db.fetch_all(_BASE_QUERY + suffix, params)]

    def _safe_query(self, label: str, suffix: str, params=()) -> list[Table]:
        try:
            return self._query(suffix, params)
        except DatabaseError as exc:
            _log.warning("%s error: %s", label, exc)
            return []

    def get_all(self) -> list[Table]:
        """Return every table ordered by id."""
        return self._query(" ORDER BY t.table_id")

    def get_by_id(self, table_id: int) -> Table | None:
        """Return the table with this id, or None."""
        row = self.db.fetch_one(_BASE_QUERY + " WHERE t.table_id = ?", [table_id])
        return _to_table(row) if row is not None else None

    def insert(self, table: Table) -> int:
        """Store a new table and return its id."""
        return self.db.execute(
            "INSERT INTO tables (table_number, capacity, status_id) VALUES (?, ?, ?)",
            [table.number, table.capacity, table.status_id],
        )

    def update(self, table: Table) -> bool:
        """Store the number, capacity and status of the table with the given id."""
        self.db.execute(
            "UPDATE tables SET table_number=?, capacity=?, status_id=? WHERE table_id=?",
            [table.number, table.capacity, table.status_id, table.id],
        )
        return True

    def remove(self, table_id: int) -> bool:
        """Delete the table with this id."""
        self.db.execute("DELETE FROM tables WHERE table_id=?", [table_id])
        return True

    def search_by_number(self, number: int) -> list[Table]:
        """Tables with this number; all of them when the number is not positive."""
        if number <= 0:
            return self.get_all()
        return self._safe_query("search_by_number", " WHERE t.table_number = ?", [number])

    def search_by_capacity(self, capacity: int) -> list[Table]:
        """Tables seating exactly this many; all of them when not positive."""
        if capacity <= 0:
            return self.get_all()
        return self._safe_query("search_by_capacity", " WHERE t.capacity = ?", [capacity])

    def search_by_status(self, status: int) -> list[Table]:
        """Tables with this status; all of them unless the status is 0 or 1."""
        if status not in (0, 1):
            return self.get_all()
        return self._safe_query("search_by_status", " WHERE t.status_id = ?", [status])

    def get_all_sorted_by_number(self, ascending: bool = True) -> list[Table]:
        """Every table ordered by number."""
        return self._safe_query(
            "get_all_sorted_by_number", order_by_clause("t.table_number", ascending)
        )

    def get_all_sorted_by_capacity(self, ascending: bool = True) -> list[Table]:
        """Every table ordered by capacity."""
        return self._safe_query(
            "get_all_sorted_by_capacity", order_by_clause("t.capacity", ascending)
        )

    def get_all_sorted_by_status(self, ascending: bool = True) -> list[Table]:
        """Every table ordered by status."""
        return self._safe_query(
            "get_all_sorted_by_status", order_by_clause("t.status_id", ascending)
        )