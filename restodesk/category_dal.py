"""Storage access for menu categories."""

from __future__ import annotations

import logging

from .database import Database, DatabaseError, like_pattern, order_by_clause
from .models import Category

_log = logging.getLogger(__name__)

_BASE_QUERY = "SELECT c.category_id, c.category_name FROM categories c"
_TEXT_LIMIT = 255


def _to_category(row: tuple) -> Category:
    return Category(id=row[0], name=row[1] or "")


class CategoryDAL:
    """Reads and writes rows of the categories table."""

    def __init__(self, db: Database) -> None:
        self.db = db

    def _query(self, suffix: str, params=()) -> list[Category]:
        return [_to_category(row) for row in self.db.fetch_all(_BASE_QUERY + suffix, params)]

    def get_all(self) -> list[Category]:
        """Return every category ordered by id."""
        return self._query(" ORDER BY c.category_id")

    def get_by_id(self, category_id: int) -> Category | None:
        """Return the category with this id, or None."""
        row = self.db.fetch_one(_BASE_QUERY + " WHERE c.category_id = ?", [category_id])
        return _to_category(row) if row is not None else None

    def insert(self, category: Category) -> int:
        """Store a new category and return its id."""
        return self.db.execute(
            "INSERT INTO categories (category_name) VALUES (?)",
            [category.name[:_TEXT_LIMIT]],
        )

    def update(self, category: Category) -> bool:
        """Rename the category with the given id."""
        self.db.execute(
            "UPDATE categories SET category_name = ? WHERE category_id = ?",
            [category.name[:_TEXT_LIMIT], category.id],
        )
        return True

    def remove(self, category_id: int) -> bool:
        """Delete the category with this id."""
        self.db.execute("DELETE FROM categories WHERE category_id = ?", [category_id])
        return True

    def search_by_name(self, keyword: str) -> list[Category]:
        """Categories whose name contains the keyword; all of them for an empty one."""
        if not keyword:
            return self.get_all()
        try:
            pattern = like_pattern(keyword)[:_TEXT_LIMIT]
            return self._query(" WHERE c.category_name LIKE ?", [pattern])
        except DatabaseError as exc:
            _log.warning("search_by_name error: %s", exc)
            return []

    def get_all_sorted_by_name(self, ascending: bool = True) -> list[Category]:
        """Every category ordered by name."""
        try:
            return self._query(order_by_clause("c.category_name", ascending))
        except DatabaseError as exc:
            _log.warning("get_all_sorted_by_name error: %s", exc)
            return []