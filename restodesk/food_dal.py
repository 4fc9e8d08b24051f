"""Storage access for dishes on the menu."""

from __future__ import annotations

import logging

from .database import Database, DatabaseError, like_pattern, order_by_clause
from .models import Food

_log = logging.getLogger(__name__)

_BASE_QUERY = (
    "SELECT f.food_id, f.food_name, f.category_id, c.category_name, f.price "
    "FROM foods f LEFT JOIN categories c ON f.category_id = c.category_id"
)
_TEXT_LIMIT = 255


def _to_food(row: tuple) -> Food:
    food_id, name, category_id, category_name, price = row
    return Food(
        id=food_id,
        name=name or "",
        category_id=0 if category_id is None else category_id,
        category_name=category_name or "",
        price=float(price) if price is not None else 0.0,
    )


class FoodDAL:
    """Reads and writes rows of the foods table, joined with their category."""

    def __init__(self, db: Database) -> None:
        self.db = db

    def _query(self, suffix: str, params=()) -> list[Food]:
        return [_to_food(row) for row in self.db.fetch_all(_BASE_QUERY + suffix, params)]

    def _safe_query(self, label: str, suffix: str, params=()) -> list[Food]:
        try:
            return self._query(suffix, params)
        except DatabaseError as exc:
            _log.warning("%s error: %s", label, exc)
            return []

    def get_all(self) -> list[Food]:
        """Return every dish ordered by id."""
        return self._query(" ORDER BY f.food_id")

    def get_by_id(self, food_id: int) -> Food | None:
        """Return the dish with this id, or None."""
        row = self.db.fetch_one(_BASE_QUERY + " WHERE f.food_id = ?", [food_id])
        return _to_food(row) if row is not None else None

    def insert(self, food: Food) -> int:
        """Store a new dish and return its id."""
        return self.db.execute(
            "INSERT INTO foods (food_name, category_id, price) VALUES (?, ?, ?)",
            [food.name[:_TEXT_LIMIT], food.category_id, food.price],
        )

    def update(self, food: Food) -> bool:
        """Store the name, category and price of the dish with the given id."""
        self.db.execute(
            "UPDATE foods SET food_name = ?, category_id = ?, price = ? WHERE food_id = ?",
            [food.name[:_TEXT_LIMIT], food.category_id, food.price, food.id],
        )
        return True

    def remove(self, food_id: int) -> bool:
        """Delete the dish with this id."""
        self.db.execute("DELETE FROM foods WHERE food_id = ?", [food_id])
        return True

    def set_category_id_to_null(self, category_id: int) -> bool:
        """Detach every dish from the given category."""
        self.db.execute(
            "UPDATE foods SET category_id = NULL WHERE category_id = ?", [category_id]
        )
        return True

    def search_by_name(self, keyword: str) -> list[Food]:
        """Dishes whose name contains the keyword; all of them for an empty one."""
        if not keyword:
            return self.get_all()
        pattern = like_pattern(keyword)[:_TEXT_LIMIT]
        return self._safe_query("search_by_name", " WHERE f.food_name LIKE ?", [pattern])

    def search_by_category(self, category_name: str) -> list[Food]:
        """Dishes whose category name contains the text; all of them for an empty one."""
        if not category_name:
            return self.get_all()
        pattern = like_pattern(category_name)[:_TEXT_LIMIT]
        return self._safe_query(
            "search_by_category", " WHERE c.category_name LIKE ?", [pattern]
        )

    def search_by_price_range(self, min_price: float, max_price: float) -> list[Food]:
        """Dishes priced between the two bounds, both included."""
        return self._safe_query(
            "search_by_price_range", " WHERE f.price BETWEEN ? AND ?", [min_price, max_price]
        )

    def get_all_sorted_by_name(self, ascending: bool = True) -> list[Food]:
        """Every dish ordered by name."""
        return self._safe_query(
            "get_all_sorted_by_name", order_by_clause("f.food_name", ascending)
        )

    def get_all_sorted_by_price(self, ascending: bool = True) -> list[Food]:
        """Every dish ordered by price."""
        return self._safe_query(
            "get_all_sorted_by_price", order_by_clause("f.price", ascending)
        )

    def get_all_sorted_by_category(self, ascending: bool = True) -> list[Food]:
        """Every dish ordered by category name."""
        return self._safe_query(
            "get_all_sorted_by_category", order_by_clause("c.category_name", ascending)
        )