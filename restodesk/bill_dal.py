"""Storage access for bills and the dishes ordered on them."""

from __future__ import annotations

import logging

from .database import Database, DatabaseError, order_by_clause
from .models import Bill, BillItem

_log = logging.getLogger(__name__)

_BASE_QUERY = "SELECT bill_id, table_id, total_price, paid_date FROM bills"
_ITEM_QUERY = (
    "SELECT bill_item_id, bill_id, food_id, quantity, description, sub_total "
    "FROM bill_items"
)
_DESCRIPTION_LIMIT = 259
_DATE_LIMIT = 31


def _to_bill(row: tuple) -> Bill:
    bill_id, table_id, total_price, paid_date = row
    return Bill(
        id=bill_id,
        table_id=table_id,
        total_price=float(total_price) if total_price is not None else 0.0,
        paid_date=paid_date or "",
    )


def _to_item(row: tuple) -> BillItem:
    item_id, bill_id, food_id, quantity, description, sub_total = row
    return BillItem(
        id=item_id,
        bill_id=bill_id,
        food_id=food_id,
        quantity=quantity,
        description=description or "",
        sub_total=float(sub_total) if sub_total is not None else 0.0,
    )


class BillDAL:
    """Reads and writes rows of the bills and bill_items tables."""

    def __init__(self, db: Database) -> None:
        self.db = db

    def _query(self, suffix: str, params=()) -> list[Bill]:
        return [_to_bill(row) for row in self.db.fetch_all(_BASE_QUERY + suffix, params)]

    def _safe_query(self, label: str, suffix: str, params=()) -> list[Bill]:
        try:
            return self._query(suffix, params)
        except DatabaseError as exc:
            _log.warning("%s error: %s", label, exc)
            return []

    def get_open_by_table_id(self, table_id: int) -> Bill | None:
        """The most recent unpaid bill of a table, or None."""
        row = self.db.fetch_one(
            _BASE_QUERY + " WHERE table_id=? AND paid_date IS NULL "
            "ORDER BY bill_id DESC LIMIT 1",
            [table_id],
        )
        return _to_bill(row) if row is not None else None

    def create_for_table(self, table_id: int) -> int:
        """Open an empty bill for a table and return its id, or -1."""
        new_id = self.db.execute(
            "INSERT INTO bills (table_id, total_price, paid_date) VALUES (?, 0, NULL)",
            [table_id],
        )
        return new_id if new_id is not None else -1

    def delete_bill(self, bill_id: int) -> bool:
        """Delete the bill with this id."""
        self.db.execute("DELETE FROM bills WHERE bill_id=?", [bill_id])
        return True

    def recalc_total(self, bill_id: int) -> bool:
        """Set a bill's total to the sum of its items."""
        self.db.execute(
            "UPDATE bills SET total_price = "
            "(SELECT COALESCE(SUM(sub_total), 0) FROM bill_items WHERE bill_id=?) "
            "WHERE bill_id=?",
            [bill_id, bill_id],
        )
        return True

    def _food_price(self, food_id: int) -> float | None:
        row = self.db.fetch_one("SELECT price FROM foods WHERE food_id=?", [food_id])
        if row is None:
            return None
        return float(row[0]) if row[0] is not None else 0.0

    @staticmethod
    def _sub_total(price: float, quantity: int) -> float:
        return price * (quantity if quantity > 0 else 1)

    def add_item(self, bill_id: int, food_id: int, quantity: int, description: str) -> int:
        """Add a dish to a bill and return the new item's id.

        Raises LookupError when the dish does not exist.
        """
        price = self._food_price(food_id)
        if price is None:
            raise LookupError("food not found")
        return self.db.execute(
            "INSERT INTO bill_items (bill_id, food_id, quantity, description, sub_total) "
            "VALUES (?, ?, ?, ?, ?)",
            [
                bill_id,
                food_id,
                quantity,
                description[:_DESCRIPTION_LIMIT],
                self._sub_total(price, quantity),
            ],
        )

    def update_item(self, bill_item_id: int, quantity: int, description: str) -> bool:
        """Change an item's quantity and note; False when the item does not exist.

        Raises LookupError when the item's dish no longer exists.
        """
        row = self.db.fetch_one(
            "SELECT food_id FROM bill_items WHERE bill_item_id=?", [bill_item_id]
        )
        if row is None:
            return False
        price = self._food_price(row[0])
        if price is None:
            raise LookupError("food not found")
        self.db.execute(
            "UPDATE bill_items SET quantity=?, description=?, sub_total=? "
            "WHERE bill_item_id=?",
            [
                quantity,
                description[:_DESCRIPTION_LIMIT],
                self._sub_total(price, quantity),
                bill_item_id,
            ],
        )
        return True

    def remove_item(self, bill_item_id: int) -> bool:
        """Delete the item with this id."""
        self.db.execute("DELETE FROM bill_items WHERE bill_item_id=?", [bill_item_id])
        return True

    def get_item_context(self, bill_item_id: int) -> tuple[int, int] | None:
        """The (bill id, table id) an item belongs to, or None."""
        row = self.db.fetch_one(
            "SELECT bi.bill_id, b.table_id "
            "FROM bill_items bi INNER JOIN bills b ON bi.bill_id = b.bill_id "
            "WHERE bi.bill_item_id=?",
            [bill_item_id],
        )
        return (row[0], row[1]) if row is not None else None

    def list_items_by_bill(self, bill_id: int) -> list[BillItem]:
        """Every item of a bill ordered by id."""
        rows = self.db.fetch_all(
            _ITEM_QUERY + " WHERE bill_id=? ORDER BY bill_item_id", [bill_id]
        )
        return [_to_item(row) for row in rows]

    def close_bill(self, bill_id: int) -> bool:
        """Mark an open bill as paid now; a paid bill keeps its date."""
        self.db.execute(
            "UPDATE bills SET paid_date = datetime('now', 'localtime') "
            "WHERE bill_id=? AND paid_date IS NULL",
            [bill_id],
        )
        return True

    def count_items(self, bill_id: int) -> int:
        """Number of items on a bill."""
        row = self.db.fetch_one("SELECT COUNT(*) FROM bill_items WHERE bill_id=?", [bill_id])
        return int(row[0]) if row is not None else 0

    def get_all(self) -> list[Bill]:
        """Every bill ordered by id."""
        return self._query(" ORDER BY bill_id")

    def get_by_id(self, bill_id: int) -> Bill | None:
        """The bill with this id, or None."""
        row = self.db.fetch_one(_BASE_QUERY + " WHERE bill_id = ?", [bill_id])
        return _to_bill(row) if row is not None else None

    def search_by_table_number(self, table_number: int) -> list[Bill]:
        """Bills of this table; all of them when the number is not positive."""
        if table_number <= 0:
            return self.get_all()
        return self._safe_query(
            "search_by_table_number", " WHERE table_id = ?", [table_number]
        )

    def search_by_date_range(self, start_date: str, end_date: str) -> list[Bill]:
        """Bills paid between the two dates; all of them when either is empty."""
        if not start_date or not end_date:
            return self.get_all()
        return self._safe_query(
            "search_by_date_range",
            " WHERE paid_date BETWEEN ? AND ?",
            [start_date[:_DATE_LIMIT], end_date[:_DATE_LIMIT]],
        )

    def search_by_status(self, is_paid: bool) -> list[Bill]:
        """Paid bills, or open ones."""
        condition = " WHERE paid_date IS NOT NULL" if is_paid else " WHERE paid_date IS NULL"
        return self._safe_query("search_by_status", condition)

    def search_by_price_range(self, min_price: float, max_price: float) -> list[Bill]:
        """Bills whose total lies between the two bounds, both included."""
        return self._safe_query(
            "search_by_price_range",
            " WHERE total_price BETWEEN ? AND ?",
            [min_price, max_price],
        )

    def get_all_sorted_by_bill_id(self, ascending: bool = True) -> list[Bill]:
        """Every bill ordered by id."""
        return self._safe_query(
            "get_all_sorted_by_bill_id", order_by_clause("bill_id", ascending)
        )

    def get_all_sorted_by_table_number(self, ascending: bool = True) -> list[Bill]:
        """Every bill ordered by table."""
        return self._safe_query(
            "get_all_sorted_by_table_number", order_by_clause("table_id", ascending)
        )

    def get_all_sorted_by_total_price(self, ascending: bool = True) -> list[Bill]:
        """Every bill ordered by total."""
        return self._safe_query(
            "get_all_sorted_by_total_price", order_by_clause("total_price", ascending)
        )

    def get_all_sorted_by_paid_date(self, ascending: bool = True) -> list[Bill]:
        """Every bill ordered by payment date."""
        return self._safe_query(
            "get_all_sorted_by_paid_date", order_by_clause("paid_date", ascending)
        )