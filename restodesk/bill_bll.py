"""Business rules for ordering dishes on a table and paying the bill."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from .bill_dal import BillDAL
from .food_dal import FoodDAL
from .models import Bill, BillItem, Result
from .table_dal import TableDAL

_FREE = 0
_OCCUPIED = 1
_MAX_QUANTITY = 100


@dataclass
class CurrentBill:
    """The open bill of a table with its items and freshly computed total."""

    bill: Bill
    items: list[BillItem] = field(default_factory=list)
    total: float = 0.0


class BillBLL:
    """Opens, fills, edits and settles bills while keeping table status in step."""

    def __init__(self, bill_dal: BillDAL, table_dal: TableDAL, food_dal: FoodDAL) -> None:
        self.bill_dal = bill_dal
        self.table_dal = table_dal
        self.food_dal = food_dal

    def _validate_table_id(self, table_id: int) -> Result:
        if table_id <= 0:
            return Result(False, "Table ID khong hop le")
        if self.table_dal.get_by_id(table_id) is None:
            return Result(False, "Ban khong ton tai")
        return Result(True, "")

    def _validate_food_id(self, food_id: int) -> Result:
        if food_id <= 0:
            return Result(False, "Food ID khong hop le")
        if self.food_dal.get_by_id(food_id) is None:
            return Result(False, "Mon an khong ton tai")
        return Result(True, "")

    @staticmethod
    def _validate_quantity(quantity: int) -> Result:
        if quantity <= 0:
            return Result(False, "So luong phai lon hon 0")
        if quantity > _MAX_QUANTITY:
            return Result(False, "So luong qua lon (toi da 100)")
        return Result(True, "")

    @staticmethod
    def _validate_bill_item_id(bill_item_id: int) -> Result:
        if bill_item_id <= 0:
            return Result(False, "Bill Item ID khong hop le")
        return Result(True, "")

    def _set_table_status(self, table_id: int, status_id: int) -> None:
        table = self.table_dal.get_by_id(table_id)
        if table is not None:
            self.table_dal.update(replace(table, status_id=status_id))

    @staticmethod
    def _guarded(call, *args) -> list[Bill]:
        try:
            return call(*args)
        except Exception:
            return []

    def get_open_bill_by_table_id(self, table_id: int) -> Bill | None:
        """The unpaid bill of a table, or None."""
        try:
            return self.bill_dal.get_open_by_table_id(table_id)
        except Exception:
            return None

    def get_current_items_of_table(self, table_id: int) -> CurrentBill | None:
        """The open bill of a table with its items, or None when there is none."""
        try:
            bill = self.bill_dal.get_open_by_table_id(table_id)
            if bill is None:
                return None
            items = self.bill_dal.list_items_by_bill(bill.id)
            self.bill_dal.recalc_total(bill.id)
            bill = self.bill_dal.get_open_by_table_id(table_id)
            if bill is None:
                return None
            return CurrentBill(bill=bill, items=items, total=bill.total_price)
        except Exception:
            return None

    def checkout_table(self, table_id: int) -> Result:
        """Pay the open bill of a table and free the table."""
        try:
            bill = self.bill_dal.get_open_by_table_id(table_id)
            if bill is None:
                return Result(False, "Khong co bill nao dang mo")
            self.bill_dal.recalc_total(bill.id)
            self.bill_dal.close_bill(bill.id)
            self._set_table_status(table_id, _FREE)
            return Result(True, "Thanh toan thanh cong")
        except Exception as exc:
            return Result(False, f"Loi thanh toan: {exc}")

    def add_food_to_table(
        self, table_id: int, food_id: int, quantity: int, description: str
    ) -> Result:
        """Order a dish for a table, opening a bill when needed."""
        try:
            for result in (
                self._validate_table_id(table_id),
                self._validate_food_id(food_id),
                self._validate_quantity(quantity),
            ):
                if not result.ok:
                    return result
            bill = self.bill_dal.get_open_by_table_id(table_id)
            if bill is not None:
                bill_id = bill.id
            else:
                bill_id = self.bill_dal.create_for_table(table_id)
                if bill_id <= 0:
                    return Result(False, "Tao bill that bai")
            if not self.bill_dal.add_item(bill_id, food_id, quantity, description):
                return Result(False, "Them mon vao bill that bai")
            self.bill_dal.recalc_total(bill_id)
            self._set_table_status(table_id, _OCCUPIED)
            return Result(True, "Them mon vao bill thanh cong")
        except Exception as exc:
            return Result(False, f"Loi them mon: {exc}")

    def update_bill_item(self, bill_item_id: int, quantity: int, description: str) -> Result:
        """Change the quantity and note of an ordered dish."""
        try:
            for result in (
                self._validate_bill_item_id(bill_item_id),
                self._validate_quantity(quantity),
            ):
                if not result.ok:
                    return result
            if not self.bill_dal.update_item(bill_item_id, quantity, description):
                return Result(False, "Cap nhat that bai")
            context = self.bill_dal.get_item_context(bill_item_id)
            if context is not None:
                self.bill_dal.recalc_total(context[0])
            return Result(True, "Cap nhat thanh cong")
        except Exception as exc:
            return Result(False, f"Loi cap nhat: {exc}")

    def delete_bill_item(self, bill_item_id: int) -> Result:
        """Remove an ordered dish; an emptied bill is dropped and its table freed."""
        try:
            result = self._validate_bill_item_id(bill_item_id)
            if not result.ok:
                return result
            context = self.bill_dal.get_item_context(bill_item_id)
            if context is None:
                return Result(False, "Khong tim thay de xoa")
            bill_id, table_id = context
            if not self.bill_dal.remove_item(bill_item_id):
                return Result(False, "Xoa that bai")
            if self.bill_dal.count_items(bill_id) <= 0:
                self.bill_dal.delete_bill(bill_id)
                self._set_table_status(table_id, _FREE)
            else:
                self.bill_dal.recalc_total(bill_id)
            return Result(True, "Xoa thanh cong")
        except Exception as exc:
            return Result(False, f"Loi xoa mon: {exc}")

    def get_all(self) -> list[Bill]:
        """Every bill."""
        return self._guarded(self.bill_dal.get_all)

    def get_by_id(self, bill_id: int) -> Bill | None:
        """The bill with this id, or None."""
        if bill_id <= 0:
            return None
        try:
            return self.bill_dal.get_by_id(bill_id)
        except Exception:
            return None

    def search_by_table_number(self, table_number: int) -> list[Bill]:
        """Bills of a table."""
        return self._guarded(self.bill_dal.search_by_table_number, table_number)

    def search_by_date_range(self, start_date: str, end_date: str) -> list[Bill]:
        """Bills paid between the two dates."""
        return self._guarded(self.bill_dal.search_by_date_range, start_date, end_date)

    def search_by_status(self, is_paid: bool) -> list[Bill]:
        """Paid bills, or open ones."""
        return self._guarded(self.bill_dal.search_by_status, is_paid)

    def search_by_price_range(self, min_price: float, max_price: float) -> list[Bill]:
        """Bills with a total in range; nothing for a negative or reversed range."""
        if min_price < 0 or max_price < 0 or min_price > max_price:
            return []
        return self._guarded(self.bill_dal.search_by_price_range, min_price, max_price)

    def get_all_sorted_by_bill_id(self, ascending: bool = True) -> list[Bill]:
        """Every bill ordered by id."""
        return self._guarded(self.bill_dal.get_all_sorted_by_bill_id, ascending)

    def get_all_sorted_by_table_number(self, ascending: bool = True) -> list[Bill]:
        """Every bill ordered by table."""
        return self._guarded(self.bill_dal.get_all_sorted_by_table_number, ascending)

    def get_all_sorted_by_total_price(self, ascending: bool = True) -> list[Bill]:
        """Every bill ordered by total."""
        return self._guarded(self.bill_dal.get_all_sorted_by_total_price, ascending)

    def get_all_sorted_by_paid_date(self, ascending: bool = True) -> list[Bill]:
        """Every bill ordered by payment date."""
        return self._guarded(self.bill_dal.get_all_sorted_by_paid_date, ascending)