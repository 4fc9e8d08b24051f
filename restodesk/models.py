"""Plain records for the restaurant domain and the outcome of checked operations."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Bill:
    """A bill opened for a table; ``paid_date`` is empty while the bill is open."""

    id: int = 0
    table_id: int = 0
    total_price: float = 0.0
    paid_date: str = ""  # yyyy-mm-dd hh:mm:ss


@dataclass
class BillItem:
    """One ordered dish on a bill."""

    id: int = 0
    bill_id: int = 0
    food_id: int = 0
    quantity: int = 0
    description: str = ""
    sub_total: float = 0.0


@dataclass
class Category:
    """A menu category."""

    id: int = 0
    name: str = ""


@dataclass
class Food:
    """A dish on the menu; ``category_id`` is 0 when it has no category."""

    id: int = 0
    name: str = ""
    category_id: int = 0
    category_name: str = ""
    price: float = 0.0


@dataclass
class Table:
    """A dining table; ``status_id`` is 0 when free and 1 when occupied."""

    id: int = 0
    number: int = 0
    capacity: int = 0
    status_id: int = 0


@dataclass
class User:
    """A staff account; ``role_id`` 1 is an administrator, 0 a regular employee."""

    id: int = 0
    user_name: str = ""
    password: str = ""
    full_name: str = ""
    phone_number: str = ""
    birth: str = ""  # yyyy-mm-dd
    gender_id: int = 0
    role_id: int = 0


@dataclass
class Result:
    """Outcome of a checked operation with a message for the user."""

    ok: bool = False
    message: str = ""

    def __bool__(self) -> bool:
        return self.ok