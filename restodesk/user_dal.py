"""Storage access for staff accounts."""

from __future__ import annotations

import logging

from .database import Database, DatabaseError, like_pattern, order_by_clause
from .models import User

_log = logging.getLogger(__name__)

_BASE_QUERY = (
    "SELECT user_id, user_name, password, full_name, phone_number, birth, "
    "gender_id, role_id FROM users"
)

# Longest text each column accepts on write.
_LOGIN_LIMIT = 49
_USER_NAME_LIMIT = 63
_PASSWORD_LIMIT = 63
_FULL_NAME_LIMIT = 127
_PHONE_LIMIT = 31
_BIRTH_LIMIT = 31

# Longest LIKE pattern each search accepts.
_USER_NAME_PATTERN_LIMIT = 127
_FULL_NAME_PATTERN_LIMIT = 255
_PHONE_PATTERN_LIMIT = 63


def _to_user(row: tuple) -> User:
    user_id, user_name, password, full_name, phone, birth, gender_id, role_id = row
    return User(
        id=user_id,
        user_name=user_name or "",
        password=password or "",
        full_name=full_name or "",
        phone_number=phone or "",
        birth=birth or "",
        gender_id=gender_id if gender_id is not None else 0,
        role_id=role_id if role_id is not None else 0,
    )


def _user_values(user: User) -> list:
    return [
        user.user_name[:_USER_NAME_LIMIT],
        user.password[:_PASSWORD_LIMIT],
        user.full_name[:_FULL_NAME_LIMIT],
        user.phone_number[:_PHONE_LIMIT],
        user.birth[:_BIRTH_LIMIT],
        user.gender_id,
        user.role_id,
    ]


class UserDAL:
    """Reads and writes rows of the users table."""

    def __init__(self, db: Database) -> None:
        self.db = db

    def _query(self, suffix: str, params=()) -> list[User]:
        return [_to_user(row) for row in self.db.fetch_all(_BASE_QUERY + suffix, params)]

    def _safe_query(self, label: str, suffix: str, params=()) -> list[User]:
        try:
            return self._query(suffix, params)
        except DatabaseError as exc:
            _log.warning("%s error: %s", label, exc)
            return []

    def login(self, user_name: str, password: str) -> User | None:
        """The account matching both credentials, or None."""
        row = self.db.fetch_one(
            _BASE_QUERY + " WHERE user_name = ? AND password = ?",
            [user_name[:_LOGIN_LIMIT], password[:_LOGIN_LIMIT]],
        )
        return _to_user(row) if row is not None else None

    def get_all(self) -> list[User]:
        """Every regular employee (role 0) ordered by id."""
        return self._query(" WHERE role_id = 0 ORDER BY user_id")

    def get_by_id(self, user_id: int) -> User | None:
        """The account with this id, or None."""
        row = self.db.fetch_one(_BASE_QUERY + " WHERE user_id = ?", [user_id])
        return _to_user(row) if row is not None else None

    def insert(self, user: User) -> int:
        """Store a new account and return its id."""
        return self.db.execute(
            "INSERT INTO users (user_name, password, full_name, phone_number, birth, "
            "gender_id, role_id) VALUES (?, ?, ?, ?, ?, ?, ?)",
            _user_values(user),
        )

    def update(self, user: User) -> bool:
        """Store every field of the account with the given id."""
        self.db.execute(
            "UPDATE users SET user_name=?, password=?, full_name=?, phone_number=?, "
            "birth=?, gender_id=?, role_id=? WHERE user_id=?",
            _user_values(user) + [user.id],
        )
        return True

    def remove(self, user_id: int) -> bool:
        """Delete the account with this id."""
        self.db.execute("DELETE FROM users WHERE user_id = ?", [user_id])
        return True

    def search_by_user_name(self, keyword: str) -> list[User]:
        """Accounts whose login name contains the keyword; employees for an empty one."""
        if not keyword:
            return self.get_all()
        pattern = like_pattern(keyword)[:_USER_NAME_PATTERN_LIMIT]
        return self._safe_query("search_by_user_name", " WHERE user_name LIKE ?", [pattern])

    def search_by_full_name(self, keyword: str) -> list[User]:
        """Accounts whose full name contains the keyword; employees for an empty one."""
        if not keyword:
            return self.get_all()
        pattern = like_pattern(keyword)[:_FULL_NAME_PATTERN_LIMIT]
        return self._safe_query("search_by_full_name", " WHERE full_name LIKE ?", [pattern])

    def search_by_phone(self, keyword: str) -> list[User]:
        """Accounts whose phone number contains the keyword; employees for an empty one."""
        if not keyword:
            return self.get_all()
        pattern = like_pattern(keyword)[:_PHONE_PATTERN_LIMIT]
        return self._safe_query("search_by_phone", " WHERE phone_number LIKE ?", [pattern])

    def search_by_gender_id(self, gender_id: int) -> list[User]:
        """Accounts with this gender; employees unless the gender is 0 or 1."""
        if gender_id not in (0, 1):
            return self.get_all()
        return self._safe_query("search_by_gender_id", " WHERE gender_id = ?", [gender_id])

    def search_by_role_id(self, role_id: int) -> list[User]:
        """Accounts with this role."""
        return self._safe_query("search_by_role_id", " WHERE role_id = ?", [role_id])

    def search_by_birth_year(self, year: int) -> list[User]:
        """Accounts born in this year; employees when the year is not positive."""
        if year <= 0:
            return self.get_all()
        return self._safe_query(
            "search_by_birth_year",
            " WHERE CAST(substr(birth, 1, 4) AS INTEGER) = ?",
            [year],
        )

    def get_all_sorted_by_user_name(self, ascending: bool = True) -> list[User]:
        """Every account ordered by login name."""
        return self._safe_query(
            "get_all_sorted_by_user_name", order_by_clause("user_name", ascending)
        )

    def get_all_sorted_by_full_name(self, ascending: bool = True) -> list[User]:
        """Every account ordered by full name."""
        return self._safe_query(
            "get_all_sorted_by_full_name", order_by_clause("full_name", ascending)
        )

    def get_all_sorted_by_gender(self, ascending: bool = True) -> list[User]:
        """Every account ordered by gender."""
        return self._safe_query(
            "get_all_sorted_by_gender", order_by_clause("gender_id", ascending)
        )

    def get_all_sorted_by_birth(self, ascending: bool = True) -> list[User]:
        """Every account ordered by date of birth."""
        return self._safe_query(
            "get_all_sorted_by_birth", order_by_clause("birth", ascending)
        )

    def get_all_sorted_by_role(self, ascending: bool = True) -> list[User]:
        """Every account ordered by role."""
        return self._safe_query(
            "get_all_sorted_by_role", order_by_clause("role_id", ascending)
        )