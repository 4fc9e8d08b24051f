"""Restaurant back office over SQLite: tables, menu, staff and bill storage, bill rules and list paging."""

__version__ = "0.1.0"