"""A student's read-only reading diary."""

from __future__ import annotations

import sqlite3
from dataclasses import astuple, dataclass
from datetime import date, datetime

HEADERS = ("Книга", "Дата выдачи", "Дата возврата", "Статус", "Дата прочтения")

_QUERY = (
    "SELECT b.name, rl.assigned_date, rl.due_date, rl.status, rl.date_read "
    "FROM reading_logs rl "
    "JOIN books b ON rl.book_id = b.id "
    "WHERE rl.user_id = :userId "
    "ORDER BY rl.rowid"
)


def _parse_date(value) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    if not isinstance(value, str):
        return None
    text = value.strip()
    if len(text) > 10 and text[10] not in "T ":
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def format_date(value) -> str:
    """Render a stored date as dd.MM.yyyy, or an empty string if it is not a date."""
    parsed = _parse_date(value)
    if parsed is None:
        return ""
    return f"{parsed.day:02d}.{parsed.month:02d}.{parsed.year:04d}"


def _text(value) -> str:
    return "" if value is None else str(value)


@dataclass(frozen=True)
class DiaryEntry:
    """One line of the diary, ready for display."""

    book: str
    assigned_date: str
    due_date: str
    status: str
    date_read: str

    def as_row(self) -> tuple[str, ...]:
        return astuple(self)


def load_reading_log(connection: sqlite3.Connection, user_id: int) -> list[DiaryEntry]:
    """Every reading-log entry of *user_id*, with book names and formatted dates."""
    cursor = connection.execute(_QUERY, {"userId": user_id})
    return [
        DiaryEntry(
            book=_text(name),
            assigned_date=format_date(assigned),
            due_date=format_date(due),
            status=_text(status),
            date_read=format_date(read),
        )
        for name, assigned, due, status, read in cursor
    ]