"""The librarian's editable view of one student's reading log."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass, replace

EDITABLE_FIELDS = ("user_id", "book_id", "assigned_date", "due_date", "status", "date_read")

HEADERS = {
    "book_id": "Книга",
    "assigned_date": "Дата выдачи",
    "due_date": "Срок сдачи",
    "status": "Статус",
    "date_read": "Дата прочтения",
}

_SELECT = (
    "SELECT rl.id, rl.user_id, rl.book_id, b.name, rl.assigned_date, "
    "rl.due_date, rl.status, rl.date_read "
    "FROM reading_logs rl JOIN books b ON rl.book_id = b.id "
    "WHERE rl.user_id = ? ORDER BY rl.id"
)


class SaveError(Exception):
    """Raised when pending changes could not be written to the database."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Не удалось сохранить изменения в базе данных: {detail}")
        self.detail = detail


@dataclass
class LogRecord:
    """One reading-log row; ``id`` is None until the row is saved."""

    id: int | None
    user_id: int
    book_id: int | None = None
    book_name: str | None = None
    assigned_date: str | None = None
    due_date: str | None = None
    status: str | None = None
    date_read: str | None = None


class ReadingLogEditor:
    """Reading-log rows of one user, edited in memory and saved on demand."""

    def __init__(self, connection: sqlite3.Connection, user_id: int) -> None:
        self._connection = connection
        self.user_id = user_id
        self._records: list[LogRecord] = []
        self._pending: set[int] = set()
        self.select()

    def select(self) -> None:
        """Reload the rows from the database, dropping unsaved changes."""
        cursor = self._connection.execute(_SELECT, (self.user_id,))
        self._records = [LogRecord(*row) for row in cursor]
        self._pending.clear()

    def records(self) -> list[LogRecord]:
        return [replace(record) for record in self._records]

    def book_choices(self) -> list[tuple[int, str]]:
        """Books that a row may refer to, as (id, name) pairs."""
        return list(self._connection.execute("SELECT id, name FROM books ORDER BY id"))

    def add_row(self) -> int:
        """Append an unsaved row for this user and return its index."""
        self._records.append(LogRecord(id=None, user_id=self.user_id))
        row = len(self._records) - 1
        self._pending.add(row)
        return row

    def set_field(self, row: int, field: str, value) -> None:
        """Change one field of a row; the change is kept until ``submit_all``."""
        if field not in EDITABLE_FIELDS:
            raise KeyError(field)
        if not 0 <= row < len(self._records):
            raise IndexError(f"row {row} out of range")
        record = self._records[row]
        setattr(record, field, value)
        if field == "book_id":
            found = self._connection.execute(
                "SELECT name FROM books WHERE id = ?", (value,)
            ).fetchone()
            record.book_name = found[0] if found else None
        self._pending.add(row)

    def submit_all(self) -> None:
        """Write every pending change in one transaction, then reload."""
        columns = ", ".join(EDITABLE_FIELDS)
        placeholders = ", ".join("?" for _ in EDITABLE_FIELDS)
        assignments = ", ".join(f"{name} = ?" for name in EDITABLE_FIELDS)
        try:
            with self._connection:
                for row in sorted(self._pending):
                    record = self._records[row]
                    values = tuple(getattr(record, name) for name in EDITABLE_FIELDS)
                    if record.id is None:
                        self._connection.execute(
                            f"INSERT INTO reading_logs ({columns}) VALUES ({placeholders})",
                            values,
                        )
                    else:
                        self._connection.execute(
                            f"UPDATE reading_logs SET {assignments} WHERE id = ?",
                            (*values, record.id),
                        )
        except sqlite3.Error as exc:
            raise SaveError(str(exc)) from exc
        self.select()