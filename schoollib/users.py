"""User accounts as the librarian sees and edits them."""

from __future__ import annotations

import os
import sqlite3
from dataclasses import dataclass

LIBRARIAN_ROLE = "библиотекарь"
HEADERS = ("Роль", "Логин", "Пароль", "Имя", "Фамилия", "Класс")
_COLUMN_COUNT = 7


class NoSelectionError(LookupError):
    """Raised when an action needs a selected student but none is selected."""

    def __init__(self, message: str = "Не был выбран ученик") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class User:
    """One row of the ``users`` table."""

    id: int
    role: str | None
    login: str | None
    password: str | None
    first_name: str | None
    last_name: str | None
    school_class: str | None


def _quote(identifier: str) -> str:
    return '"' + identifier.replace('"', '""') + '"'


def open_database(path) -> sqlite3.Connection:
    """Open the SQLite database at *path*, failing if it is not usable."""
    connection = sqlite3.connect(os.fspath(path))
    try:
        connection.execute("PRAGMA schema_version").fetchone()
    except sqlite3.Error:
        connection.close()
        raise
    return connection


class UserTable:
    """Every user except librarians, with a current-row selection."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection
        self._columns = self._load_columns()
        self._rows: list[User] = []
        self._current: int | None = None
        self.select()

    def _load_columns(self) -> list[str]:
        info = self._connection.execute("PRAGMA table_info(users)").fetchall()
        if not info:
            raise sqlite3.OperationalError("no such table: users")
        columns = [column[1] for column in info]
        if len(columns) < _COLUMN_COUNT:
            raise sqlite3.OperationalError(
                f"table users has {len(columns)} columns, expected {_COLUMN_COUNT}"
            )
        return columns[:_COLUMN_COUNT]

    def select(self) -> None:
        """Reload the rows from the database."""
        columns = ", ".join(_quote(name) for name in self._columns)
        cursor = self._connection.execute(
            f"SELECT {columns} FROM users WHERE role != ? "
            f"ORDER BY {_quote(self._columns[0])}",
            (LIBRARIAN_ROLE,),
        )
        self._rows = [User(*row) for row in cursor]
        if self._current is not None and self._current >= len(self._rows):
            self._current = None

    def rows(self) -> list[User]:
        return list(self._rows)

    def headers(self) -> tuple[str, ...]:
        """Labels of the visible columns; the id column is hidden."""
        return HEADERS

    def add(self, role, login, password, first_name, last_name, school_class) -> User:
        """Insert a new user and reload the table."""
        columns = ", ".join(_quote(name) for name in self._columns[1:])
        values = (role, login, password, first_name, last_name, school_class)
        with self._connection:
            cursor = self._connection.execute(
                f"INSERT INTO users ({columns}) VALUES (?, ?, ?, ?, ?, ?)", values
            )
        self.select()
        return User(cursor.lastrowid, *values)

    def _check_row(self, row: int) -> None:
        if not 0 <= row < len(self._rows):
            raise IndexError(f"row {row} out of range")

    def remove(self, row: int) -> None:
        """Delete the user shown at *row* and reload the table."""
        self._check_row(row)
        user_id = self._rows[row].id
        with self._connection:
            self._connection.execute(
                f"DELETE FROM users WHERE {_quote(self._columns[0])} = ?", (user_id,)
            )
        self.select()

    def select_row(self, row: int) -> None:
        self._check_row(row)
        self._current = row

    def selected_user_id(self) -> int:
        """Id of the user in the selected row."""
        if self._current is None:
            raise NoSelectionError()
        return self._rows[self._current].id