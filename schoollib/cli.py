"""Command-line entry point: the student's diary and the librarian's tools."""

from __future__ import annotations

import argparse
import sqlite3
import sys
from contextlib import closing

from schoollib import diary, logbook, users

DEFAULT_DATABASE = "arm.db"
SAVED_MESSAGE = "Изменения успешно сохранены."
CONNECT_ERROR = "При подключении базы данных произошла ошибка: "


def _cell(value) -> str:
    return "" if value is None else str(value)


def _print_table(headers, rows) -> None:
    print("\t".join(headers))
    for row in rows:
        print("\t".join(_cell(value) for value in row))


def _run_student(connection: sqlite3.Connection, args: argparse.Namespace) -> int:
    entries = diary.load_reading_log(connection, args.user_id)
    _print_table(diary.HEADERS, (entry.as_row() for entry in entries))
    return 0


def _user_row(index: int, user: users.User) -> tuple:
    return (
        index,
        user.role,
        user.login,
        user.password,
        user.first_name,
        user.last_name,
        user.school_class,
    )


def _run_users(connection: sqlite3.Connection, args: argparse.Namespace) -> int:
    table = users.UserTable(connection)
    _print_table(
        ("#", *table.headers()),
        (_user_row(index, user) for index, user in enumerate(table.rows())),
    )
    return 0


def _run_add(connection: sqlite3.Connection, args: argparse.Namespace) -> int:
    table = users.UserTable(connection)
    user = table.add(
        args.role,
        args.login,
        args.password,
        args.first_name,
        args.last_name,
        args.school_class,
    )
    print(user.id)
    return 0


def _run_remove(connection: sqlite3.Connection, args: argparse.Namespace) -> int:
    table = users.UserTable(connection)
    table.remove(args.row)
    return 0


def _selected_user(connection: sqlite3.Connection, row: int) -> int:
    table = users.UserTable(connection)
    table.select_row(row)
    return table.selected_user_id()


def _log_headers() -> tuple[str, ...]:
    return ("#", *logbook.HEADERS.values())


def _log_row(index: int, record: logbook.LogRecord) -> tuple:
    return (
        index,
        record.book_name,
        record.assigned_date,
        record.due_date,
        record.status,
        record.date_read,
    )


def _run_log(connection: sqlite3.Connection, args: argparse.Namespace) -> int:
    editor = logbook.ReadingLogEditor(connection, _selected_user(connection, args.row))
    _print_table(
        _log_headers(),
        (_log_row(index, record) for index, record in enumerate(editor.records())),
    )
    return 0


def _run_log_add(connection: sqlite3.Connection, args: argparse.Namespace) -> int:
    editor = logbook.ReadingLogEditor(connection, _selected_user(connection, args.row))
    new_row = editor.add_row()
    fields = {
        "book_id": args.book,
        "assigned_date": args.assigned,
        "due_date": args.due,
        "status": args.status,
        "date_read": args.read,
    }
    for field, value in fields.items():
        if value is not None:
            editor.set_field(new_row, field, value)
    editor.submit_all()
    print(SAVED_MESSAGE)
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schoollib", description="School library reading diary."
    )
    parser.add_argument(
        "--db", default=DEFAULT_DATABASE, help="path of the SQLite database"
    )
    roles = parser.add_subparsers(dest="role", required=True)

    student = roles.add_parser("student", help="show a student's reading diary")
    student.add_argument("user_id", type=int)
    student.set_defaults(handler=_run_student)

    librarian = roles.add_parser("librarian", help="manage students and reading logs")
    actions = librarian.add_subparsers(dest="action", required=True)

    listing = actions.add_parser("users", help="list every user except librarians")
    listing.set_defaults(handler=_run_users)

    add = actions.add_parser("add", help="add a user")
    for name in ("role", "login", "password", "first_name", "last_name", "school_class"):
        add.add_argument(name)
    add.set_defaults(handler=_run_add)

    remove = actions.add_parser("remove", help="remove the user shown at ROW")
    remove.add_argument("row", type=int)
    remove.set_defaults(handler=_run_remove)

    log = actions.add_parser("log", help="show the reading log of the user at ROW")
    log.add_argument("row", type=int)
    log.set_defaults(handler=_run_log)

    log_add = actions.add_parser("log-add", help="add a reading-log entry")
    log_add.add_argument("row", type=int)
    log_add.add_argument("--book", type=int)
    log_add.add_argument("--assigned")
    log_add.add_argument("--due")
    log_add.add_argument("--status")
    log_add.add_argument("--read")
    log_add.set_defaults(handler=_run_log_add)

    return parser


def main(argv=None) -> int:
    """Run the command line; returns the exit status."""
    args = _build_parser().parse_args(argv)
    try:
        connection = users.open_database(args.db)
    except sqlite3.Error as exc:
        print(CONNECT_ERROR + str(exc), file=sys.stderr)
        return 1
    with closing(connection):
        try:
            return args.handler(connection, args)
        except users.NoSelectionError as exc:
            print(f"Ошибка: {exc}", file=sys.stderr)
        except IndexError as exc:
            print(f"Ошибка: {exc}", file=sys.stderr)
        except logbook.SaveError as exc:
            print(f"Ошибка: {exc}", file=sys.stderr)
        except sqlite3.Error as exc:
            print(f"Ошибка: {exc}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())