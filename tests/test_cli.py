import sqlite3

import pytest

from schoollib import cli, diary, logbook, users


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "library.db"
    connection = sqlite3.connect(path)
    connection.executescript(
        """
        CREATE TABLE users (
            id INTEGER PRIMARY KEY, role TEXT, login TEXT, password TEXT,
            first_name TEXT, last_name TEXT, class TEXT
        );
        CREATE TABLE books (id INTEGER PRIMARY KEY, name TEXT);
        CREATE TABLE reading_logs (
            id INTEGER PRIMARY KEY, user_id INTEGER, book_id INTEGER NOT NULL,
            assigned_date TEXT, due_date TEXT, status TEXT, date_read TEXT
        );
        """
    )
    password = "password"
    connection.executemany(
        "INSERT INTO users (role, login, password, first_name, last_name, class) "
        "VALUES (?, ?, ?, ?, ?, ?)",
        [
            ("библиотекарь", "keeper", password, "Anna", "Smith", None),
            ("ученик", "pupil", password, "Ivan", "Petrov", "5A"),
        ],
    )
    connection.executemany(
        "INSERT INTO books (id, name) VALUES (?, ?)",
        [(1, "War and Peace"), (2, "Dead Souls")],
    )
    connection.execute(
        "INSERT INTO reading_logs (user_id, book_id, assigned_date, due_date, status, date_read) "
        "VALUES (2, 1, '2023-09-01', '2023-09-15', 'read', NULL)"
    )
    connection.commit()
    connection.close()
    return str(path)


def _connect(path):
    return sqlite3.connect(path)


def test_student_prints_diary(db_path, capsys):
    assert cli.main(["--db", db_path, "student", "2"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "\t".join(diary.HEADERS)
    with _connect(db_path) as connection:
        entries = diary.load_reading_log(connection, 2)
    assert lines[1:] == ["\t".join(entry.as_row()) for entry in entries]
    assert "01.09.2023" in lines[1]


def test_student_without_entries_prints_only_headers(db_path, capsys):
    assert cli.main(["--db", db_path, "student", "1"]) == 0
    assert capsys.readouterr().out.splitlines() == ["\t".join(diary.HEADERS)]


def test_users_hides_librarians(db_path, capsys):
    assert cli.main(["--db", db_path, "librarian", "users"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "\t".join(("#", *users.HEADERS))
    assert len(lines) == 2
    assert "pupil" in lines[1]
    assert all("keeper" not in line for line in lines)


def test_add_user_appears_in_table(db_path, capsys):
    password = "password"
    code = cli.main(
        ["--db", db_path, "librarian", "add", "ученик", "reader", password, "Olga", "Ivanova", "6B"]
    )
    assert code == 0
    new_id = int(capsys.readouterr().out.strip())
    with _connect(db_path) as connection:
        rows = users.UserTable(connection).rows()
    assert [user.login for user in rows] == ["pupil", "reader"]
    assert rows[-1].id == new_id
    assert rows[-1].school_class == "6B"


def test_remove_user(db_path):
    assert cli.main(["--db", db_path, "librarian", "remove", "0"]) == 0
    with _connect(db_path) as connection:
        assert users.UserTable(connection).rows() == []


def test_remove_out_of_range_fails(db_path, capsys):
    assert cli.main(["--db", db_path, "librarian", "remove", "5"]) == 1
    assert "Ошибка" in capsys.readouterr().err
    with _connect(db_path) as connection:
        assert len(users.UserTable(connection).rows()) == 1


def test_log_shows_selected_users_records(db_path, capsys):
    assert cli.main(["--db", db_path, "librarian", "log", "0"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "\t".join(("#", *logbook.HEADERS.values()))
    assert len(lines) == 2
    assert "War and Peace" in lines[1]


def test_log_add_saves_record(db_path, capsys):
    code = cli.main(
        [
            "--db", db_path, "librarian", "log-add", "0",
            "--book", "2", "--assigned", "2023-10-01", "--status", "assigned",
        ]
    )
    assert code == 0
    assert capsys.readouterr().out.strip() == cli.SAVED_MESSAGE
    with _connect(db_path) as connection:
        records = logbook.ReadingLogEditor(connection, 2).records()
    assert len(records) == 2
    added = records[-1]
    assert added.book_id == 2
    assert added.book_name == "Dead Souls"
    assert added.assigned_date == "2023-10-01"
    assert added.status == "assigned"
    assert added.date_read is None


def test_log_add_without_book_reports_save_error(db_path, capsys):
    assert cli.main(["--db", db_path, "librarian", "log-add", "0", "--status", "x"]) == 1
    assert "Не удалось сохранить изменения" in capsys.readouterr().err
    with _connect(db_path) as connection:
        assert len(logbook.ReadingLogEditor(connection, 2).records()) == 1


def test_log_for_missing_row_fails(db_path, capsys):
    assert cli.main(["--db", db_path, "librarian", "log", "3"]) == 1
    assert "Ошибка" in capsys.readouterr().err


def test_missing_table_reports_error(tmp_path, capsys):
    empty = str(tmp_path / "empty.db")
    assert cli.main(["--db", empty, "librarian", "users"]) == 1
    assert "users" in capsys.readouterr().err


def test_unusable_database_reports_connect_error(tmp_path, capsys):
    assert cli.main(["--db", str(tmp_path), "student", "1"]) == 1
    assert capsys.readouterr().err.startswith(cli.CONNECT_ERROR)


def test_role_is_required():
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--db", "unused.db"])
    assert excinfo.value.code == 2