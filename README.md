# schoollib

A small workstation for a school library. Librarians keep a register of
pupils and record which books each pupil has been given, when they are due
and whether they have been read. Pupils can look up their own reading diary.

All data lives in one SQLite database with three tables:

- `users`: id, role, login, password, first name, last name and class
  (in that column order; the first column is the id);
- `books`: id and name;
- `reading_logs`: id, user_id, book_id, assigned_date, due_date, status and
  date_read.

Users whose role is `библиотекарь` are librarians and are never listed in
the register.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## The command line

```
schoollib [--db PATH] student USER_ID
schoollib [--db PATH] librarian users
schoollib [--db PATH] librarian add ROLE LOGIN PASSWORD FIRST_NAME LAST_NAME SCHOOL_CLASS
schoollib [--db PATH] librarian remove ROW
schoollib [--db PATH] librarian log ROW
schoollib [--db PATH] librarian log-add ROW [--book ID] [--assigned DATE] [--due DATE] [--status TEXT] [--read DATE]
```

`--db` names the database file; it defaults to `arm.db` in the current
directory.

- `student USER_ID` prints the pupil's reading diary: book, date given out,
  due date, status and date read, with dates as `dd.MM.yyyy`.
- `librarian users` lists every user except librarians. The `#` column is
  the row number that the other librarian commands take as `ROW`.
- `librarian add ...` adds a user and prints the new id.
- `librarian remove ROW` deletes the user shown at that row.
- `librarian log ROW` prints the reading log of the user at that row.
- `librarian log-add ROW ...` adds a reading-log entry for the user at that
  row, saves it and prints `Изменения успешно сохранены.`

Tables are printed as tab-separated lines under a header line. On an error
(database cannot be opened, row out of range, save failed) a message goes to
standard error and the exit status is 1.

## Using it as a library

### The pupil register

```python
from schoollib.users import open_database, UserTable, NoSelectionError

connection = open_database("library.db")
table = UserTable(connection)  # loads the rows at once

password = "password"
new_user = table.add("ученик", "ivanov", password, "Иван", "Иванов", "5А")
print(new_user.id)

for user in table.rows():
    print(user.login, user.last_name, user.school_class)

table.select_row(0)
user_id = table.selected_user_id()
```

`rows()` returns `User` records; `headers()` gives the labels of the visible
columns (the id is not among them). `select()` reloads from the database.
`remove(row)` and `select_row(row)` raise `IndexError` for a row that is not
shown. `selected_user_id()` raises `NoSelectionError` when no row has been
selected.

### A pupil's reading diary

```python
from schoollib.diary import load_reading_log, format_date

for entry in load_reading_log(connection, user_id):
    print(entry.as_row())

format_date("2024-09-01")  # '01.09.2024'
format_date("not a date")  # ''
```

Each `DiaryEntry` holds the book name, the date given out, the due date, the
status and the date read, all as display strings.

### Editing a pupil's reading log

```python
from schoollib.logbook import ReadingLogEditor, SaveError

editor = ReadingLogEditor(connection, user_id)
print(editor.book_choices())  # [(id, name), ...]

row = editor.add_row()
editor.set_field(row, "book_id", 1)
editor.set_field(row, "status", "читает")

try:
    editor.submit_all()
except SaveError as error:
    print(error.detail)
```

New rows belong to the user the editor was opened for. `set_field` accepts
`user_id`, `book_id`, `assigned_date`, `due_date`, `status` and `date_read`
(any other name raises `KeyError`). Changes stay pending until
`submit_all()` writes them in one transaction and reloads; if that fails,
`SaveError` is raised and the database is left unchanged. `select()` reloads
and drops unsaved changes. `records()` returns copies of the `LogRecord`
rows.

## What it does not do

- There are no windows; the package is a library and a command line.
- It does not check logins or passwords: anyone who can run the command
  can act as a pupil or a librarian.
- It does not create the database or its tables; they must already exist.