"""
Design (storage.py)
- Purpose: Keep student records on disk, one row per record (SQLite).
- Inputs: Path (from get_records_path()), Student objects, row ids.
- Outputs: list of (row_id, Student) on load; row ids / affected counts on writes.
- Side effects: Reads/writes the database file. Every failure is raised as StorageError.
- Thread-safety: Call from main thread only; each call opens its own connection.
"""

import os
import sqlite3
import sys
from contextlib import closing
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from .config import APP_DIR_NAME, DATA_DIR_ENV, RECORDS_FILENAME, UNREADABLE_SUFFIX
from .errors import StorageError
from .models import Student

# sqlite3 raises OverflowError for ints outside 64 bits, ValueError for bad values
_WRITE_ERRORS = (OSError, sqlite3.Error, OverflowError, ValueError)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS students (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    roll_number INTEGER NOT NULL,
    grade TEXT NOT NULL,
    email TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_students_roll ON students (roll_number);
"""


def _source_root() -> Optional[Path]:
    """Project root when running from a source checkout, else None (installed package)."""
    root = Path(__file__).resolve().parent.parent
    if (root / "pyproject.toml").exists():
        return root
    return None


def _user_data_dir() -> Path:
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_DIR_NAME
    xdg = os.environ.get("XDG_DATA_HOME")
    base = Path(xdg) if xdg else Path.home() / ".local" / "share"
    return base / APP_DIR_NAME


def get_records_path() -> Path:
    """
    Resolve path for students.db. ROSTER_DATA_DIR wins; otherwise prefer the app data
    dir on Windows so it survives reinstalls. A frozen exe keeps the file next to itself,
    a source checkout next to the project; an installed package uses the per-user data dir.
    """
    override = os.environ.get(DATA_DIR_ENV)
    if override:
        return Path(override) / RECORDS_FILENAME
    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        if appdata:
            base = Path(appdata) / APP_DIR_NAME
            try:
                base.mkdir(parents=True, exist_ok=True)
                return base / RECORDS_FILENAME
            except OSError:
                pass
    if getattr(sys, "frozen", False) and hasattr(sys, "_MEIPASS"):
        return Path(sys.executable).parent / RECORDS_FILENAME
    root = _source_root()
    if root is not None:
        return root / RECORDS_FILENAME
    return _user_data_dir() / RECORDS_FILENAME


def set_aside(path: Path) -> Optional[Path]:
    """
    Rename an unreadable record file out of the way (students.db.unreadable, .unreadable1, ...)
    so a fresh one can be created. Returns the new location, or None when there was no file.
    """
    if not path.exists():
        return None
    target = path.with_name(path.name + UNREADABLE_SUFFIX)
    n = 0
    while target.exists():
        n += 1
        target = path.with_name(f"{path.name}{UNREADABLE_SUFFIX}{n}")
    try:
        path.rename(target)
    except OSError as e:
        raise StorageError(f"Could not move {path} aside: {e}") from e
    return target


def _connect(path: Path) -> sqlite3.Connection:
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    try:
        conn.executescript(_SCHEMA)
    except sqlite3.Error:
        conn.close()
        raise
    return conn


def _row_values(student: Student) -> Tuple[str, int, str, str]:
    return (student.name, int(student.roll_number), student.grade, student.email)


def load_students(path: Path) -> List[Tuple[int, Student]]:
    """
    Load all records in insertion order. Raises FileNotFoundError when the file
    does not exist yet, StorageError when it cannot be read or decoded.
    """
    if not path.exists():
        raise FileNotFoundError(str(path))
    try:
        with closing(_connect(path)) as conn:
            rows = conn.execute(
                "SELECT id, name, roll_number, grade, email FROM students ORDER BY id"
            ).fetchall()
    except (OSError, sqlite3.Error) as e:
        raise StorageError(f"Could not read {path}: {e}") from e

    records: List[Tuple[int, Student]] = []
    for row_id, name, roll_number, grade, email in rows:
        try:
            student = Student(
                name=str(name),
                roll_number=int(roll_number),
                grade=str(grade),
                email=str(email),
            )
        except (TypeError, ValueError) as e:
            raise StorageError(f"Bad record {row_id} in {path}: {e}") from e
        records.append((row_id, student))
    return records


def insert_student(path: Path, student: Student) -> int:
    """Append one record and return its row id."""
    try:
        with closing(_connect(path)) as conn, conn:
            cur = conn.execute(
                "INSERT INTO students (name, roll_number, grade, email) VALUES (?, ?, ?, ?)",
                _row_values(student),
            )
            return cur.lastrowid
    except _WRITE_ERRORS as e:
        raise StorageError(f"Could not write {path}: {e}") from e


def delete_students(path: Path, roll_number: int) -> int:
    """Delete every record with this roll number; returns the number of rows removed."""
    try:
        with closing(_connect(path)) as conn, conn:
            cur = conn.execute("DELETE FROM students WHERE roll_number = ?", (int(roll_number),))
            return cur.rowcount
    except _WRITE_ERRORS as e:
        raise StorageError(f"Could not write {path}: {e}") from e


def replace_student(path: Path, row_id: int, student: Student) -> None:
    """Overwrite every field of the record stored under row_id."""
    try:
        with closing(_connect(path)) as conn, conn:
            cur = conn.execute(
                "UPDATE students SET name = ?, roll_number = ?, grade = ?, email = ? WHERE id = ?",
                _row_values(student) + (row_id,),
            )
            if cur.rowcount != 1:
                raise StorageError(f"Record {row_id} is missing from {path}")
    except _WRITE_ERRORS as e:
        raise StorageError(f"Could not write {path}: {e}") from e


def save_students(path: Path, students: Iterable[Student]) -> List[int]:
    """
    Replace the whole table with the given records (single transaction).
    Returns the new row ids in the same order.
    """
    try:
        with closing(_connect(path)) as conn, conn:
            conn.execute("DELETE FROM students")
            row_ids = []
            for s in students:
                cur = conn.execute(
                    "INSERT INTO students (name, roll_number, grade, email) VALUES (?, ?, ?, ?)",
                    _row_values(s),
                )
                row_ids.append(cur.lastrowid)
            return row_ids
    except _WRITE_ERRORS as e:
        raise StorageError(f"Could not write {path}: {e}") from e
