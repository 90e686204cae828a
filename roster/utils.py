"""
Design (utils.py)
- Purpose: Reusable form helpers: roll number parsing, add/edit validation,
           table row formatting and column sorting.
- Inputs: Raw text from the form, Student objects.
- Outputs: Students, row tuples, sorted lists.
- Side effects: None.
- Thread-safety: Stateless; safe to call from any thread.
"""

import re
from dataclasses import replace
from typing import Iterable, List, Optional, Tuple

from .config import TABLE_COLUMNS
from .errors import ValidationError
from .models import Student

MSG_INVALID_ROLL = "Invalid roll number."
MSG_MISSING_FIELDS = "All fields must be filled."

ROLL_MIN = -(2 ** 31)
ROLL_MAX = 2 ** 31 - 1
_ROLL_RE = re.compile(r"[+-]?[0-9]+")


def parse_roll_number(raw: object) -> int:
    """
    Purpose: Turn form/table text into a roll number.
    Inputs: raw (str from an Entry, or the value Treeview hands back, which may already be int).
    Outputs: int in the 32-bit signed range.
    Rules: optional sign followed by ASCII digits only; no spaces, underscores or decimals.
    Raises: ValidationError("Invalid roll number.") otherwise.
    """
    if raw is None or isinstance(raw, bool):
        raise ValidationError(MSG_INVALID_ROLL)
    if isinstance(raw, int):
        value = raw
    elif _ROLL_RE.fullmatch(str(raw)):
        value = int(str(raw))
    else:
        raise ValidationError(MSG_INVALID_ROLL)
    if not ROLL_MIN <= value <= ROLL_MAX:
        raise ValidationError(MSG_INVALID_ROLL)
    return value


def build_student(name: str, roll_number: str, grade: str, email: str) -> Student:
    """
    Purpose: Validate the Add form and build a new Student.
    Rules: roll number must be an integer; name, grade and email must be non-empty.
    """
    roll = parse_roll_number(roll_number)
    if not name or not grade or not email:
        raise ValidationError(MSG_MISSING_FIELDS)
    return Student(name=name, roll_number=roll, grade=grade, email=email)


def apply_edits(student: Student, name: str = "", grade: str = "", email: str = "") -> Student:
    """
    Purpose: Overwrite only the fields whose text box is non-empty.
    Outputs: New Student; roll number is never changed here.
    """
    changes = {}
    if name:
        changes["name"] = name
    if grade:
        changes["grade"] = grade
    if email:
        changes["email"] = email
    return replace(student, **changes)


def student_row(student: Student) -> Tuple[str, int, str, str]:
    """Values for one table row, in TABLE_COLUMNS order."""
    return tuple(getattr(student, key) for key, _ in TABLE_COLUMNS)


def sort_students(students: Iterable[Student], column: Optional[str], order: Optional[str]) -> List[Student]:
    """
    Purpose: Order students for display by a table column.
    Inputs: column key from TABLE_COLUMNS (None = insertion order), order "asc"/"desc".
    Text columns sort case-insensitively; sorting is stable.
    """
    students = list(students)
    if not column:
        return students
    keys = [key for key, _ in TABLE_COLUMNS]
    if column not in keys:
        raise ValueError(f"Unknown column: {column}")

    def key(s: Student):
        value = getattr(s, column)
        return value.casefold() if isinstance(value, str) else value

    return sorted(students, key=key, reverse=(order == "desc"))


def next_sort_state(current_column: Optional[str], current_order: Optional[str], clicked: str) -> Tuple[Optional[str], Optional[str]]:
    """Header click cycle: asc -> desc -> unsorted."""
    if current_column == clicked and current_order == "asc":
        return clicked, "desc"
    if current_column == clicked and current_order == "desc":
        return None, None
    return clicked, "asc"
