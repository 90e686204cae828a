"""
Design (actions.py)
- Purpose: The four form actions (Add, Edit, Delete, Search) without any Tk widgets,
           so AppUI only gathers input and renders the returned Feedback.
- Inputs: Repo, raw form text, values of the selected table row (or None).
- Outputs: Feedback describing what the window should show and whether to clear the form.
- Side effects: Mutates Repo.
- Thread-safety: Main thread only (same as Repo).
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from .config import TABLE_COLUMNS
from .errors import ValidationError
from .repository import Repo, StoreResult
from .utils import MSG_INVALID_ROLL, apply_edits, build_student, parse_roll_number

MSG_NOT_FOUND = "Student not found."

_ROLL_INDEX = [key for key, _ in TABLE_COLUMNS].index("roll_number")


@dataclass(frozen=True)
class Feedback:
    """
    Design (Feedback)
    - message: text for a message box ("" = show nothing).
    - is_error: show it as an error rather than information.
    - clear_form: empty the four entry boxes.
    - result: StoreResult of the store call, None when the store was not written.
    """
    message: str = ""
    is_error: bool = False
    clear_form: bool = False
    result: Optional[StoreResult] = None

    @property
    def save_failed(self) -> bool:
        return self.result is not None and not self.result.ok


def _error(e: ValidationError) -> Feedback:
    return Feedback(message=str(e), is_error=True)


def _after_write(result: StoreResult) -> Feedback:
    # the form keeps its text when the write failed so nothing typed is lost
    return Feedback(clear_form=result.ok, result=result)


def selected_roll_number(row_values: Optional[Sequence[object]]) -> int:
    """Roll number from the values of a table row (TABLE_COLUMNS order)."""
    if not row_values or len(row_values) <= _ROLL_INDEX:
        raise ValidationError(MSG_INVALID_ROLL)
    return parse_roll_number(row_values[_ROLL_INDEX])


def add_record(repo: Repo, name: str, roll_number: str, grade: str, email: str) -> Feedback:
    try:
        student = build_student(name, roll_number, grade, email)
    except ValidationError as e:
        return _error(e)
    return _after_write(repo.add(student))


def edit_record(repo: Repo, row_values: Optional[Sequence[object]], name: str, grade: str, email: str) -> Feedback:
    """
    Re-parse the selected row's roll number, look the record up and overwrite the
    non-empty fields. The roll number box plays no part. With duplicate roll numbers
    the first record holding that number is the one edited.
    """
    if row_values is None:
        return Feedback(message="Please select a student to edit.")
    try:
        roll = selected_roll_number(row_values)
    except ValidationError as e:
        return _error(e)
    student = repo.search(roll)
    if student is None:
        return Feedback()
    return _after_write(repo.update(apply_edits(student, name=name, grade=grade, email=email)))


def delete_record(repo: Repo, row_values: Optional[Sequence[object]]) -> Feedback:
    """Remove every record sharing the selected row's roll number."""
    if row_values is None:
        return Feedback(message="Please select a student to delete.")
    try:
        roll = selected_roll_number(row_values)
    except ValidationError as e:
        return _error(e)
    return Feedback(result=repo.remove(roll))


def search_record(repo: Repo, raw: Optional[str]) -> Feedback:
    """raw is the prompt's text; None means the prompt was cancelled."""
    if raw is None:
        return Feedback()
    try:
        roll = parse_roll_number(raw)
    except ValidationError as e:
        return _error(e)
    student = repo.search(roll)
    return Feedback(message=str(student) if student is not None else MSG_NOT_FOUND)
