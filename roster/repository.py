"""
Design (repository.py)
- Purpose: Own the roster list behind a tiny API, so the UI never touches it directly,
           and keep the record file in step with it.
- Inputs: Student objects and roll numbers.
- Outputs: Copies of records; StoreResult for every operation that touches disk.
- Side effects: Writes the record file before changing memory; logs storage failures.
- Thread-safety: Main thread only (Tk event loop); no lock needed.
"""

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import List, Optional, Tuple

from . import storage
from .errors import StorageError
from .models import Student

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreResult:
    """
    Design (StoreResult)
    - affected: number of records added/removed/replaced/loaded.
    - error: storage failure message, None when the file is in step with memory.
    """
    affected: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class Repo:
    """
    Design (Repo)
    - State:
        _path: record file location
        _records: [(row_id, Student)] in insertion order; row_id is the storage key
        _unreadable: load() failed on an existing file; the next write moves it aside first
    - Roll numbers may repeat: search/update use the first match, remove drops all matches.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self._records: List[Tuple[int, Student]] = []
        self._unreadable = False

    @property
    def path(self) -> Path:
        return self._path

    def __len__(self) -> int:
        return len(self._records)

    # -------- startup / bulk --------

    def load(self) -> StoreResult:
        """
        Purpose: Replace the in-memory list with the contents of the record file.
        Outputs: StoreResult(affected=records loaded). A missing file is not an error.
        """
        self._records = []
        self._unreadable = False
        try:
            self._records = storage.load_students(self._path)
        except FileNotFoundError:
            log.info("No existing student data found at %s. Starting with an empty list.", self._path)
            return StoreResult()
        except StorageError as e:
            log.exception("Failed to load student records")
            self._unreadable = True
            return StoreResult(error=str(e))
        log.info("Loaded %d student records from %s", len(self._records), self._path)
        return StoreResult(affected=len(self._records))

    def persist(self) -> StoreResult:
        """
        Purpose: Rewrite the whole record file from memory.
        Side effects: Row ids are reassigned on success.
        """
        students = [s for _, s in self._records]
        error = self._recover()
        if error:
            return StoreResult(error=error)
        try:
            row_ids = storage.save_students(self._path, students)
        except StorageError as e:
            log.exception("Failed to save student records")
            return StoreResult(error=str(e))
        self._records = list(zip(row_ids, students))
        return StoreResult(affected=len(students))

    def _recover(self) -> Optional[str]:
        """
        Purpose: After a failed load, move the unreadable file aside so writes start a fresh one.
        Outputs: None when writing may proceed, else the error message.
        """
        if not self._unreadable:
            return None
        try:
            moved = storage.set_aside(self._path)
        except StorageError as e:
            log.exception("Could not move unreadable record file aside")
            return str(e)
        if moved is not None:
            log.warning("Unreadable record file moved to %s; starting a new one", moved)
        self._unreadable = False
        return None

    # -------- CRUD --------

    def add(self, student: Student) -> StoreResult:
        """Append a record. Duplicate roll numbers are accepted."""
        record = replace(student)
        error = self._recover()
        if error:
            return StoreResult(error=error)
        try:
            row_id = storage.insert_student(self._path, record)
        except StorageError as e:
            log.exception("Failed to add student %s", student.roll_number)
            return StoreResult(error=str(e))
        self._records.append((row_id, record))
        log.debug("Added student %s (row %s)", record.roll_number, row_id)
        return StoreResult(affected=1)

    def remove(self, roll_number: int) -> StoreResult:
        """Remove every record with this roll number; nothing to remove is a silent no-op."""
        if not any(s.roll_number == roll_number for _, s in self._records):
            return StoreResult()
        try:
            storage.delete_students(self._path, roll_number)
        except StorageError as e:
            log.exception("Failed to remove student %s", roll_number)
            return StoreResult(error=str(e))
        before = len(self._records)
        self._records = [(rid, s) for rid, s in self._records if s.roll_number != roll_number]
        removed = before - len(self._records)
        log.debug("Removed %d record(s) with roll number %s", removed, roll_number)
        return StoreResult(affected=removed)

    def search(self, roll_number: int) -> Optional[Student]:
        """Return a copy of the first record with this roll number, or None."""
        for _, s in self._records:
            if s.roll_number == roll_number:
                return replace(s)
        return None

    def update(self, student: Student) -> StoreResult:
        """Replace the first record with the same roll number; no match is a silent no-op."""
        for i, (row_id, s) in enumerate(self._records):
            if s.roll_number != student.roll_number:
                continue
            record = replace(student)
            try:
                storage.replace_student(self._path, row_id, record)
            except StorageError as e:
                log.exception("Failed to update student %s", student.roll_number)
                return StoreResult(error=str(e))
            self._records[i] = (row_id, record)
            log.debug("Updated student %s (row %s)", record.roll_number, row_id)
            return StoreResult(affected=1)
        return StoreResult()

    def list_all(self) -> List[Student]:
        """Copies of all records in insertion order."""
        return [replace(s) for _, s in self._records]
