# tests/conftest.py
import pytest
from typing import List

from roster.models import Student
from roster.repository import Repo


@pytest.fixture
def sample_students() -> List[Student]:
    """Small roster used across tests (insertion order matters)."""
    return [
        Student("Ivy Chen", 7, "A", "ivy@example.com"),
        Student("bob Marsh", 3, "C", "bob@example.com"),
        Student("Ana Ruiz", 12, "B+", "ana@example.com"),
    ]


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "students.db"


@pytest.fixture
def repo(db_path) -> Repo:
    r = Repo(db_path)
    r.load()
    return r
