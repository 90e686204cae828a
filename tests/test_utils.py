# tests/test_utils.py
import pytest

from roster.errors import ValidationError
from roster.models import Student
from roster.utils import (
    apply_edits,
    build_student,
    next_sort_state,
    parse_roll_number,
    sort_students,
    student_row,
)


@pytest.mark.parametrize("raw, expected", [
    ("101", 101), ("+42", 42), ("-3", -3), (7, 7),
    ("2147483647", 2147483647), ("-2147483648", -2147483648),
])
def test_parse_roll_number(raw, expected):
    assert parse_roll_number(raw) == expected


@pytest.mark.parametrize("raw", [
    "", "abc", "1.5", None, "12a", "1_000", " 42 ", "42\n", "2147483648", "-2147483649",
    "99999999999999999999", "١٢", True, 2 ** 31,
])
def test_parse_roll_number_rejects_non_integers(raw):
    with pytest.raises(ValidationError, match="Invalid roll number."):
        parse_roll_number(raw)


def test_build_student_valid():
    s = build_student("A", "101", "B", "a@x.com")
    assert s == Student("A", 101, "B", "a@x.com")


@pytest.mark.parametrize("name, grade, email", [("", "B", "e"), ("A", "", "e"), ("A", "B", "")])
def test_build_student_requires_fields(name, grade, email):
    with pytest.raises(ValidationError, match="All fields must be filled."):
        build_student(name, "1", grade, email)


def test_build_student_checks_roll_number_first():
    with pytest.raises(ValidationError, match="Invalid roll number."):
        build_student("", "x", "", "")


def test_apply_edits_only_non_empty_fields():
    s = Student("A", 101, "B", "a@x.com")
    edited = apply_edits(s, name="", grade="C", email="")
    assert edited == Student("A", 101, "C", "a@x.com")
    # original untouched
    assert s.grade == "B"


def test_apply_edits_nothing_filled():
    s = Student("A", 101, "B", "a@x.com")
    assert apply_edits(s) == s


def test_student_row_column_order():
    assert student_row(Student("A", 101, "B", "a@x.com")) == ("A", 101, "B", "a@x.com")


def test_sort_students_by_column(sample_students):
    by_roll = sort_students(sample_students, "roll_number", "asc")
    assert [s.roll_number for s in by_roll] == [3, 7, 12]

    by_name_desc = sort_students(sample_students, "name", "desc")
    assert [s.name for s in by_name_desc] == ["Ivy Chen", "bob Marsh", "Ana Ruiz"]


def test_sort_students_unsorted_keeps_insertion_order(sample_students):
    assert sort_students(sample_students, None, None) == sample_students


def test_sort_students_unknown_column(sample_students):
    with pytest.raises(ValueError):
        sort_students(sample_students, "age", "asc")


def test_next_sort_state_cycle():
    assert next_sort_state(None, None, "name") == ("name", "asc")
    assert next_sort_state("name", "asc", "name") == ("name", "desc")
    assert next_sort_state("name", "desc", "name") == (None, None)
    assert next_sort_state("name", "desc", "grade") == ("grade", "asc")
