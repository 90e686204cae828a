# tests/test_storage.py
import pytest

from roster import storage
from roster.config import DATA_DIR_ENV, RECORDS_FILENAME
from roster.errors import StorageError
from roster.models import Student


def test_load_missing_file_raises_file_not_found(db_path):
    with pytest.raises(FileNotFoundError):
        storage.load_students(db_path)
    assert not db_path.exists()


def test_save_then_load_roundtrip(sample_students, db_path):
    """Writing N records and reading them back keeps order and contents."""
    row_ids = storage.save_students(db_path, sample_students)
    assert len(row_ids) == len(sample_students)

    loaded = storage.load_students(db_path)
    assert [rid for rid, _ in loaded] == row_ids
    assert [s for _, s in loaded] == sample_students


def test_save_replaces_previous_contents(sample_students, db_path):
    storage.save_students(db_path, sample_students)
    storage.save_students(db_path, sample_students[:1])
    assert [s for _, s in storage.load_students(db_path)] == sample_students[:1]


def test_insert_delete_replace(db_path):
    first = storage.insert_student(db_path, Student("A", 1, "B", "a@x.com"))
    storage.insert_student(db_path, Student("Dup", 1, "C", "d@x.com"))
    other = storage.insert_student(db_path, Student("Z", 2, "A", "z@x.com"))

    storage.replace_student(db_path, other, Student("Zed", 2, "A+", "z@x.com"))
    assert storage.delete_students(db_path, 1) == 2
    assert storage.delete_students(db_path, 99) == 0

    loaded = storage.load_students(db_path)
    assert loaded == [(other, Student("Zed", 2, "A+", "z@x.com"))]
    assert first != other


def test_replace_missing_row_is_an_error(db_path):
    storage.insert_student(db_path, Student("A", 1, "B", "a@x.com"))
    with pytest.raises(StorageError):
        storage.replace_student(db_path, 999, Student("A", 1, "B", "a@x.com"))


def test_corrupt_file_raises_storage_error(db_path):
    db_path.write_bytes(b"this is not a database file " * 20)
    with pytest.raises(StorageError):
        storage.load_students(db_path)


def test_unwritable_location_raises_storage_error(tmp_path):
    # a directory where the database file should be
    target = tmp_path / "students.db"
    target.mkdir()
    with pytest.raises(StorageError):
        storage.insert_student(target, Student("A", 1, "B", "a@x.com"))


def test_records_path_env_override(monkeypatch, tmp_path):
    monkeypatch.setenv(DATA_DIR_ENV, str(tmp_path))
    assert storage.get_records_path() == tmp_path / RECORDS_FILENAME


def test_records_path_default_name(monkeypatch):
    monkeypatch.delenv(DATA_DIR_ENV, raising=False)
    assert storage.get_records_path().name == RECORDS_FILENAME


def test_out_of_range_roll_number_raises_storage_error(db_path):
    # sqlite3 cannot bind ints wider than 64 bits
    with pytest.raises(StorageError):
        storage.insert_student(db_path, Student("A", 10 ** 20, "B", "a@x.com"))
    with pytest.raises(StorageError):
        storage.delete_students(db_path, 10 ** 20)


def test_set_aside_renames_file(db_path):
    db_path.write_bytes(b"junk")
    moved = storage.set_aside(db_path)
    assert moved == db_path.with_name("students.db.unreadable")
    assert moved.read_bytes() == b"junk"
    assert not db_path.exists()

    db_path.write_bytes(b"more junk")
    assert storage.set_aside(db_path) == db_path.with_name("students.db.unreadable1")


def test_set_aside_without_file(db_path):
    assert storage.set_aside(db_path) is None


def test_records_path_installed_uses_user_data_dir(monkeypatch, tmp_path):
    monkeypatch.delenv(DATA_DIR_ENV, raising=False)
    monkeypatch.setattr(storage.sys, "platform", "linux")
    monkeypatch.setattr(storage, "_source_root", lambda: None)
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
    assert storage.get_records_path() == tmp_path / "Student Roster" / RECORDS_FILENAME


def test_records_path_installed_without_xdg(monkeypatch, tmp_path):
    monkeypatch.delenv(DATA_DIR_ENV, raising=False)
    monkeypatch.delenv("XDG_DATA_HOME", raising=False)
    monkeypatch.setattr(storage.sys, "platform", "linux")
    monkeypatch.setattr(storage, "_source_root", lambda: None)
    monkeypatch.setattr(storage.Path, "home", classmethod(lambda cls: tmp_path))
    expected = tmp_path / ".local" / "share" / "Student Roster" / RECORDS_FILENAME
    assert storage.get_records_path() == expected


def test_records_path_source_checkout(monkeypatch, tmp_path):
    monkeypatch.delenv(DATA_DIR_ENV, raising=False)
    monkeypatch.setattr(storage.sys, "platform", "linux")
    monkeypatch.setattr(storage, "_source_root", lambda: tmp_path)
    assert storage.get_records_path() == tmp_path / RECORDS_FILENAME
