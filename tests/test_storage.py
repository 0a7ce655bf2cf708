"""Tests for the SQLite storage layer."""

from __future__ import annotations

import sqlite3

import pytest
from notebook_export.storage import DB_FILENAME, Storage, StorageError


@pytest.fixture
def storage(tmp_path) -> Storage:
    storage = Storage(tmp_path / DB_FILENAME)
    storage.initialize()
    return storage


def test_create_note_persists_content_and_tags(tmp_path, storage) -> None:
    note = storage.create_note("Captured", "Body", ["til", "python"])

    assert note.id
    assert note.tags == ("til", "python")
    assert note.created_at == note.updated_at

    conn = sqlite3.connect(tmp_path / DB_FILENAME)
    row = conn.execute("SELECT title, body FROM notes").fetchone()
    tags = [r[0] for r in conn.execute("SELECT name FROM tags ORDER BY id")]
    conn.close()

    assert row == ("Captured", "Body")
    assert tags == ["til", "python"]


def test_create_note_rejects_empty_content(storage) -> None:
    with pytest.raises(StorageError) as exc_info:
        storage.create_note("  ", "\n")
    assert "empty" in str(exc_info.value)


def test_create_note_rejects_empty_tag(storage) -> None:
    with pytest.raises(StorageError):
        storage.create_note("Title", "Body", ["  "])
    assert storage.count_notes() == 0


def test_all_notes_and_tags_follow_store_order(storage) -> None:
    first = storage.create_note("First", tags=["b"])
    second = storage.create_note("Second", tags=["a", "b"])
    storage.create_note("Third")

    notes = storage.all_notes()
    assert [note.title for note in notes] == ["First", "Second", "Third"]
    assert notes[1].tags == ("a", "b")
    assert notes[2].tags == ()
    assert storage.all_tags() == ["b", "a"]
    assert storage.fetch_note(second.id) == notes[1]
    assert storage.fetch_note(first.id).tags == ("b",)


def test_repeated_tags_are_attached_once(storage) -> None:
    note = storage.create_note("Note", tags=["work", " work ", "home"])
    assert note.tags == ("work", "home")


def test_delete_note(storage) -> None:
    note = storage.create_note("Gone", tags=["x"])
    storage.delete_note(note.id)

    assert storage.count_notes() == 0
    with pytest.raises(StorageError):
        storage.fetch_note(note.id)
    with pytest.raises(StorageError):
        storage.delete_note(note.id)


def test_preferences_round_trip(storage) -> None:
    assert storage.get_preference("last_dir") == ""
    assert storage.get_preference("last_dir", "fallback") == "fallback"

    storage.set_preference("last_dir", "/tmp/a")
    storage.set_preference("last_dir", "/tmp/b")
    assert storage.get_preference("last_dir") == "/tmp/b"
