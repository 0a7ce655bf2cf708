"""Peewee-backed note store for notebook-export."""

from __future__ import annotations

from collections import defaultdict
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Iterator

from peewee import (
    AutoField,
    DoesNotExist,
    ForeignKeyField,
    IntegrityError,
    Model,
    SqliteDatabase,
    TextField,
)

DB_FILENAME = "notes.sqlite3"
TABLE_NOTES = "notes"
TABLE_TAGS = "tags"
TABLE_NOTE_TAGS = "note_tags"
TABLE_PREFERENCES = "preferences"


def _utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


def _coerce_utc(dt: datetime | None) -> datetime:
    if dt is None:
        return _utc_now()
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


class StorageError(RuntimeError):
    """Raised when interacting with the notes database fails."""


@dataclass(slots=True, frozen=True)
class NoteSnapshot:
    """Read-only view of a note handed to the export pipeline."""

    id: int
    title: str
    body: str
    tags: tuple[str, ...]
    created_at: datetime
    updated_at: datetime


class UTCTextDateField(TextField):
    """Store ISO-8601 timestamps while returning timezone-aware datetimes."""

    def python_value(self, value: str | None) -> datetime | None:  # type: ignore[override]
        if value is None:
            return None
        dt = datetime.fromisoformat(value)
        return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)

    def db_value(self, value: datetime | None) -> str | None:  # type: ignore[override]
        if value is None:
            return None
        coerced = _coerce_utc(value)
        return coerced.isoformat()


class StorageDatabase(SqliteDatabase):
    """SqliteDatabase configured for per-call connection lifetimes."""

    def __init__(self, path: Path) -> None:
        super().__init__(
            str(path),
            pragmas={"foreign_keys": 1},
            check_same_thread=False,
        )


class StorageModel(Model):
    """Base model bound to the storage database."""

    class Meta:
        database = SqliteDatabase(None)


class Note(StorageModel):
    id = AutoField()
    title = TextField(null=False)
    body = TextField(default="", null=False)
    created_at = UTCTextDateField(default=_utc_now, null=False)
    updated_at = UTCTextDateField(default=_utc_now, null=False)

    class Meta:
        table_name = TABLE_NOTES


class Tag(StorageModel):
    id = AutoField()
    name = TextField(unique=True, null=False)

    class Meta:
        table_name = TABLE_TAGS


class NoteTag(StorageModel):
    """Join table; row order preserves the order tags were attached in."""

    id = AutoField()
    note = ForeignKeyField(Note, backref="note_tags", on_delete="CASCADE")
    tag = ForeignKeyField(Tag, backref="note_tags", on_delete="CASCADE")

    class Meta:
        table_name = TABLE_NOTE_TAGS
        indexes = ((("note", "tag"), True),)


class Preference(StorageModel):
    key = TextField(primary_key=True)
    value = TextField(null=False)

    class Meta:
        table_name = TABLE_PREFERENCES


MODELS = (Note, Tag, NoteTag, Preference)


class Storage:
    """High-level helper for interacting with the notes database."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._database = StorageDatabase(self.path)

    def initialize(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:  # pragma: no cover - filesystem failures are rare
            raise StorageError(f"Failed to create database directory: {exc}") from exc

        with self._binding():
            try:
                self._database.create_tables(MODELS, safe=True)
            except Exception as exc:  # pragma: no cover - defensive
                raise StorageError(f"Failed to initialize database: {exc}") from exc

    def create_note(
        self,
        title: str,
        body: str = "",
        tags: Iterable[str] | None = None,
        *,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> NoteSnapshot:
        normalized_title = title.strip()
        normalized_body = body.rstrip()
        if not (normalized_title or normalized_body):
            raise StorageError("Cannot create an empty note.")

        created = _coerce_utc(created_at)
        updated = _coerce_utc(updated_at) if updated_at is not None else created

        with self._binding():
            with self._database.atomic():
                try:
                    note = Note.create(
                        title=normalized_title,
                        body=normalized_body,
                        created_at=created,
                        updated_at=updated,
                    )
                    self._attach_tags(note, tags or ())
                except StorageError:
                    raise
                except Exception as exc:  # pragma: no cover - defensive
                    raise StorageError(f"Failed to insert note: {exc}") from exc
            return self._snapshot(note, self._tags_for([note.id])[note.id])

    def fetch_note(self, note_id: int) -> NoteSnapshot:
        with self._binding():
            note = self._get_note(note_id)
            return self._snapshot(note, self._tags_for([note.id])[note.id])

    def delete_note(self, note_id: int) -> None:
        with self._binding():
            deleted = Note.delete().where(Note.id == int(note_id)).execute()
            if deleted == 0:
                raise StorageError(f"Note '{note_id}' not found.")

    def count_notes(self) -> int:
        with self._binding():
            return Note.select().count()

    def all_notes(self) -> list[NoteSnapshot]:
        """Return every note in store order (creation order)."""

        with self._binding():
            notes = list(Note.select().order_by(Note.id))
            tags = self._tags_for([note.id for note in notes])
            return [self._snapshot(note, tags[note.id]) for note in notes]

    def all_tags(self) -> list[str]:
        """Return the tag catalog in the order tags were first created."""

        with self._binding():
            return [tag.name for tag in Tag.select().order_by(Tag.id)]

    def get_preference(self, key: str, default: str = "") -> str:
        with self._binding():
            try:
                return Preference.get_by_id(key).value
            except DoesNotExist:
                return default

    def set_preference(self, key: str, value: str) -> None:
        with self._binding():
            Preference.replace(key=key, value=value).execute()

    def _get_note(self, note_id: int) -> Note:
        try:
            return Note.get_by_id(int(note_id))
        except DoesNotExist:
            raise StorageError(f"Note '{note_id}' not found.") from None

    def _attach_tags(self, note: Note, tags: Iterable[str]) -> None:
        for raw in tags:
            name = raw.strip()
            if not name:
                raise StorageError("Tag names cannot be empty.")
            tag, _ = Tag.get_or_create(name=name)
            try:
                with self._database.atomic():
                    NoteTag.create(note=note, tag=tag)
            except IntegrityError:
                continue  # already attached

    def _tags_for(self, note_ids: list[int]) -> dict[int, tuple[str, ...]]:
        grouped: dict[int, list[str]] = defaultdict(list)
        if note_ids:
            query = (
                NoteTag.select(NoteTag.note, Tag.name)
                .join(Tag)
                .where(NoteTag.note.in_(note_ids))
                .order_by(NoteTag.id)
                .tuples()
            )
            for note_id, name in query:
                grouped[note_id].append(name)
        return {note_id: tuple(grouped.get(note_id, ())) for note_id in note_ids}

    @staticmethod
    def _snapshot(note: Note, tags: tuple[str, ...]) -> NoteSnapshot:
        return NoteSnapshot(
            id=note.id,
            title=note.title,
            body=note.body,
            tags=tags,
            created_at=note.created_at,
            updated_at=note.updated_at,
        )

    @contextmanager
    def _binding(self) -> Iterator[None]:
        with self._database.connection_context():
            with self._database.bind_ctx(MODELS):
                yield
