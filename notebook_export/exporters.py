"""Exporter contract and export error types."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path

from .storage import NoteSnapshot
from .utils.paths import sanitize_title


class ExportError(RuntimeError):
    """Raised when exporting notes fails."""


class ExportErrorKind(Enum):
    """Classification of a failed export run."""

    ACCESS_DENIED = "Access denied."
    FOLDER_MISSING = "Folder does not exist."
    UNKNOWN = "Unknown error."

    @property
    def message(self) -> str:
        return self.value


class ExportState(Enum):
    NOT_STARTED = "not-started"
    FOLDER_CREATED = "folder-created"
    NOTES_EXPORTED = "notes-exported"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class ExportFailure(ExportError):
    """An export run aborted; carries the folder being written at the time."""

    def __init__(
        self,
        kind: ExportErrorKind,
        output_folder: Path,
        *,
        reached: ExportState = ExportState.NOT_STARTED,
    ) -> None:
        super().__init__(
            f'Could not save the files in "{output_folder}": {kind.message}'
        )
        self.kind = kind
        self.output_folder = output_folder
        self.reached = reached


class DirectoryCreateError(ExportFailure):
    """Raised when an output directory cannot be created."""


def classify_error(exc: BaseException) -> ExportErrorKind:
    """Map an exception (or the first classifiable cause in its chain) to a kind."""

    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        if isinstance(current, ExportFailure):
            return current.kind
        if isinstance(current, PermissionError):
            return ExportErrorKind.ACCESS_DENIED
        if isinstance(current, (FileNotFoundError, NotADirectoryError)):
            return ExportErrorKind.FOLDER_MISSING
        seen.add(id(current))
        current = current.__cause__
    return ExportErrorKind.UNKNOWN


class SingleNoteExporter(ABC):
    """Converts one note to a target format and writes it into a folder.

    Subclasses set ``format_id`` (registry key), ``file_suffix`` (without a
    leading dot) and ``pretty_name`` (shown to users).
    """

    format_id: str = ""
    file_suffix: str = ""
    pretty_name: str = ""

    def target_path(self, note: NoteSnapshot, output_folder: Path) -> Path:
        """Return the file a note is written to inside ``output_folder``."""

        stem = sanitize_title(note.title.strip()) or f"note-{note.id}"
        return Path(output_folder) / f"{stem}.{self.file_suffix}"

    @abstractmethod
    def export_single_note(self, note: NoteSnapshot, output_folder: Path) -> Path:
        """Write ``note`` into ``output_folder`` and return the file written."""


__all__ = [
    "DirectoryCreateError",
    "ExportError",
    "ExportErrorKind",
    "ExportFailure",
    "ExportState",
    "SingleNoteExporter",
    "classify_error",
]
