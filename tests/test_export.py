"""Tests for the export orchestration: folder layout, filtering and failures."""

from __future__ import annotations

from pathlib import Path

import pytest
from notebook_export.exporters import (
    DirectoryCreateError,
    ExportError,
    ExportErrorKind,
    ExportFailure,
    ExportState,
    SingleNoteExporter,
    classify_error,
)
from notebook_export.notebooks import ALL_NOTES, UNFILED_NOTES
from notebook_export.services.export import ExportOrchestrator
from notebook_export.storage import DB_FILENAME, NoteSnapshot, Storage
from notebook_export.tags import TEMPLATE_TAG, notebook_tag


class RecordingExporter(SingleNoteExporter):
    format_id = "recording"
    file_suffix = "txt"
    pretty_name = "Recording"

    def __init__(self, fail_on: str | None = None, error: Exception | None = None):
        self.calls: list[tuple[str, Path]] = []
        self.fail_on = fail_on
        self.error = error

    def export_single_note(self, note: NoteSnapshot, output_folder: Path) -> Path:
        if note.title == self.fail_on and self.error is not None:
            raise self.error
        path = self.target_path(note, output_folder)
        path.write_text(note.body, encoding="utf-8")
        self.calls.append((note.title, Path(output_folder)))
        return path


@pytest.fixture
def storage(tmp_path) -> Storage:
    storage = Storage(tmp_path / DB_FILENAME)
    storage.initialize()
    storage.create_note("A", "alpha", [notebook_tag("Work")])
    storage.create_note("B", "beta", [notebook_tag("Work")])
    storage.create_note("C", "gamma", [notebook_tag("Home")])
    storage.create_note("D", "delta")
    storage.create_note("E", "template", [notebook_tag("Work"), TEMPLATE_TAG])
    return storage


def _files(root: Path) -> list[str]:
    return sorted(str(p.relative_to(root)) for p in root.rglob("*") if p.is_file())


def test_export_all_mirrors_notebooks(tmp_path, storage) -> None:
    exporter = RecordingExporter()
    out = tmp_path / "out"

    summary = ExportOrchestrator(storage, exporter).export_all(out)

    assert (out / "Work").is_dir()
    assert (out / "Home").is_dir()
    assert _files(out) == ["D.txt", "Home/C.txt", "Work/A.txt", "Work/B.txt"]
    assert (out / "Work" / "A.txt").read_text(encoding="utf-8") == "alpha"
    assert summary.output_folder == out
    assert summary.notes_exported == 4
    assert summary.notebooks_processed == 2


def test_template_notes_are_never_exported(tmp_path, storage) -> None:
    exporter = RecordingExporter()
    out = tmp_path / "out"

    ExportOrchestrator(storage, exporter).export_all(out)

    assert list(out.rglob("E.*")) == []
    assert "E" not in [title for title, _ in exporter.calls]


def test_unfiled_pseudo_notebook_exports_into_root(tmp_path, storage) -> None:
    out = tmp_path / "x"

    summary = ExportOrchestrator(storage, RecordingExporter()).export_notebook(
        UNFILED_NOTES, out
    )

    assert _files(out) == ["D.txt"]
    assert [p.name for p in out.iterdir()] == ["D.txt"]
    assert summary.notebooks_processed == 0


def test_all_notes_pseudo_notebook_delegates_to_export_all(tmp_path, storage) -> None:
    out = tmp_path / "all"

    summary = ExportOrchestrator(storage, RecordingExporter()).export_notebook(
        ALL_NOTES, out
    )

    assert _files(out) == ["D.txt", "Home/C.txt", "Work/A.txt", "Work/B.txt"]
    assert summary.notebooks_processed == 2


def test_ordinary_notebook_exports_without_extra_subfolder(tmp_path, storage) -> None:
    orchestrator = ExportOrchestrator(storage, RecordingExporter())
    work = orchestrator.resolver.find_notebook("Work")
    out = tmp_path / "work-export"

    summary = orchestrator.export_notebook(work, out)

    assert _files(out) == ["A.txt", "B.txt"]
    assert summary.notes_exported == 2
    assert summary.notebooks_processed == 1


def test_note_with_two_notebook_tags_is_exported_once(tmp_path, storage) -> None:
    storage.create_note("F", "both", [notebook_tag("Home"), notebook_tag("Work")])
    out = tmp_path / "out"

    ExportOrchestrator(storage, RecordingExporter()).export_all(out)

    assert [str(p.relative_to(out)) for p in out.rglob("F.txt")] == ["Home/F.txt"]


def test_output_root_and_notebook_folders_are_sanitized(tmp_path, storage) -> None:
    storage.create_note("G", "odd", [notebook_tag("a/b")])
    out = tmp_path / "out<1>"

    summary = ExportOrchestrator(storage, RecordingExporter()).export_all(out)

    expected_root = tmp_path / "out_1_"
    assert summary.output_folder == expected_root
    assert (expected_root / "a_b" / "G.txt").is_file()


def test_export_notes_in_list_skips_templates_and_keeps_order(
    tmp_path, storage
) -> None:
    exporter = RecordingExporter()
    orchestrator = ExportOrchestrator(storage, exporter)
    target = tmp_path / "flat"
    target.mkdir()

    count = orchestrator.export_notes_in_list(storage.all_notes(), target)

    assert count == 4
    assert [title for title, _ in exporter.calls] == ["A", "B", "C", "D"]


def test_export_notes_in_list_propagates_exporter_errors(tmp_path, storage) -> None:
    exporter = RecordingExporter(fail_on="B", error=RuntimeError("boom"))
    orchestrator = ExportOrchestrator(storage, exporter)

    with pytest.raises(RuntimeError, match="boom"):
        orchestrator.export_notes_in_list(storage.all_notes(), tmp_path)


def test_list_unfiled_notes(storage) -> None:
    orchestrator = ExportOrchestrator(storage, RecordingExporter())
    assert [note.title for note in orchestrator.list_unfiled_notes()] == ["D"]


def test_permission_error_on_root_aborts_early(tmp_path, storage, monkeypatch) -> None:
    exporter = RecordingExporter()
    out = tmp_path / "denied"
    original_mkdir = Path.mkdir

    def guarded_mkdir(self, *args, **kwargs):
        if self == out:
            raise PermissionError(13, "Permission denied", str(self))
        return original_mkdir(self, *args, **kwargs)

    monkeypatch.setattr(Path, "mkdir", guarded_mkdir)

    with pytest.raises(DirectoryCreateError) as exc_info:
        ExportOrchestrator(storage, exporter).export_all(out)

    failure = exc_info.value
    assert failure.kind is ExportErrorKind.ACCESS_DENIED
    assert failure.output_folder == out
    assert failure.reached is ExportState.NOT_STARTED
    assert "Access denied." in str(failure)
    assert exporter.calls == []
    assert not out.exists()


def test_root_below_a_file_reports_missing_folder(tmp_path, storage) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    out = blocker / "out"

    with pytest.raises(ExportFailure) as exc_info:
        ExportOrchestrator(storage, RecordingExporter()).export_all(out)

    assert exc_info.value.kind is ExportErrorKind.FOLDER_MISSING
    assert exc_info.value.output_folder == out


def test_first_note_failure_aborts_run(tmp_path, storage) -> None:
    exporter = RecordingExporter(fail_on="B", error=FileNotFoundError("gone"))
    out = tmp_path / "out"

    with pytest.raises(ExportFailure) as exc_info:
        ExportOrchestrator(storage, exporter).export_all(out)

    failure = exc_info.value
    assert failure.kind is ExportErrorKind.FOLDER_MISSING
    assert failure.output_folder == out / "Work"
    assert failure.reached is ExportState.FOLDER_CREATED
    assert isinstance(failure.__cause__, FileNotFoundError)
    assert [title for title, _ in exporter.calls] == ["A"]
    # Partial output stays on disk; later notebooks are never reached.
    assert (out / "Work" / "A.txt").is_file()
    assert not (out / "Home").exists()


def test_unclassified_exporter_error_is_unknown(tmp_path, storage) -> None:
    exporter = RecordingExporter(fail_on="D", error=ValueError("bad"))

    with pytest.raises(ExportFailure) as exc_info:
        ExportOrchestrator(storage, exporter).export_notebook(
            UNFILED_NOTES, tmp_path / "x"
        )

    assert exc_info.value.kind is ExportErrorKind.UNKNOWN
    assert exc_info.value.output_folder == tmp_path / "x"


def test_classify_error_follows_cause_chain() -> None:
    try:
        try:
            raise PermissionError("denied")
        except PermissionError as exc:
            raise ExportError("wrapped") from exc
    except ExportError as wrapped:
        assert classify_error(wrapped) is ExportErrorKind.ACCESS_DENIED

    assert classify_error(NotADirectoryError()) is ExportErrorKind.FOLDER_MISSING
    assert classify_error(OSError("disk")) is ExportErrorKind.UNKNOWN


def test_target_path_falls_back_to_note_id(tmp_path, storage) -> None:
    note = storage.create_note("", "only a body")
    exporter = RecordingExporter()

    assert exporter.target_path(note, tmp_path) == tmp_path / f"note-{note.id}.txt"
    dotted = storage.create_note("v1.2/notes", "x")
    assert exporter.target_path(dotted, tmp_path).name == "v1_2_notes.txt"


def test_tags_naming_the_same_notebook_export_together(tmp_path) -> None:
    storage = Storage(tmp_path / DB_FILENAME)
    storage.initialize()
    storage.create_note("A", "a", ["system:notebook:Road Trip"])
    storage.create_note("B", "b", ["system:notebook:Road  Trip"])
    storage.create_note("C", "c", ["system:notebook:work"])
    storage.create_note("D", "d", ["system:notebook:Work"])
    orchestrator = ExportOrchestrator(storage, RecordingExporter())

    road_trip = orchestrator.resolver.find_notebook("Road Trip")
    summary = orchestrator.export_notebook(road_trip, tmp_path / "trip")
    assert _files(tmp_path / "trip") == ["A.txt", "B.txt"]
    assert summary.notes_exported == 2

    work = orchestrator.resolver.find_notebook("Work")
    orchestrator.export_notebook(work, tmp_path / "work")
    assert _files(tmp_path / "work") == ["C.txt", "D.txt"]

    out = tmp_path / "all"
    summary = orchestrator.export_all(out)
    assert _files(out) == [
        "Road Trip/A.txt",
        "Road Trip/B.txt",
        "work/C.txt",
        "work/D.txt",
    ]
    assert summary.notebooks_processed == 2
    assert summary.notes_exported == 4
