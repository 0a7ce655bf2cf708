"""Export services for notebook-export.

:class:`ExportOrchestrator` walks notebooks, lays out the output folders and
hands every non-template note to a :class:`SingleNoteExporter`. The first error
aborts the whole run; folders and files written before it are left in place.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from ..config import NotebookExportConfig
from ..exporters import (
    DirectoryCreateError,
    ExportError,
    ExportFailure,
    ExportState,
    SingleNoteExporter,
    classify_error,
)
from ..notebooks import (
    AnyNotebook,
    NotebookResolver,
    NoteStore,
    is_all_notes,
    is_unfiled_notes,
)
from ..plugins import (
    ExportContribution,
    PluginRegistrationError,
    load_export_contributions,
    reset_plugin_manager_cache,
)
from ..storage import NoteSnapshot, Storage
from ..tags import is_template
from ..utils.paths import sanitize_folder_name, sanitize_path

logger = logging.getLogger(__name__)

LAST_DIRECTORY_PREFERENCE = "export_last_directory"


@dataclass(slots=True, frozen=True)
class ExportSummary:
    """Outcome of a successful export run."""

    output_folder: Path
    notes_exported: int
    notebooks_processed: int


@dataclass(slots=True)
class _ExportRun:
    root: Path
    folder: Path
    state: ExportState = ExportState.NOT_STARTED
    notes_exported: int = 0
    notebooks_processed: int = 0

    def summary(self) -> ExportSummary:
        return ExportSummary(
            output_folder=self.root,
            notes_exported=self.notes_exported,
            notebooks_processed=self.notebooks_processed,
        )


class ExportOrchestrator:
    """Export notes from ``store`` through ``exporter``, organised by notebook."""

    def __init__(
        self,
        store: NoteStore,
        exporter: SingleNoteExporter,
        *,
        resolver: NotebookResolver | None = None,
    ) -> None:
        self.store = store
        self.exporter = exporter
        self.resolver = resolver if resolver is not None else NotebookResolver(store)

    def export_all(self, output_root: Path | str) -> ExportSummary:
        """Export every notebook into its own subfolder and unfiled notes at the root."""

        logger.info("Exporting all notes to %s", self.exporter.pretty_name)
        run = self._start(output_root)

        with self._guard(run):
            self._create_directory(run, run.root)

            for notebook in self.resolver.notebooks():
                logger.debug("Exporting notebook %s", notebook.name)
                run.folder = run.root / sanitize_folder_name(notebook.normalized_name)
                self._create_directory(run, run.folder)
                run.notes_exported += self.export_notes_in_list(
                    self.resolver.notes_in_notebook(notebook), run.folder
                )
                run.notebooks_processed += 1

            logger.debug("Exporting unfiled notes")
            run.folder = run.root
            run.notes_exported += self.export_notes_in_list(
                self.resolver.list_unfiled_notes(), run.root
            )
            run.state = ExportState.NOTES_EXPORTED

        return self._finish(run)

    def export_notebook(
        self, notebook: AnyNotebook, output_root: Path | str
    ) -> ExportSummary:
        """Export a single notebook (or pseudo-notebook) directly into ``output_root``."""

        if is_all_notes(notebook):
            logger.info("This notebook includes all notes, exporting everything")
            return self.export_all(output_root)

        logger.info(
            "Exporting notebook %s to %s", notebook.name, self.exporter.pretty_name
        )
        run = self._start(output_root)

        with self._guard(run):
            self._create_directory(run, run.root)
            if is_unfiled_notes(notebook):
                notes = self.resolver.list_unfiled_notes()
            else:
                notes = self.resolver.notes_in_notebook(notebook)
                run.notebooks_processed = 1
            run.notes_exported = self.export_notes_in_list(notes, run.root)
            run.state = ExportState.NOTES_EXPORTED

        return self._finish(run)

    def export_notes_in_list(
        self, notes: Iterable[NoteSnapshot], output_folder: Path | str
    ) -> int:
        """Export the non-template notes of ``notes`` into ``output_folder``.

        Errors raised by the exporter propagate unchanged.
        """

        folder = Path(output_folder)
        count = 0
        for note in notes:
            if is_template(note):
                logger.debug("Skipping template note %s", note.id)
                continue
            self.exporter.export_single_note(note, folder)
            count += 1
        return count

    def list_unfiled_notes(self) -> list[NoteSnapshot]:
        return self.resolver.list_unfiled_notes()

    def _start(self, output_root: Path | str) -> _ExportRun:
        root = Path(sanitize_path(str(output_root)))
        return _ExportRun(root=root, folder=root)

    def _finish(self, run: _ExportRun) -> ExportSummary:
        run.state = ExportState.SUCCEEDED
        logger.info(
            "Exported %d notes from %d notebooks to %s",
            run.notes_exported,
            run.notebooks_processed,
            run.root,
        )
        return run.summary()

    def _create_directory(self, run: _ExportRun, path: Path) -> None:
        logger.debug("Creating an export folder in: %s", path)
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DirectoryCreateError(
                classify_error(exc), path, reached=run.state
            ) from exc
        if path == run.root:
            run.state = ExportState.FOLDER_CREATED

    @contextmanager
    def _guard(self, run: _ExportRun) -> Iterator[None]:
        try:
            yield
        except ExportFailure as exc:
            run.state = ExportState.FAILED
            logger.error("Could not export: %s", exc)
            raise
        except Exception as exc:
            reached = run.state
            run.state = ExportState.FAILED
            failure = ExportFailure(classify_error(exc), run.folder, reached=reached)
            logger.error("Could not export: %s (%s)", failure, exc)
            raise failure from exc


class ExportServiceError(ExportError):
    """Raised when an export format cannot be resolved."""


def clear_export_registry_cache() -> None:
    """Reset cached exporter discovery (primarily for testing)."""

    reset_plugin_manager_cache()


def _load_export_registry(
    config: NotebookExportConfig,
) -> dict[str, ExportContribution]:
    try:
        return load_export_contributions(config)
    except PluginRegistrationError as exc:  # pragma: no cover - defensive
        raise ExportServiceError(str(exc)) from exc


def get_export_format_choices(config: NotebookExportConfig) -> list[str]:
    """Return the list of available export format identifiers."""

    registry = _load_export_registry(config)
    return sorted(registry.keys())


def get_export_format_descriptions(
    config: NotebookExportConfig,
) -> list[tuple[str, str]]:
    """Return tuples of ``(format_id, description)`` for available exporters."""

    registry = _load_export_registry(config)
    return sorted(
        ((fmt, contrib.description) for fmt, contrib in registry.items()),
        key=lambda item: item[0],
    )


def resolve_exporter(
    config: NotebookExportConfig, export_format: str | None = None
) -> SingleNoteExporter:
    """Return the exporter registered for ``export_format`` (or the default)."""

    formats = _load_export_registry(config)
    wanted = (export_format or config.default_format).lower()

    contribution = formats.get(wanted)
    if contribution is None:
        available = ", ".join(sorted(formats))
        if available:
            raise ExportServiceError(
                f"Unknown export format: {wanted}. Available: {available}."
            )
        raise ExportServiceError("No export plugins are available.")
    return contribution.exporter


def default_destination(storage: Storage, default_name: str) -> Path:
    """Suggest ``<last used directory or $HOME>/<default_name>``."""

    last_dir = storage.get_preference(LAST_DIRECTORY_PREFERENCE)
    base = Path(last_dir) if last_dir else Path.home()
    return base / default_name


def remember_destination(storage: Storage, output_folder: Path) -> None:
    """Store the parent of ``output_folder`` as the next default location."""

    parent = Path(output_folder).expanduser().absolute().parent
    storage.set_preference(LAST_DIRECTORY_PREFERENCE, str(parent))


def default_folder_name(notebook: AnyNotebook, exporter: SingleNoteExporter) -> str:
    """Folder name suggested when no destination is given."""

    if is_all_notes(notebook):
        return f"All Notes {exporter.pretty_name} Export"
    if is_unfiled_notes(notebook):
        return "Unfiled Notes"
    return sanitize_folder_name(notebook.normalized_name)


__all__ = [
    "ExportOrchestrator",
    "ExportServiceError",
    "ExportSummary",
    "LAST_DIRECTORY_PREFERENCE",
    "clear_export_registry_cache",
    "default_destination",
    "default_folder_name",
    "get_export_format_choices",
    "get_export_format_descriptions",
    "remember_destination",
    "resolve_exporter",
]
