"""HTML export implementation for the built-in plugin."""

from __future__ import annotations

from html import escape
from pathlib import Path

from jinja2 import (
    BaseLoader,
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    TemplateNotFound,
    select_autoescape,
)
from markupsafe import Markup

from notebook_export.exporters import ExportError, SingleNoteExporter
from notebook_export.storage import NoteSnapshot
from notebook_export.tags import user_tags

NOTE_TEMPLATE = "note.html"


def _render_body_html(body: str) -> Markup:
    paragraphs = [segment.strip() for segment in body.split("\n\n") if segment.strip()]
    if not paragraphs:
        return Markup("<p>(No content)</p>")
    html_parts: list[str] = []
    for para in paragraphs:
        escaped = escape(para).replace("\n", "<br />")
        html_parts.append(f"<p>{escaped}</p>")
    return Markup("\n".join(html_parts))


class HtmlExporter(SingleNoteExporter):
    """Render each note into a standalone HTML page."""

    format_id = "html"
    file_suffix = "html"
    pretty_name = "HTML"

    def __init__(
        self, templates_dir: Path | None = None, *, site_title: str = ""
    ) -> None:
        self.templates_dir = templates_dir
        self.site_title = site_title
        loaders: list[BaseLoader] = []
        if templates_dir is not None:
            loaders.append(FileSystemLoader(str(templates_dir)))
        loaders.append(PackageLoader("notebook_export.plugins.html", "templates"))
        self._env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def export_single_note(self, note: NoteSnapshot, output_folder: Path) -> Path:
        try:
            template = self._env.get_template(NOTE_TEMPLATE)
        except TemplateNotFound as exc:  # pragma: no cover - bundled template
            raise ExportError(f"Template '{exc.name}' not found") from exc

        note_title = note.title or f"Note {note.id}"
        markup = template.render(
            site_title=self.site_title,
            title=note_title,
            created_at=note.created_at.isoformat(" ", "seconds"),
            created_at_iso=note.created_at.isoformat(),
            updated_at=note.updated_at.isoformat(" ", "seconds"),
            updated_at_iso=note.updated_at.isoformat(),
            tags=user_tags(note.tags),
            body_html=_render_body_html(note.body or ""),
        )

        file_path = self.target_path(note, output_folder)
        file_path.write_text(markup, encoding="utf-8")
        return file_path


__all__ = ["HtmlExporter"]
