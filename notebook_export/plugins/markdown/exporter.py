"""Markdown export implementation for the built-in plugin."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from notebook_export.exporters import SingleNoteExporter
from notebook_export.storage import NoteSnapshot
from notebook_export.tags import user_tags


class MarkdownExporter(SingleNoteExporter):
    """Render a note into a Markdown file with YAML front matter."""

    format_id = "markdown"
    file_suffix = "md"
    pretty_name = "Markdown"

    def __init__(self, *, front_matter: bool = True) -> None:
        self.front_matter = front_matter

    def export_single_note(self, note: NoteSnapshot, output_folder: Path) -> Path:
        file_path = self.target_path(note, output_folder)
        body = (note.body or "").rstrip() + "\n"

        if not self.front_matter:
            file_path.write_text(f"# {note.title}\n\n{body}", encoding="utf-8")
            return file_path

        metadata: dict[str, Any] = {
            "id": note.id,
            "title": note.title or "",
            "date": note.created_at.isoformat(),
            "last_edited": note.updated_at.isoformat(),
            "tags": list(user_tags(note.tags)),
        }

        yaml_text = yaml.safe_dump(
            metadata,
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        ).strip()

        front_matter = f"---\n{yaml_text}\n---\n\n"
        file_path.write_text(front_matter + body, encoding="utf-8")
        return file_path


__all__ = ["MarkdownExporter"]
