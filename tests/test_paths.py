from __future__ import annotations

import pytest
from notebook_export.utils.paths import (
    INVALID_PATH_CHARS,
    sanitize_folder_name,
    sanitize_path,
    sanitize_title,
)

SAMPLES = [
    "",
    "plain",
    "/tmp/out",
    'a"b<c>d|e',
    "tab\there\nnewline\x00nul",
    "a/b\\c.d",
    "..",
    "Ünïcödé notes/2024.txt",
]


@pytest.mark.parametrize("value", SAMPLES)
def test_sanitizers_are_idempotent(value: str) -> None:
    assert sanitize_path(sanitize_path(value)) == sanitize_path(value)
    assert sanitize_title(sanitize_title(value)) == sanitize_title(value)
    assert sanitize_folder_name(sanitize_folder_name(value)) == sanitize_folder_name(
        value
    )


def test_sanitize_path_replaces_invalid_characters_only() -> None:
    assert sanitize_path('/tmp/"notes"<1>|x') == "/tmp/_notes__1__x"
    assert sanitize_path("line\nbreak") == "line_break"
    assert sanitize_path("/home/user/My Notes.d") == "/home/user/My Notes.d"


def test_sanitized_path_has_no_invalid_characters() -> None:
    raw = "".join(sorted(INVALID_PATH_CHARS)) + "ok"
    assert not set(sanitize_path(raw)) & INVALID_PATH_CHARS


def test_sanitize_title_replaces_separators_and_dots() -> None:
    assert sanitize_title("a/b\\c.d") == "a_b_c_d"
    assert sanitize_title("Meeting <notes>") == "Meeting _notes_"


def test_sanitize_folder_name_keeps_dots_but_not_separators() -> None:
    assert sanitize_folder_name("v1.2") == "v1.2"
    assert sanitize_folder_name("a/b") == "a_b"
    assert sanitize_folder_name("..") == "_"
    assert sanitize_folder_name("") == "_"
