"""Path and file name sanitisation helpers."""

from __future__ import annotations

# Characters that are never valid inside a path on at least one supported
# platform: the Windows reserved set plus NUL and the ASCII control range.
INVALID_PATH_CHARS = frozenset('"<>|') | frozenset(chr(code) for code in range(32))

REPLACEMENT_CHAR = "_"

_TITLE_CHARS = ("/", "\\", ".")
_SEPARATOR_CHARS = ("/", "\\")

_INVALID_PATH_TABLE = str.maketrans({char: REPLACEMENT_CHAR for char in INVALID_PATH_CHARS})


def sanitize_path(path: str) -> str:
    """Replace characters that are illegal in paths with an underscore.

    Directory separators are preserved, so the result is still usable as a
    full path. The function is idempotent since the replacement character is
    itself valid.
    """

    return path.translate(_INVALID_PATH_TABLE)


def sanitize_title(title: str) -> str:
    """Turn a note title into a bare file name component.

    On top of :func:`sanitize_path`, separators and dots are replaced so the
    title can neither escape the target folder nor fake a file extension.
    """

    title = sanitize_path(title)
    for char in _TITLE_CHARS:
        title = title.replace(char, REPLACEMENT_CHAR)
    return title


def sanitize_folder_name(name: str) -> str:
    """Return a single directory component derived from ``name``."""

    name = sanitize_path(name)
    for char in _SEPARATOR_CHARS:
        name = name.replace(char, REPLACEMENT_CHAR)
    if name in ("", ".", ".."):
        return REPLACEMENT_CHAR
    return name


__all__ = [
    "INVALID_PATH_CHARS",
    "REPLACEMENT_CHAR",
    "sanitize_folder_name",
    "sanitize_path",
    "sanitize_title",
]
