"""Configuration management for notebook-export."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

DEFAULT_CONFIG_DIR = Path("~/.config/notebook-export").expanduser()
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.toml"
DEFAULT_DATABASE_NAME = "notes.sqlite3"
DEFAULT_EXPORT_FORMAT = "html"
CONFIG_SECTION = "notebook_export"


class ConfigError(RuntimeError):
    """Base error for configuration related issues."""


class MissingConfigError(ConfigError):
    """Raised when the configuration file cannot be found."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Configuration file not found at {path}")
        self.path = path


class InvalidConfigError(ConfigError):
    """Raised when the configuration file misses required keys or values."""


@dataclass(slots=True)
class NotebookExportConfig:
    """In-memory representation of the notebook-export configuration file."""

    database_path: Path
    default_format: str = DEFAULT_EXPORT_FORMAT
    plugins: dict[str, dict[str, Any]] = field(default_factory=dict)
    source_path: Path | None = None


def load_config(path: Path | None = None) -> NotebookExportConfig:
    """Load configuration from ``path`` or the default location.

    Parameters
    ----------
    path:
        Optional location of the configuration file. When ``None`` the default
        path (``~/.config/notebook-export/config.toml``) is used.

    Raises
    ------
    MissingConfigError
        If the file cannot be found.
    InvalidConfigError
        If settings are malformed.
    """

    config_path = (path or DEFAULT_CONFIG_PATH).expanduser()
    if not config_path.exists():
        raise MissingConfigError(config_path)

    try:
        with config_path.open("rb") as fh:
            raw = tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise InvalidConfigError(f"Invalid TOML in {config_path}: {exc}") from exc

    section = raw.get(CONFIG_SECTION, {})
    if not isinstance(section, dict):
        raise InvalidConfigError(f"'{CONFIG_SECTION}' section must be a table")

    config_dir = config_path.parent

    # Relative database paths are resolved against the configuration directory.
    database_raw = section.get("database")
    if database_raw is None:
        database_path = (config_dir / DEFAULT_DATABASE_NAME).resolve()
    elif isinstance(database_raw, str) and database_raw.strip():
        db = Path(database_raw.strip()).expanduser()
        database_path = (db if db.is_absolute() else (config_dir / db)).resolve()
    else:
        raise InvalidConfigError("'database' must be a non-empty string when provided")

    default_format_raw = section.get("default_format", DEFAULT_EXPORT_FORMAT)
    if not isinstance(default_format_raw, str) or not default_format_raw.strip():
        raise InvalidConfigError("'default_format' must be a non-empty string")

    plugins_section = raw.get("plugins")
    plugins: dict[str, dict[str, Any]] = {}
    if isinstance(plugins_section, dict):
        for key, value in plugins_section.items():
            if not isinstance(key, str):  # pragma: no cover - defensive
                continue
            if isinstance(value, dict):
                plugins[key] = dict(value)
            else:
                plugins[key] = {}

    return NotebookExportConfig(
        database_path=database_path,
        default_format=default_format_raw.strip().lower(),
        plugins=plugins,
        source_path=config_path,
    )


def bootstrap_config_file(path: Path) -> bool:
    """Create a default config file if missing.

    Returns True when the file was created, False if it already existed.
    """

    if path.exists():
        return False

    config_dir = path.parent
    config_dir.mkdir(parents=True, exist_ok=True)
    default_content = (
        f"[{CONFIG_SECTION}]\n"
        f'database = "{DEFAULT_DATABASE_NAME}"\n'
        f'default_format = "{DEFAULT_EXPORT_FORMAT}"\n'
    )
    path.write_text(default_content, encoding="utf-8")
    return True
