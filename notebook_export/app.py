"""Application bootstrap and context container for notebook-export."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .config import NotebookExportConfig, load_config
from .notebooks import NotebookResolver
from .storage import Storage

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AppContext:
    """Aggregates core services for the CLI lifecycle."""

    config: NotebookExportConfig
    storage: Storage
    resolver: NotebookResolver


def bootstrap(config_path: Path | None) -> AppContext:
    """Load configuration and initialize the note store."""

    # Defer error mapping to the CLI, which knows how to present messages.
    config = load_config(config_path)

    storage = Storage(config.database_path)
    storage.initialize()
    logger.debug("Using note database %s", storage.path)

    return AppContext(
        config=config, storage=storage, resolver=NotebookResolver(storage)
    )
