"""Discover language directories and the files inside a sub-package tree."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

LOGGER = logging.getLogger(__name__)

ALL_LANGUAGES = "all"


def matches_language_filter(name: str, language_filter: str) -> bool:
    """Return True when ``name`` equals or starts with the filter, or the filter is ``all``."""

    if language_filter == ALL_LANGUAGES:
        return True
    return name.startswith(language_filter)


def discover_language_dirs(
    source_root: Path,
    language_filter: str = ALL_LANGUAGES,
    logger: logging.Logger | None = None,
) -> list[str]:
    """List immediate subdirectories of ``source_root`` selected by the language filter."""

    effective_logger = logger or LOGGER
    selected: list[str] = []
    for entry in sorted(source_root.iterdir(), key=lambda item: item.name):
        if not entry.is_dir():
            continue
        if not matches_language_filter(entry.name, language_filter):
            effective_logger.debug("discover.language_filtered name=%s filter=%s", entry.name, language_filter)
            continue
        selected.append(entry.name)
    return selected


def iter_source_files(source_dir: Path) -> Iterator[Path]:
    """Yield every regular file below ``source_dir`` exactly once, in sorted path order."""

    for file_path in sorted(source_dir.rglob("*")):
        if file_path.is_file():
            yield file_path
