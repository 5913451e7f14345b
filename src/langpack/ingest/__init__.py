"""Discovery of language directories and their source files."""

from langpack.ingest.discover import (
    ALL_LANGUAGES,
    discover_language_dirs,
    iter_source_files,
    matches_language_filter,
)

__all__ = [
    "ALL_LANGUAGES",
    "matches_language_filter",
    "discover_language_dirs",
    "iter_source_files",
]
