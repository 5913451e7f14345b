"""Exception types raised by the packaging pipeline."""

from __future__ import annotations

from pathlib import Path


class LangpackError(Exception):
    """Base class for all langpack errors."""


class FatalConfigError(LangpackError):
    """Run-level input problem that stops the build before any language is packaged."""


class ArchiveCreationError(LangpackError):
    """An archive could not be created at the requested path."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot create archive {path}: {reason}")
        self.path = path
        self.reason = reason
