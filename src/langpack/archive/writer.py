"""Zip archive writer with atomic file replacement."""

from __future__ import annotations

import logging
import os
import zipfile
from pathlib import Path
from types import TracebackType

from langpack.errors import ArchiveCreationError, FatalConfigError
from langpack.utils.paths import atomic_temp_path

LOGGER = logging.getLogger(__name__)


def ensure_zip_support() -> None:
    """Raise when the interpreter cannot write deflate-compressed zip files."""

    try:
        import zlib  # noqa: F401
    except ImportError as exc:
        raise FatalConfigError("zlib support is required to write zip archives.") from exc


class ArchiveWriter:
    """Write a zip archive to a hidden temp file and move it into place on close.

    Opening truncates any previous archive at the target once the new one is
    closed. Closing a writer with no entries still produces a valid empty zip.
    """

    def __init__(self, path: Path, temp_path: Path, zip_file: zipfile.ZipFile) -> None:
        self.path = path
        self._temp_path = temp_path
        self._zip = zip_file
        self._entry_names: list[str] = []
        self._closed = False

    @classmethod
    def open(cls, path: Path, compression: int = zipfile.ZIP_DEFLATED) -> "ArchiveWriter":
        """Open a new archive for writing or raise ArchiveCreationError."""

        temp_path = atomic_temp_path(path)
        try:
            zip_file = zipfile.ZipFile(temp_path, mode="w", compression=compression)
        except OSError as exc:
            raise ArchiveCreationError(path, str(exc)) from exc
        return cls(path, temp_path, zip_file)

    @property
    def entry_names(self) -> list[str]:
        """Entry names added so far, in insertion order."""

        return list(self._entry_names)

    def add_bytes(self, entry_name: str, content: bytes) -> None:
        """Add an entry from in-memory content."""

        self._zip.writestr(entry_name, content)
        self._entry_names.append(entry_name)

    def add_file(self, entry_name: str, source_path: Path) -> None:
        """Add an entry copied from a file on disk."""

        self._zip.write(source_path, arcname=entry_name)
        self._entry_names.append(entry_name)

    def close(self) -> Path:
        """Finish the archive and atomically move it to the target path."""

        if self._closed:
            return self.path
        self._closed = True
        try:
            self._zip.close()
            os.replace(self._temp_path, self.path)
        except OSError as exc:
            raise ArchiveCreationError(self.path, str(exc)) from exc
        finally:
            if self._temp_path.exists():
                self._temp_path.unlink()
        return self.path

    def abort(self) -> None:
        """Discard the partially written archive without touching the target path."""

        if self._closed:
            return
        self._closed = True
        try:
            self._zip.close()
        finally:
            if self._temp_path.exists():
                self._temp_path.unlink()
        LOGGER.debug("archive.aborted path=%s entries=%s", self.path, len(self._entry_names))

    def __enter__(self) -> "ArchiveWriter":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        if exc_type is None:
            self.close()
        else:
            self.abort()

