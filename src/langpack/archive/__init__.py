"""Zip archive writing helpers."""

from langpack.archive.writer import ArchiveWriter, ensure_zip_support

__all__ = [
    "ArchiveWriter",
    "ensure_zip_support",
]
