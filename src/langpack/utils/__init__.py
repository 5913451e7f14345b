"""Shared utility helpers."""

from langpack.utils.paths import atomic_temp_path, ensure_directories, write_json_atomically
from langpack.utils.time_utils import creation_date_string, now_utc

__all__ = [
    "atomic_temp_path",
    "ensure_directories",
    "write_json_atomically",
    "now_utc",
    "creation_date_string",
]
