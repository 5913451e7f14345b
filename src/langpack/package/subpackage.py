"""Assemble one flat inner archive (site, admin or api) for a language."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from langpack.archive.writer import ArchiveWriter
from langpack.ingest.discover import iter_source_files
from langpack.manifest.templating import TemplatingRules, template_file_content

LOGGER = logging.getLogger(__name__)

SubsetKind = Literal["site", "admin", "api"]
SUBSET_KINDS: tuple[SubsetKind, ...] = ("site", "admin", "api")

# Subset kind -> source directory relative to the language directory, before the language code.
SUBSET_SOURCE_PREFIXES: dict[SubsetKind, tuple[str, ...]] = {
    "site": ("language",),
    "admin": ("administrator", "language"),
    "api": ("api", "language"),
}


@dataclass(frozen=True, slots=True)
class SubPackageSpec:
    """Where one subset's files come from and what its inner archive is called."""

    kind: SubsetKind
    source_dir: Path
    archive_name: str


@dataclass(frozen=True, slots=True)
class SubPackageResult:
    """Outcome of assembling one inner archive."""

    kind: SubsetKind
    archive_path: Path
    file_count: int
    source_missing: bool


def build_sub_package_specs(language_dir: Path, language_code: str) -> list[SubPackageSpec]:
    """Return the site, admin and api specs for a language directory."""

    return [
        SubPackageSpec(
            kind=kind,
            source_dir=language_dir.joinpath(*SUBSET_SOURCE_PREFIXES[kind], language_code),
            archive_name=f"{kind}_{language_code}.zip",
        )
        for kind in SUBSET_KINDS
    ]


def build_sub_package(
    spec: SubPackageSpec,
    output_dir: Path,
    *,
    language_code: str,
    rules: TemplatingRules,
    logger: logging.Logger | None = None,
) -> SubPackageResult:
    """Write ``spec``'s files, flattened to their base names, into an inner archive.

    A missing source directory produces an empty archive and a warning. Files
    sharing a base name overwrite each other's entry; the last one in sorted
    path order is kept. ArchiveCreationError propagates to the caller.
    """

    effective_logger = logger or LOGGER
    archive_path = output_dir / spec.archive_name

    if not spec.source_dir.is_dir():
        effective_logger.warning(
            "subpackage.source_missing kind=%s language=%s source_dir=%s",
            spec.kind,
            language_code,
            spec.source_dir,
        )
        with ArchiveWriter.open(archive_path):
            pass
        return SubPackageResult(kind=spec.kind, archive_path=archive_path, file_count=0, source_missing=True)

    effective_logger.info("subpackage.create archive=%s", spec.archive_name)
    entries: dict[str, bytes] = {}
    for file_path in iter_source_files(spec.source_dir):
        entry_name = file_path.name
        if entry_name in entries:
            effective_logger.debug(
                "subpackage.entry_collision archive=%s entry=%s replaced_by=%s",
                spec.archive_name,
                entry_name,
                file_path,
            )
        entries[entry_name] = template_file_content(entry_name, file_path.read_bytes(), language_code, rules)

    with ArchiveWriter.open(archive_path) as writer:
        for entry_name, content in entries.items():
            writer.add_bytes(entry_name, content)

    effective_logger.info("subpackage.files_added archive=%s files=%s", spec.archive_name, len(entries))
    return SubPackageResult(
        kind=spec.kind,
        archive_path=archive_path,
        file_count=len(entries),
        source_missing=False,
    )
