"""Build the final installable package for one language."""

from __future__ import annotations

import logging
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from langpack.archive.writer import ArchiveWriter
from langpack.errors import ArchiveCreationError
from langpack.manifest.templating import TemplatingRules, template_file_content
from langpack.package.subpackage import (
    SubPackageResult,
    SubPackageSpec,
    build_sub_package,
    build_sub_package_specs,
)

LOGGER = logging.getLogger(__name__)

PackageOutcome = Literal["success", "skipped", "failed"]
FailureReason = Literal["ManifestNotFound", "ArchiveCreationFailed", "UnexpectedError"]

DEFAULT_FINAL_ARCHIVE_TEMPLATE = "{language}_pkg_{version}.zip"


@dataclass(frozen=True, slots=True)
class PackageJob:
    """Inputs for packaging one language."""

    language_code: str
    language_dir: Path
    manifest_path: Path
    sub_packages: tuple[SubPackageSpec, ...]

    @classmethod
    def for_language(cls, source_root: Path, language_code: str) -> "PackageJob":
        language_dir = source_root / language_code
        return cls(
            language_code=language_code,
            language_dir=language_dir,
            manifest_path=language_dir / manifest_file_name(language_code),
            sub_packages=tuple(build_sub_package_specs(language_dir, language_code)),
        )


@dataclass(frozen=True, slots=True)
class PackageJobResult:
    """Outcome of one language package job."""

    language_code: str
    outcome: PackageOutcome
    reason: FailureReason | None = None
    error_message: str | None = None
    archive_path: Path | None = None
    archive_size_bytes: int | None = None
    sub_packages: tuple[SubPackageResult, ...] = field(default_factory=tuple)

    @property
    def succeeded(self) -> bool:
        return self.outcome == "success"

    def as_dict(self) -> dict[str, object]:
        """Return a JSON-friendly view of the result."""

        return {
            "language_code": self.language_code,
            "outcome": self.outcome,
            "reason": self.reason,
            "error_message": self.error_message,
            "archive_path": str(self.archive_path) if self.archive_path else None,
            "archive_size_bytes": self.archive_size_bytes,
            "sub_packages": [
                {
                    "kind": item.kind,
                    "archive_name": item.archive_path.name,
                    "file_count": item.file_count,
                    "source_missing": item.source_missing,
                }
                for item in self.sub_packages
            ],
        }


def manifest_file_name(language_code: str) -> str:
    """Top-level package manifest name for a language."""

    return f"pkg_{language_code}.xml"


def _compose_final_archive(work_dir: Path, final_path: Path, logger: logging.Logger) -> Path:
    """Zip every regular file in ``work_dir`` at the archive root."""

    with ArchiveWriter.open(final_path) as writer:
        for item in sorted(work_dir.iterdir(), key=lambda path: path.name):
            if item.is_file():
                writer.add_file(item.name, item)
        logger.debug("package.final_entries archive=%s entries=%s", final_path.name, writer.entry_names)
    return final_path


def run_language_package(
    job: PackageJob,
    *,
    output_root: Path,
    rules: TemplatingRules,
    final_archive_template: str = DEFAULT_FINAL_ARCHIVE_TEMPLATE,
    logger: logging.Logger | None = None,
) -> PackageJobResult:
    """Validate, assemble and compose one language package.

    The job's work directory is removed on every exit path. The final archive
    is only written once all three inner archives exist.
    """

    effective_logger = logger or LOGGER
    code = job.language_code

    if not job.manifest_path.is_file():
        effective_logger.warning("package.skip language=%s reason=ManifestNotFound path=%s", code, job.manifest_path)
        return PackageJobResult(
            language_code=code,
            outcome="skipped",
            reason="ManifestNotFound",
            error_message=f"No {job.manifest_path.name} manifest found",
        )

    final_path = output_root / final_archive_template.format(language=code, version=rules.version)
    sub_results: list[SubPackageResult] = []
    try:
        with tempfile.TemporaryDirectory(prefix=f"tmp_{code}_", dir=output_root) as tmp_dir:
            work_dir = Path(tmp_dir)
            effective_logger.debug("package.work_dir language=%s path=%s", code, work_dir)

            for spec in job.sub_packages:
                sub_results.append(
                    build_sub_package(
                        spec,
                        work_dir,
                        language_code=code,
                        rules=rules,
                        logger=effective_logger,
                    )
                )

            effective_logger.info("package.prepare_manifest manifest=%s", job.manifest_path.name)
            manifest_bytes = template_file_content(job.manifest_path.name, job.manifest_path.read_bytes(), code, rules)
            (work_dir / job.manifest_path.name).write_bytes(manifest_bytes)

            effective_logger.info("package.create_final archive=%s", final_path.name)
            _compose_final_archive(work_dir, final_path, effective_logger)
    except ArchiveCreationError as exc:
        effective_logger.error("package.failed language=%s reason=ArchiveCreationFailed error=%s", code, exc)
        return PackageJobResult(
            language_code=code,
            outcome="failed",
            reason="ArchiveCreationFailed",
            error_message=str(exc),
            sub_packages=tuple(sub_results),
        )
    except Exception as exc:
        effective_logger.exception("package.failed language=%s reason=UnexpectedError", code)
        return PackageJobResult(
            language_code=code,
            outcome="failed",
            reason="UnexpectedError",
            error_message=str(exc),
            sub_packages=tuple(sub_results),
        )

    size_bytes = final_path.stat().st_size
    effective_logger.info("package.ok archive=%s size_kb=%.1f", final_path.name, size_bytes / 1024)
    return PackageJobResult(
        language_code=code,
        outcome="success",
        archive_path=final_path,
        archive_size_bytes=size_bytes,
        sub_packages=tuple(sub_results),
    )
