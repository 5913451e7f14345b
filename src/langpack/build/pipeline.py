"""Sequential build orchestration across all selected languages."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable
from uuid import uuid4

from langpack.archive.writer import ensure_zip_support
from langpack.config import AppSettings
from langpack.errors import FatalConfigError
from langpack.ingest.discover import discover_language_dirs
from langpack.manifest.templating import TemplatingRules
from langpack.package.orchestrator import PackageJob, PackageJobResult, run_language_package
from langpack.utils.paths import ensure_directories, write_json_atomically
from langpack.utils.time_utils import creation_date_string, now_utc

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BuildRunOptions:
    """Runtime options for one build run; unset values fall back to settings."""

    version: str | None = None
    language_filter: str | None = None
    platform_version: str | None = None
    creation_date: str | None = None
    dry_run: bool = False


@dataclass(frozen=True, slots=True)
class BuildPlan:
    """Validated inputs for a run: everything fatal has already been checked."""

    version: str
    creation_date: str
    language_filter: str
    source_root: Path
    languages: tuple[str, ...]
    rules: TemplatingRules


@dataclass(frozen=True, slots=True)
class BuildSummary:
    """Aggregate counts for a finished run.

    ``planned`` is only non-zero for dry runs, where no package job executes
    and ``succeeded`` therefore stays 0.
    """

    succeeded: int
    failed: int
    output_root: Path
    planned: int = 0

    @property
    def all_succeeded(self) -> bool:
        return self.failed == 0


@dataclass(frozen=True, slots=True)
class BuildRunResult:
    """Return object for build run outcomes."""

    run_id: str
    summary: BuildSummary
    results: tuple[PackageJobResult, ...]
    summary_path: Path | None
    planned_languages: tuple[str, ...] = field(default_factory=tuple)


def _resolve_version(settings: AppSettings, options: BuildRunOptions) -> str:
    version = options.version or settings.package.version
    if not version or not version.strip():
        raise FatalConfigError("A package version is required, e.g. --lpversion 5.4.0.1")
    return version.strip()


def _resolve_source_root(settings: AppSettings, options: BuildRunOptions) -> Path:
    platform_version = options.platform_version or settings.package.platform_version
    source_root = settings.paths.source_root(platform_version)
    if not source_root.is_dir():
        raise FatalConfigError(f"Source folder not found: {source_root}")
    return source_root


def prepare_build(
    settings: AppSettings,
    *,
    options: BuildRunOptions | None = None,
    logger: logging.Logger | None = None,
) -> BuildPlan:
    """Resolve and validate run inputs without writing anything.

    Raises FatalConfigError for a missing version, a missing source root,
    missing zip support, or a filter that selects no language.
    """

    effective_logger = logger or LOGGER
    run_options = options or BuildRunOptions()

    version = _resolve_version(settings, run_options)
    source_root = _resolve_source_root(settings, run_options)
    ensure_zip_support()

    language_filter = run_options.language_filter or settings.package.language_filter
    languages = discover_language_dirs(source_root, language_filter, logger=effective_logger)
    if not languages:
        raise FatalConfigError(f"No language directories found matching: {language_filter}")

    creation_date = run_options.creation_date or creation_date_string()
    return BuildPlan(
        version=version,
        creation_date=creation_date,
        language_filter=language_filter,
        source_root=source_root,
        languages=tuple(languages),
        rules=TemplatingRules(
            version=version,
            creation_date=creation_date,
            identifier_file=settings.templating.identifier_file,
            identifier_default_token=settings.templating.identifier_default_token,
            identifier_suffix=settings.templating.identifier_suffix,
        ),
    )


def run_build(
    settings: AppSettings,
    *,
    options: BuildRunOptions | None = None,
    plan: BuildPlan | None = None,
    logger: logging.Logger | None = None,
    on_result: Callable[[PackageJobResult], None] | None = None,
) -> BuildRunResult:
    """Package every selected language in turn.

    Configuration problems raise FatalConfigError before anything is written;
    pass a ``plan`` from prepare_build to skip re-validation. Per-language
    failures are recorded and never stop later languages.
    """

    effective_logger = logger or LOGGER
    run_options = options or BuildRunOptions()
    build_plan = plan or prepare_build(settings, options=run_options, logger=effective_logger)
    output_root = settings.paths.output_root

    run_id = f"build-run-{uuid4().hex[:12]}"
    started_ts = now_utc()
    started_mono = time.monotonic()

    effective_logger.info(
        "build_run.start run_id=%s languages=%s version=%s creation_date=%s filter=%s dry_run=%s",
        run_id,
        len(build_plan.languages),
        build_plan.version,
        build_plan.creation_date,
        build_plan.language_filter,
        run_options.dry_run,
    )
    effective_logger.info("build_run.paths source_root=%s output_root=%s", build_plan.source_root, output_root)

    results: list[PackageJobResult] = []
    planned: list[str] = []

    if run_options.dry_run:
        for code in build_plan.languages:
            job = PackageJob.for_language(build_plan.source_root, code)
            if job.manifest_path.is_file():
                planned.append(code)
                effective_logger.info("build_run.would_build language=%s", code)
            else:
                result = PackageJobResult(
                    language_code=code,
                    outcome="skipped",
                    reason="ManifestNotFound",
                    error_message=f"No {job.manifest_path.name} manifest found",
                )
                results.append(result)
                if on_result is not None:
                    on_result(result)
        summary = BuildSummary(succeeded=0, failed=len(results), output_root=output_root, planned=len(planned))
        return BuildRunResult(
            run_id=run_id,
            summary=summary,
            results=tuple(results),
            summary_path=None,
            planned_languages=tuple(planned),
        )

    ensure_directories([output_root])
    for code in build_plan.languages:
        effective_logger.info("===== %s =====", code)
        result = run_language_package(
            PackageJob.for_language(build_plan.source_root, code),
            output_root=output_root,
            rules=build_plan.rules,
            final_archive_template=settings.package.final_archive_template,
            logger=effective_logger,
        )
        results.append(result)
        if on_result is not None:
            on_result(result)

    succeeded = sum(1 for item in results if item.succeeded)
    summary = BuildSummary(succeeded=succeeded, failed=len(results) - succeeded, output_root=output_root)

    duration_sec = time.monotonic() - started_mono
    payload: dict[str, Any] = {
        "run_id": run_id,
        "started_ts": started_ts.isoformat(),
        "finished_ts": now_utc().isoformat(),
        "duration_sec": round(duration_sec, 3),
        "version": build_plan.version,
        "creation_date": build_plan.creation_date,
        "language_filter": build_plan.language_filter,
        "source_root": str(build_plan.source_root),
        "output_root": str(output_root),
        "packages_built": summary.succeeded,
        "packages_failed": summary.failed,
        "languages": [item.as_dict() for item in results],
    }
    summary_path = write_json_atomically(
        payload,
        settings.paths.artifacts_root / "run_summaries" / f"{run_id}_build_summary.json",
    )

    effective_logger.info(
        "build_run.complete run_id=%s success=%s failed=%s summary_path=%s",
        run_id,
        summary.succeeded,
        summary.failed,
        summary_path,
    )
    return BuildRunResult(
        run_id=run_id,
        summary=summary,
        results=tuple(results),
        summary_path=summary_path,
    )
