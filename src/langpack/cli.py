"""Typer CLI entrypoint for langpack."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import typer
import yaml

from langpack.build.pipeline import BuildRunOptions, prepare_build, run_build
from langpack.config import AppSettings, load_settings
from langpack.errors import FatalConfigError
from langpack.ingest.discover import discover_language_dirs
from langpack.logging_utils import configure_logging
from langpack.package.orchestrator import PackageJobResult

EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2

app = typer.Typer(
    add_completion=False,
    help="Build installable language package ZIP files.",
    no_args_is_help=True,
)


def _load_settings(config_file: Path | None, verbose: bool = False) -> AppSettings:
    settings = load_settings(config_file=config_file)
    if verbose:
        settings = settings.model_copy(
            update={"logging": settings.logging.model_copy(update={"verbose": True})}
        )
    return settings


def _parse_iso_date(value: str | None, option_name: str) -> str | None:
    if value is None:
        return None
    try:
        return date.fromisoformat(value).isoformat()
    except ValueError as exc:
        raise typer.BadParameter(f"{option_name} must be YYYY-MM-DD.") from exc


def _echo_result(result: PackageJobResult) -> None:
    if result.outcome == "success" and result.archive_path is not None:
        size_kb = (result.archive_size_bytes or 0) / 1024
        typer.echo(f"{result.language_code}: OK {result.archive_path.name} ({size_kb:.1f} KB)")
    elif result.outcome == "skipped":
        typer.echo(f"{result.language_code}: SKIP {result.error_message}")
    else:
        typer.echo(f"{result.language_code}: ERROR {result.error_message}")


@app.command("show-config")
def show_config(
    config_file: Path | None = typer.Option(
        None,
        "--config-file",
        help="Optional settings YAML path.",
        exists=False,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
) -> None:
    """Print the effective configuration after env overrides."""

    settings = _load_settings(config_file)
    rendered = yaml.safe_dump(settings.as_dict(), sort_keys=False)
    typer.echo(rendered)


@app.command("list-languages")
def list_languages(
    language: str | None = typer.Option(
        None,
        "--language",
        help='Language code (ms-MY), prefix (de), or "all".',
    ),
    jversion: str | None = typer.Option(
        None,
        "--jversion",
        help="Platform major version selecting the source tree.",
    ),
    config_file: Path | None = typer.Option(
        None,
        "--config-file",
        help="Optional settings YAML path.",
        exists=False,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
) -> None:
    """List language directories the filter selects."""

    settings = _load_settings(config_file)
    source_root = settings.paths.source_root(jversion or settings.package.platform_version)
    if not source_root.is_dir():
        typer.echo(f"ERROR: Source folder not found: {source_root}", err=True)
        raise typer.Exit(code=EXIT_FATAL)
    for code in discover_language_dirs(source_root, language or settings.package.language_filter):
        typer.echo(code)


@app.command("build")
def build(
    lpversion: str | None = typer.Option(
        None,
        "--lpversion",
        help="Package version, e.g. 5.4.0.1. Required unless set in settings.",
    ),
    language: str | None = typer.Option(
        None,
        "--language",
        help='Language code (ms-MY), prefix (de), or "all".',
    ),
    jversion: str | None = typer.Option(
        None,
        "--jversion",
        help="Platform major version selecting the source tree.",
    ),
    creation_date: str | None = typer.Option(
        None,
        "--creation-date",
        help="Override the manifest creation date (YYYY-MM-DD). Defaults to today.",
    ),
    verbose: bool = typer.Option(
        False,
        "--v",
        "--verbose",
        help="Verbose output.",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Discover languages and check manifests without writing archives.",
    ),
    config_file: Path | None = typer.Option(
        None,
        "--config-file",
        help="Optional settings YAML path.",
        exists=False,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
) -> None:
    """Build one installable package ZIP per selected language."""

    parsed_creation_date = _parse_iso_date(creation_date, "creation-date")
    settings = _load_settings(config_file, verbose=verbose)
    options = BuildRunOptions(
        version=lpversion,
        language_filter=language,
        platform_version=jversion,
        creation_date=parsed_creation_date,
        dry_run=dry_run,
    )

    # Fatal checks run before logging is configured so a rejected run leaves no log file.
    try:
        plan = prepare_build(settings, options=options)
    except FatalConfigError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=EXIT_FATAL) from exc

    logger = configure_logging(
        settings.paths.logs_root / settings.logging.log_file_name,
        verbose=settings.logging.verbose,
    )
    result = run_build(settings, options=options, plan=plan, logger=logger, on_result=_echo_result)

    summary = result.summary
    typer.echo("========================================")
    if dry_run:
        for code in result.planned_languages:
            typer.echo(f"{code}: would build")
        line = f"Dry run: {summary.planned} package(s) would be built"
    else:
        line = f"Done! {summary.succeeded} package(s) built"
    if summary.failed > 0:
        line += f", {summary.failed} error(s)"
    typer.echo(line)
    typer.echo(f"Output: {summary.output_root}")
    if result.summary_path is not None:
        typer.echo(f"summary_path: {result.summary_path}")

    if not summary.all_succeeded:
        raise typer.Exit(code=EXIT_PARTIAL_FAILURE)


def main() -> None:
    """CLI script entrypoint."""

    app()


if __name__ == "__main__":
    main()
