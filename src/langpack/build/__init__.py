"""Build driver helpers."""

from langpack.build.pipeline import (
    BuildPlan,
    BuildRunOptions,
    BuildRunResult,
    BuildSummary,
    prepare_build,
    run_build,
)

__all__ = [
    "BuildPlan",
    "BuildRunOptions",
    "BuildRunResult",
    "BuildSummary",
    "prepare_build",
    "run_build",
]
