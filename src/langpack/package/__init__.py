"""Per-language package assembly."""

from langpack.package.orchestrator import (
    PackageJob,
    PackageJobResult,
    manifest_file_name,
    run_language_package,
)
from langpack.package.subpackage import (
    SUBSET_KINDS,
    SubPackageResult,
    SubPackageSpec,
    build_sub_package,
    build_sub_package_specs,
)

__all__ = [
    "PackageJob",
    "PackageJobResult",
    "manifest_file_name",
    "run_language_package",
    "SUBSET_KINDS",
    "SubPackageSpec",
    "SubPackageResult",
    "build_sub_package_specs",
    "build_sub_package",
]
