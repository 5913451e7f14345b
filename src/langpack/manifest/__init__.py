"""Manifest and identifier text templating."""

from langpack.manifest.templating import (
    CREATION_DATE_PLACEHOLDER,
    VERSION_PLACEHOLDER,
    TemplatingRules,
    apply_identifier,
    apply_version_and_date,
    derive_identifier,
    template_file_content,
)

__all__ = [
    "VERSION_PLACEHOLDER",
    "CREATION_DATE_PLACEHOLDER",
    "TemplatingRules",
    "apply_version_and_date",
    "derive_identifier",
    "apply_identifier",
    "template_file_content",
]
