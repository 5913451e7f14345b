"""Literal placeholder substitution for manifests and the localise class file.

Substitution is plain substring replacement. Surrounding markup is never
parsed, so every byte outside a placeholder is preserved as-is.
"""

from __future__ import annotations

from dataclasses import dataclass

VERSION_PLACEHOLDER = "<version/>"
CREATION_DATE_PLACEHOLDER = "<creationDate/>"

DEFAULT_IDENTIFIER_FILE = "localise.php"
DEFAULT_IDENTIFIER_TOKEN = "En_GBLocalise"
DEFAULT_IDENTIFIER_SUFFIX = "Localise"


@dataclass(frozen=True, slots=True)
class TemplatingRules:
    """Values stamped into sub-package files for one build run."""

    version: str
    creation_date: str
    identifier_file: str = DEFAULT_IDENTIFIER_FILE
    identifier_default_token: str = DEFAULT_IDENTIFIER_TOKEN
    identifier_suffix: str = DEFAULT_IDENTIFIER_SUFFIX


def apply_version_and_date(xml_text: str, version: str, creation_date: str) -> str:
    """Fill the empty version and creationDate elements; absent placeholders are left alone."""

    text = xml_text.replace(VERSION_PLACEHOLDER, f"<version>{version}</version>")
    return text.replace(CREATION_DATE_PLACEHOLDER, f"<creationDate>{creation_date}</creationDate>")


def derive_identifier(language_code: str, suffix: str = DEFAULT_IDENTIFIER_SUFFIX) -> str:
    """Build the per-language class name, e.g. ``ms-MY`` -> ``Ms_MYLocalise``."""

    base = language_code.replace("-", "_")
    return base[:1].upper() + base[1:] + suffix


def apply_identifier(
    php_text: str,
    language_code: str,
    default_token: str = DEFAULT_IDENTIFIER_TOKEN,
    suffix: str = DEFAULT_IDENTIFIER_SUFFIX,
) -> str:
    """Replace the default localise class name with the one for ``language_code``."""

    return php_text.replace(default_token, derive_identifier(language_code, suffix=suffix))


def template_file_content(file_name: str, content: bytes, language_code: str, rules: TemplatingRules) -> bytes:
    """Apply whichever transforms apply to ``file_name``; other files pass through untouched."""

    is_xml = file_name.rpartition(".")[2] == "xml" and "." in file_name
    is_identifier_file = file_name == rules.identifier_file
    if not is_xml and not is_identifier_file:
        return content

    # surrogateescape keeps undecodable bytes intact through the round trip
    text = content.decode("utf-8", errors="surrogateescape")
    if is_xml:
        text = apply_version_and_date(text, rules.version, rules.creation_date)
    if is_identifier_file:
        text = apply_identifier(
            text,
            language_code,
            default_token=rules.identifier_default_token,
            suffix=rules.identifier_suffix,
        )
    return text.encode("utf-8", errors="surrogateescape")
