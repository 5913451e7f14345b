"""Shared fixtures: a synthetic language source tree and matching settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from langpack.config import AppSettings, PackageConfig, PathsConfig
from langpack.manifest.templating import TemplatingRules

MANIFEST_TEMPLATE = """<?xml version="1.0" encoding="utf-8"?>
<extension type="package" method="upgrade">
    <name>{code} Language Pack</name>
    <packagename>{code}</packagename>
    <version/>
    <creationDate/>
    <files>
        <file type="language" client="site" id="{code}">site_{code}.zip</file>
        <file type="language" client="administrator" id="{code}">admin_{code}.zip</file>
        <file type="language" client="api" id="{code}">api_{code}.zip</file>
    </files>
</extension>
"""

LOCALISE_PHP = """<?php
abstract class En_GBLocalise
{
    public static function getPluralSuffixes($count) { return [$count]; }
}
"""


def _write(path: Path, content: str | bytes) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")
    return path


def _make_language(
    source_root: Path,
    code: str,
    *,
    manifest: bool = True,
    site: bool = True,
    admin: bool = True,
    api: bool = True,
) -> Path:
    """Create one language directory with the standard layout."""

    language_dir = source_root / code
    language_dir.mkdir(parents=True, exist_ok=True)
    if manifest:
        _write(language_dir / f"pkg_{code}.xml", MANIFEST_TEMPLATE.format(code=code))
    if site:
        site_dir = language_dir / "language" / code
        _write(site_dir / f"{code}.ini", 'JYES="Ya"\n')
        _write(site_dir / "langmetadata.xml", "<metadata><version/><creationDate/></metadata>\n")
        _write(site_dir / "localise.php", LOCALISE_PHP)
        _write(site_dir / "extra" / f"{code}.com_content.ini", 'COM_CONTENT="Kandungan"\n')
    if admin:
        admin_dir = language_dir / "administrator" / "language" / code
        _write(admin_dir / f"{code}.ini", 'JNO="Tidak"\n')
        _write(admin_dir / "install.xml", "<install><version/></install>\n")
        _write(admin_dir / "localise.php", LOCALISE_PHP)
    if api:
        _write(language_dir / "api" / "language" / code / f"{code}.ini", 'JAPI="API"\n')
    return language_dir


@pytest.fixture
def make_language():
    """Factory that lays out one language directory under a source root."""

    return _make_language


@pytest.fixture
def source_root(tmp_path: Path) -> Path:
    root = tmp_path / "joomla_v5" / "translations" / "package"
    root.mkdir(parents=True)
    return root


@pytest.fixture
def output_root(tmp_path: Path) -> Path:
    root = tmp_path / "build" / "output"
    root.mkdir(parents=True)
    return root


@pytest.fixture
def rules() -> TemplatingRules:
    return TemplatingRules(version="5.4.0.1", creation_date="2024-01-01")


@pytest.fixture
def settings(tmp_path: Path, source_root: Path, output_root: Path) -> AppSettings:
    """Settings pointing at the temp tree, independent of the repository config."""

    return AppSettings(
        paths=PathsConfig(
            base_dir=tmp_path,
            source_root_template="joomla_v{platform_version}/translations/package",
            output_root=output_root,
            artifacts_root=tmp_path / "artifacts",
            logs_root=tmp_path / "logs",
        ),
        package=PackageConfig(platform_version="5", language_filter="all", version=None),
    )
