"""Tests for inner archive assembly."""

import zipfile

import pytest

from langpack.archive.writer import ArchiveWriter
from langpack.errors import ArchiveCreationError
from langpack.package.subpackage import build_sub_package, build_sub_package_specs


def _read_entries(path):
    with zipfile.ZipFile(path) as archive:
        return {name: archive.read(name) for name in archive.namelist()}


class TestBuildSubPackageSpecs:
    """Derivation of the three subset specs."""

    def test_paths_and_names(self, source_root):
        language_dir = source_root / "ms-MY"

        specs = build_sub_package_specs(language_dir, "ms-MY")

        assert [spec.kind for spec in specs] == ["site", "admin", "api"]
        assert [spec.archive_name for spec in specs] == ["site_ms-MY.zip", "admin_ms-MY.zip", "api_ms-MY.zip"]
        assert specs[0].source_dir == language_dir / "language" / "ms-MY"
        assert specs[1].source_dir == language_dir / "administrator" / "language" / "ms-MY"
        assert specs[2].source_dir == language_dir / "api" / "language" / "ms-MY"


class TestBuildSubPackage:
    """Flattening, templating and missing sources."""

    def test_site_archive_is_flat_and_templated(self, make_language, source_root, tmp_path, rules):
        make_language(source_root, "ms-MY")
        site_spec = build_sub_package_specs(source_root / "ms-MY", "ms-MY")[0]

        result = build_sub_package(site_spec, tmp_path, language_code="ms-MY", rules=rules)

        entries = _read_entries(result.archive_path)
        assert sorted(entries) == ["langmetadata.xml", "localise.php", "ms-MY.com_content.ini", "ms-MY.ini"]
        assert result.file_count == 4
        assert result.source_missing is False
        assert entries["langmetadata.xml"] == (
            b"<metadata><version>5.4.0.1</version><creationDate>2024-01-01</creationDate></metadata>\n"
        )
        assert b"class Ms_MYLocalise" in entries["localise.php"]
        assert b"En_GBLocalise" not in entries["localise.php"]
        assert entries["ms-MY.ini"] == b'JYES="Ya"\n'

    def test_every_source_file_round_trips(self, make_language, source_root, tmp_path, rules):
        """Files that need no templating are stored byte-for-byte."""
        make_language(source_root, "de", site=False)
        site_dir = source_root / "de" / "language" / "de"
        site_dir.mkdir(parents=True)
        payloads = {"de.ini": b'A="B"\n', "blob.bin": bytes(range(256)), "notes.txt": "Größe\n".encode("utf-8")}
        for name, data in payloads.items():
            (site_dir / name).write_bytes(data)
        site_spec = build_sub_package_specs(source_root / "de", "de")[0]

        result = build_sub_package(site_spec, tmp_path, language_code="de", rules=rules)

        assert _read_entries(result.archive_path) == payloads

    def test_missing_source_directory_yields_empty_archive(self, make_language, source_root, tmp_path, rules, caplog):
        make_language(source_root, "ms-MY", api=False)
        api_spec = build_sub_package_specs(source_root / "ms-MY", "ms-MY")[2]

        with caplog.at_level("WARNING"):
            result = build_sub_package(api_spec, tmp_path, language_code="ms-MY", rules=rules)

        assert result.source_missing is True
        assert result.file_count == 0
        assert zipfile.is_zipfile(result.archive_path)
        assert _read_entries(result.archive_path) == {}
        assert "subpackage.source_missing" in caplog.text

    def test_same_base_name_collides_last_wins(self, source_root, tmp_path, rules):
        """Flattening keeps one entry per base name; the later path in sorted order wins."""
        site_dir = source_root / "de" / "language" / "de"
        (site_dir / "a").mkdir(parents=True)
        (site_dir / "b").mkdir(parents=True)
        (site_dir / "a" / "strings.ini").write_bytes(b"from a")
        (site_dir / "b" / "strings.ini").write_bytes(b"from b")
        site_spec = build_sub_package_specs(source_root / "de", "de")[0]

        result = build_sub_package(site_spec, tmp_path, language_code="de", rules=rules)

        with zipfile.ZipFile(result.archive_path) as archive:
            assert archive.namelist() == ["strings.ini"]
            assert archive.read("strings.ini") == b"from b"
        assert result.file_count == 1

    def test_archive_creation_failure_propagates(self, make_language, source_root, tmp_path, rules):
        make_language(source_root, "de")
        site_spec = build_sub_package_specs(source_root / "de", "de")[0]

        with pytest.raises(ArchiveCreationError):
            build_sub_package(site_spec, tmp_path / "missing", language_code="de", rules=rules)

    def test_existing_archive_is_replaced(self, make_language, source_root, tmp_path, rules):
        make_language(source_root, "de")
        site_spec = build_sub_package_specs(source_root / "de", "de")[0]
        with ArchiveWriter.open(tmp_path / site_spec.archive_name) as writer:
            writer.add_bytes("stale.ini", b"stale")

        result = build_sub_package(site_spec, tmp_path, language_code="de", rules=rules)

        assert "stale.ini" not in _read_entries(result.archive_path)
