"""Tests for export and import conflict checks."""

from asset_vault.conflicts import detect_export_conflicts
from asset_vault.conflicts import detect_import_conflicts


class TestExportConflicts:
    def test_empty_destination(self, tmp_path):
        assert detect_export_conflicts(tmp_path / "missing", "uasset") is False

    def test_existing_primary_file_anywhere_below(self, tmp_path, payload):
        payload(tmp_path, "deep/nested/Hero")
        assert detect_export_conflicts(tmp_path, "uasset") is True

    def test_auxiliary_files_do_not_count(self, tmp_path, payload):
        payload(tmp_path, "Hero", extensions=("uexp",))
        assert detect_export_conflicts(tmp_path, "uasset") is False

    def test_check_is_read_only(self, tmp_path, payload):
        payload(tmp_path, "Hero")
        before = sorted(tmp_path.rglob("*"))
        detect_export_conflicts(tmp_path, "uasset")
        assert sorted(tmp_path.rglob("*")) == before


class TestImportConflicts:
    def test_reports_existing_destinations(self, content_root, vault_root, payload):
        payload(vault_root, "Chars/Hero")
        payload(vault_root, "Chars/Villain")
        payload(content_root, "Chars/Hero")

        report = detect_import_conflicts(vault_root, content_root, "uasset")

        assert report.determinable
        assert report.conflicts == ["Hero.uasset"]
        assert report.has_conflicts

    def test_relative_paths_must_match(self, content_root, vault_root, payload):
        payload(vault_root, "Chars/Hero")
        payload(content_root, "Other/Hero")

        report = detect_import_conflicts(vault_root, content_root, "uasset")

        assert report.determinable
        assert not report.has_conflicts

    def test_missing_directory_is_not_determinable(self, content_root, tmp_path):
        report = detect_import_conflicts(tmp_path / "missing", content_root, "uasset")

        assert not report.determinable
        assert report.conflicts == []
        assert report.reason

    def test_missing_target_is_not_determinable(self, vault_root, tmp_path):
        assert not detect_import_conflicts(vault_root, tmp_path / "missing", "uasset").determinable
