"""Tests for package path policy and the subfolder guard."""

from pathlib import Path

import pytest

from asset_vault.errors import InvalidExportRequest
from asset_vault.errors import PathTraversalError
from asset_vault.paths import asset_name
from asset_vault.paths import build_package_root
from asset_vault.paths import content_display_path
from asset_vault.paths import package_filename
from asset_vault.paths import relative_export_path
from asset_vault.paths import resolve_import_target
from asset_vault.paths import validate_subfolder
from asset_vault.types import Category


class TestBuildPackageRoot:
    def test_full_layout(self):
        root = build_package_root(Path("/v"), Category.STATIC_MESH, "Hero", custom_folder="Chars", version="1.0")
        assert root == Path("/v/StaticMesh/Chars/Hero/1.0")

    def test_empty_optional_segments_are_omitted(self):
        root = build_package_root(Path("/v"), Category.MATERIAL, "Metal")
        assert root == Path("/v/Material/Metal")

    def test_deterministic(self):
        a = build_package_root(Path("/v"), Category.SOUND, "Step", version="2")
        b = build_package_root(Path("/v"), Category.SOUND, "Step", version="2")
        assert a == b

    def test_distinct_inputs_give_distinct_roots(self):
        versioned = build_package_root(Path("/v"), Category.SOUND, "Step", version="2")
        unversioned = build_package_root(Path("/v"), Category.SOUND, "Step")
        other_category = build_package_root(Path("/v"), Category.OTHER, "Step", version="2")
        assert len({versioned, unversioned, other_category}) == 3

    @pytest.mark.parametrize("name", ["", "   ", "a/b", "a\\b", "..", "."])
    def test_invalid_names_rejected(self, name):
        with pytest.raises(InvalidExportRequest):
            build_package_root(Path("/v"), Category.OTHER, name)

    def test_all_category_rejected(self):
        with pytest.raises(InvalidExportRequest):
            build_package_root(Path("/v"), Category.ALL, "Hero")

    @pytest.mark.parametrize(
        "custom_folder, version",
        [("../x", ""), ("", "1/../../x"), ("Chars/../../..", "1.0"), ("/abs", ""), ("", "C:/x")],
    )
    def test_location_escaping_storage_root_rejected(self, custom_folder, version):
        with pytest.raises(InvalidExportRequest):
            build_package_root(Path("/v"), Category.STATIC_MESH, "Hero", custom_folder=custom_folder, version=version)


def test_relative_export_path_is_posix(tmp_path):
    root = tmp_path / "StaticMesh" / "Hero" / "1.0"
    assert relative_export_path(root, tmp_path) == "StaticMesh/Hero/1.0"


def test_asset_name():
    assert asset_name("/Game/Chars/Hero") == "Hero"
    assert asset_name("/Game/Chars/Hero.Hero") == "Hero"


class TestPackageFilename:
    def test_maps_mount_point_to_content_root(self, tmp_path):
        path = package_filename("/Game/Chars/Hero", tmp_path, "/Game", "uasset")
        assert path == tmp_path / "Chars" / "Hero.uasset"

    def test_object_suffix_ignored(self, tmp_path):
        path = package_filename("/Game/Chars/Hero.Hero", tmp_path, "/Game", ".uasset")
        assert path == tmp_path / "Chars" / "Hero.uasset"

    def test_outside_mount_point(self, tmp_path):
        with pytest.raises(ValueError):
            package_filename("/Engine/Basic/Cube", tmp_path, "/Game", "uasset")

    def test_mount_point_alone_is_not_a_file(self, tmp_path):
        with pytest.raises(ValueError):
            package_filename("/Game", tmp_path, "/Game", "uasset")


class TestValidateSubfolder:
    @pytest.mark.parametrize("subfolder", ["..", "../x", "a/../../b", "a\\..\\b", "/abs", "C:/Windows"])
    def test_rejects_escaping_paths(self, subfolder):
        with pytest.raises(PathTraversalError):
            validate_subfolder(subfolder)

    def test_normalizes(self):
        assert validate_subfolder("Chars\\Heroes/") == "Chars/Heroes"
        assert validate_subfolder("./Chars") == "Chars"

    def test_empty_means_content_root(self):
        assert validate_subfolder("") == ""

    def test_dots_inside_a_name_are_allowed(self):
        assert validate_subfolder("v1..2") == "v1..2"


def test_resolve_import_target(tmp_path):
    assert resolve_import_target(tmp_path, "") == tmp_path.resolve()
    assert resolve_import_target(tmp_path, "Chars/Heroes") == tmp_path.resolve() / "Chars" / "Heroes"


def test_content_display_path():
    assert content_display_path("") == "/Content"
    assert content_display_path("Chars") == "/Content/Chars"

