"""Tests for Category and the export option/descriptor models."""

import pytest
from pydantic import ValidationError

from asset_vault.types import Category
from asset_vault.types import ExportOptions
from asset_vault.types import PackageDescriptor


class TestCategory:
    def test_parse_is_case_insensitive(self):
        assert Category.parse("staticmesh") is Category.STATIC_MESH
        assert Category.parse("MATERIAL") is Category.MATERIAL

    def test_parse_accepts_display_label_and_enum_prefix(self):
        assert Category.parse("Static Mesh") is Category.STATIC_MESH
        assert Category.parse("EAssetType::Texture") is Category.TEXTURE

    def test_parse_unknown_maps_to_other(self):
        assert Category.parse("Animation") is Category.OTHER
        assert Category.parse("") is Category.OTHER
        assert Category.parse(None) is Category.OTHER

    def test_display_name(self):
        assert Category.STATIC_MESH.display_name == "Static Mesh"
        assert Category.SOUND.display_name == "Sound"

    def test_all_is_not_storable(self):
        assert not Category.ALL.is_storable
        assert all(c.is_storable for c in Category if c is not Category.ALL)

    def test_index_lookup(self):
        assert Category.from_index(0) is Category.ALL
        assert Category.from_index(5) is Category.STATIC_MESH
        assert Category.from_index(99) is Category.OTHER
        assert Category.from_index(-1) is Category.OTHER

    def test_display_name_for_index_out_of_range(self):
        assert Category.display_name_for_index(5) == "Static Mesh"
        assert Category.display_name_for_index(Category.max_index() + 1) == "Invalid"


class TestExportOptions:
    def test_defaults(self):
        options = ExportOptions(name="Hero")
        assert options.category is Category.OTHER
        assert options.version == ""
        assert options.tags == []

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            ExportOptions(name="")

    def test_populates_from_sidecar_aliases(self):
        options = ExportOptions.model_validate(
            {"Name": "Hero", "AssetType": "StaticMesh", "Tags": ["a", 3, "b"], "Description": None}
        )
        assert options.name == "Hero"
        assert options.category is Category.STATIC_MESH
        assert options.tags == ["a", "b"]
        assert options.description == ""


class TestPackageDescriptor:
    def test_relative_path_uses_forward_slashes(self):
        descriptor = PackageDescriptor(name="Hero", relative_export_path="StaticMesh\\Hero\\1.0")
        assert descriptor.relative_export_path == "StaticMesh/Hero/1.0"

    def test_to_sidecar_uses_sidecar_keys(self):
        descriptor = PackageDescriptor(
            name="Hero",
            category=Category.STATIC_MESH,
            version="1.0",
            relative_export_path="StaticMesh/Hero/1.0",
            exported_asset_names=["Hero"],
        )
        data = descriptor.to_sidecar()

        assert data["Name"] == "Hero"
        assert data["AssetType"] == "StaticMesh"
        assert data["RelativeExportPath"] == "StaticMesh/Hero/1.0"
        assert data["Assets"] == ["Hero"]
        for key in ("Description", "EngineVersion", "Version", "VersionComment", "CustomFolder", "Tags"):
            assert key in data

    def test_wildcard_category_is_never_stored(self):
        descriptor = PackageDescriptor.model_validate({"Name": "Loose", "AssetType": "All"})
        assert descriptor.category is Category.OTHER
