"""Data models for exported asset packages.

Defines the core types shared by export, import and the catalog:
- Category: storage category of a package (``All`` is a query wildcard)
- ExportOptions: caller-supplied metadata for an export
- PackageDescriptor: the persisted sidecar record of one package
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_validator

_ENUM_PREFIX = "EAssetType::"


class Category(str, Enum):
    """Package category.

    The value is the canonical name used in storage paths and sidecar files.
    ``ALL`` only ever appears in queries, never on disk.
    """

    ALL = "All"
    BLUEPRINT = "Blueprint"
    MATERIAL = "Material"
    LEVEL = "Level"
    TEXTURE = "Texture"
    STATIC_MESH = "StaticMesh"
    SOUND = "Sound"
    OTHER = "Other"

    @property
    def display_name(self) -> str:
        """Human-readable label (``Static Mesh``)."""
        return _DISPLAY_NAMES.get(self, self.value)

    @property
    def is_storable(self) -> bool:
        return self is not Category.ALL

    @classmethod
    def parse(cls, value: str | Category | None) -> Category:
        """Parse a category from a sidecar or user string.

        Accepts canonical names, display labels and the ``EAssetType::`` prefix
        written by older exporters, case-insensitively. Anything unrecognised
        maps to ``OTHER``.
        """
        if isinstance(value, Category):
            return value
        if not value:
            return cls.OTHER

        text = value.strip().replace(_ENUM_PREFIX, "")
        folded = text.replace(" ", "").lower()
        for member in cls:
            if member.value.lower() == folded:
                return member
        return cls.OTHER

    @classmethod
    def from_index(cls, index: int) -> Category:
        """Category at ordinal ``index``; out of range maps to ``OTHER``."""
        members = list(cls)
        if 0 <= index < len(members):
            return members[index]
        return cls.OTHER

    @classmethod
    def display_name_for_index(cls, index: int) -> str:
        """Display label at ordinal ``index``; out of range returns ``"Invalid"``."""
        members = list(cls)
        if 0 <= index < len(members):
            return members[index].display_name
        return "Invalid"

    @classmethod
    def max_index(cls) -> int:
        return len(cls) - 1


_DISPLAY_NAMES = {
    Category.STATIC_MESH: "Static Mesh",
}


def _strings_only(value: Any) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError("expected a list of strings")
    return [item for item in value if isinstance(item, str)]


class ExportOptions(BaseModel):
    """Metadata supplied by the caller for one export."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = Field(..., min_length=1, alias="Name", description="Package name")
    category: Category = Field(Category.OTHER, alias="AssetType", description="Storage category")
    description: str = Field("", alias="Description")
    engine_version: str = Field("", alias="EngineVersion", description="Engine/tool version the payload was made with")
    version: str = Field("", alias="Version", description="Package version; empty means unversioned layout")
    version_comment: str = Field("", alias="VersionComment")
    custom_folder: str = Field("", alias="CustomFolder", description="Optional grouping folder below the category")
    tags: list[str] = Field(default_factory=list, alias="Tags")
    preview_image_paths: list[str] = Field(default_factory=list, alias="PreviewImages")
    custom_subfolders: list[str] = Field(default_factory=list, alias="CustomSubfolders")

    @field_validator("category", mode="before")
    @classmethod
    def _parse_category(cls, value: Any) -> Category:
        if value is None or isinstance(value, str | Category):
            return Category.parse(value)
        raise ValueError(f"invalid category: {value!r}")

    @field_validator("tags", "preview_image_paths", "custom_subfolders", mode="before")
    @classmethod
    def _filter_strings(cls, value: Any) -> list[str]:
        return _strings_only(value)

    @field_validator("description", "engine_version", "version", "version_comment", "custom_folder", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class PackageDescriptor(ExportOptions):
    """Sidecar record of an exported package.

    ``relative_export_path`` is recorded at write time and is authoritative
    when the package is located again. ``exported_asset_names`` lists the
    primary payload files present under the package root when the sidecar
    was written.
    """

    relative_export_path: str = Field("", alias="RelativeExportPath")
    exported_asset_names: list[str] = Field(default_factory=list, alias="Assets")

    @field_validator("relative_export_path", mode="before")
    @classmethod
    def _normalize_separators(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, str):
            return value.replace("\\", "/")
        return value

    @field_validator("category", mode="after")
    @classmethod
    def _stored_category(cls, value: Category) -> Category:
        # ``All`` is a query wildcard; a record on disk is never stored under it
        return Category.OTHER if value is Category.ALL else value

    @field_validator("exported_asset_names", mode="before")
    @classmethod
    def _filter_asset_names(cls, value: Any) -> list[str]:
        return _strings_only(value)

    def to_sidecar(self) -> dict[str, Any]:
        """Serialize using the sidecar field names."""
        return self.model_dump(mode="json", by_alias=True)
