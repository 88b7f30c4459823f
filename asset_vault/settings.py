"""Settings management for asset-vault.

Simple, scope-aware YAML settings. Scope priority (most specific wins):
1. local (.assetvault/settings.local.yaml) - gitignored, machine-specific
2. project (.assetvault/settings.yaml) - committed, team-shared
3. global (~/.assetvault/settings.yaml) - user defaults

Merged settings are validated into a VaultConfig.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from typing import Literal

import yaml
from pydantic import BaseModel
from pydantic import Field

logger = logging.getLogger(__name__)

Scope = Literal["local", "project", "global"]

SETTINGS_DIR_NAME = ".assetvault"


class VaultSection(BaseModel):
    export_root: str = Field("~/AssetVault", description="Storage root for exported packages")


class ProjectSection(BaseModel):
    content_root: str = Field("Content", description="Project content directory")
    mount_point: str = Field("/Game", description="Package id prefix that maps to the content root")
    engine_version: str = Field("", description="Stamped into descriptors when an export leaves it empty")


class RegistrySection(BaseModel):
    manifest: str = Field(f"{SETTINGS_DIR_NAME}/dependencies.yaml", description="YAML dependency manifest")


class PackagingSection(BaseModel):
    primary_extension: str = Field("uasset", description="Extension of primary payload files")
    auxiliary_extensions: list[str] = Field(default_factory=lambda: ["uexp", "ubulk", "map"])
    import_extensions: list[str] = Field(default_factory=lambda: ["uasset", "uexp", "ubulk"])


class VaultConfig(BaseModel):
    """Effective vault configuration."""

    vault: VaultSection = Field(default_factory=VaultSection)
    project: ProjectSection = Field(default_factory=ProjectSection)
    registry: RegistrySection = Field(default_factory=RegistrySection)
    packaging: PackagingSection = Field(default_factory=PackagingSection)

    def resolve_path(self, value: str, base_dir: Path) -> Path:
        """Expand ``~`` and anchor relative paths at ``base_dir``."""
        path = Path(value).expanduser()
        return path if path.is_absolute() else base_dir / path

    def export_root(self, base_dir: Path) -> Path:
        return self.resolve_path(self.vault.export_root, base_dir)

    def content_root(self, base_dir: Path) -> Path:
        return self.resolve_path(self.project.content_root, base_dir)

    def manifest_path(self, base_dir: Path) -> Path:
        return self.resolve_path(self.registry.manifest, base_dir)


@dataclass
class SettingsPaths:
    """Standard paths for settings files."""

    global_settings: Path
    project_settings: Path
    local_settings: Path

    @classmethod
    def default(cls, project_dir: Path | None = None) -> SettingsPaths:
        """Create default paths for the standard layout."""
        project_dir = project_dir or Path.cwd()
        return cls(
            global_settings=Path.home() / SETTINGS_DIR_NAME / "settings.yaml",
            project_settings=project_dir / SETTINGS_DIR_NAME / "settings.yaml",
            local_settings=project_dir / SETTINGS_DIR_NAME / "settings.local.yaml",
        )


class AppSettings:
    """Settings manager with scope-aware merging.

    Usage:
        settings = AppSettings()
        config = settings.get_config()
        settings.set_value("project.engine_version", "5.4", scope="project")
    """

    def __init__(self, paths: SettingsPaths | None = None) -> None:
        self.paths = paths or SettingsPaths.default()

    def get_merged_settings(self) -> dict[str, Any]:
        """Load and merge settings from all scopes."""
        result: dict[str, Any] = {}
        for path in [self.paths.global_settings, self.paths.project_settings, self.paths.local_settings]:
            if path.exists():
                try:
                    with open(path, encoding="utf-8") as f:
                        content = yaml.safe_load(f) or {}
                    result = self._deep_merge(result, content)
                except (OSError, yaml.YAMLError) as e:
                    logger.warning(f"Skipping malformed settings file {path}: {e}")
        return result

    def get_config(self) -> VaultConfig:
        """Validated effective configuration."""
        return VaultConfig.model_validate(self.get_merged_settings())

    def get_value(self, key: str) -> Any:
        """Effective value of a dotted key (``project.engine_version``)."""
        node: Any = self.get_config().model_dump()
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                raise KeyError(key)
            node = node[part]
        return node

    def set_value(self, key: str, value: Any, scope: Scope = "project") -> None:
        """Set a dotted key at ``scope``.

        Raises:
            KeyError: unknown key
            pydantic.ValidationError: value has the wrong type
        """
        self.get_value(key)

        settings = self._read_scope(scope)
        node = settings
        parts = key.split(".")
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[parts[-1]] = value

        VaultConfig.model_validate(self._deep_merge(self.get_merged_settings(), settings))
        self._write_scope(scope, settings)
        logger.info(f"Set {key} at {scope} scope")

    # ----- Scope utilities -----

    def _get_scope_path(self, scope: Scope) -> Path:
        """Get settings file path for scope."""
        return {
            "local": self.paths.local_settings,
            "project": self.paths.project_settings,
            "global": self.paths.global_settings,
        }[scope]

    def _read_scope(self, scope: Scope) -> dict[str, Any]:
        """Read settings from a specific scope."""
        path = self._get_scope_path(scope)
        if not path.exists():
            return {}
        try:
            with open(path, encoding="utf-8") as f:
                return yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError):
            return {}

    def _write_scope(self, scope: Scope, settings: dict[str, Any]) -> None:
        """Write settings to a specific scope."""
        path = self._get_scope_path(scope)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(settings, f, default_flow_style=False)

    def _deep_merge(self, base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dicts, overlay wins."""
        result = base.copy()
        for key, value in overlay.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result
