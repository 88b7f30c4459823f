"""Factory helpers wiring settings into a PackageManager for the CLI."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import click

from .console import console
from .manager import PackageManager
from .settings import AppSettings
from .settings import SettingsPaths
from .settings import VaultConfig
from .ui.notifier import ConsoleNotifier

logger = logging.getLogger(__name__)


@dataclass
class VaultContext:
    """Per-invocation CLI state."""

    project_dir: Path


def get_project_dir(ctx: click.Context | None = None) -> Path:
    """Project directory from the root ``--project`` option, else the cwd."""
    ctx = ctx or click.get_current_context(silent=True)
    if ctx is not None:
        obj = ctx.find_object(VaultContext)
        if obj is not None:
            return obj.project_dir
    return Path.cwd()


def create_settings(project_dir: Path) -> AppSettings:
    return AppSettings(SettingsPaths.default(project_dir))


def load_config(project_dir: Path) -> VaultConfig:
    return create_settings(project_dir).get_config()


def create_package_manager(project_dir: Path, config: VaultConfig | None = None) -> PackageManager:
    """Manager for ``project_dir`` that reports to the shared console."""
    config = config or load_config(project_dir)
    logger.debug(f"Creating package manager for {project_dir}")
    return PackageManager.from_config(config, project_dir, notifier=ConsoleNotifier(console))


def resolve_export_root(export_root: str | None, config: VaultConfig, project_dir: Path) -> Path:
    """``--export-root`` when given, otherwise the configured storage root."""
    if export_root:
        return config.resolve_path(export_root, project_dir)
    return config.export_root(project_dir)
