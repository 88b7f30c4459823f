"""Import command - copy an exported package back into the project."""

from __future__ import annotations

import sys

import click

from ..console import console
from ..factory import create_package_manager
from ..factory import get_project_dir
from ..factory import load_config
from ..factory import resolve_export_root
from ..utils.error_format import escape_markup


@click.command(name="import")
@click.argument("relative_path")
@click.option("--subfolder", "-s", default="", help="Target folder below the content root")
@click.option("--force", "-f", is_flag=True, help="Overwrite files that already exist")
@click.option("--export-root", type=click.Path(file_okay=False), help="Override the configured export root")
def import_cmd(relative_path: str, subfolder: str, force: bool, export_root: str | None):
    """Import a package into the project content folder.

    RELATIVE_PATH is the package path below the export root, as shown by
    'asset-vault catalog list' (e.g. StaticMesh/Hero/1.0).

    Existing files are skipped unless --force is given.
    """
    project_dir = get_project_dir()
    config = load_config(project_dir)
    root = resolve_export_root(export_root, config, project_dir)
    manager = create_package_manager(project_dir, config)

    if not force:
        report = manager.check_import_conflict(root, relative_path, subfolder)
        if report.has_conflicts:
            console.print(f"[yellow]{len(report.conflicts)} file(s) already exist and will be skipped:[/yellow]")
            for conflict in report.conflicts:
                console.print(f"  [dim]{escape_markup(conflict)}[/dim]")
            console.print("[dim]Use --force to overwrite them.[/dim]")

    if not manager.import_package(root, relative_path, subfolder, force_overwrite=force):
        sys.exit(1)
