"""Conflict check commands - report what an export or import would overwrite."""

from __future__ import annotations

import sys

import click

from ..console import console
from ..errors import InvalidExportRequest
from ..factory import create_package_manager
from ..factory import get_project_dir
from ..factory import load_config
from ..factory import resolve_export_root
from ..utils.error_format import escape_markup
from .export import build_options
from .export import package_location_options


@click.group(invoke_without_command=True)
@click.pass_context
def conflicts(ctx: click.Context):
    """Check for conflicts before exporting or importing."""
    if ctx.invoked_subcommand is None:
        click.echo("\n" + ctx.get_help())
        ctx.exit()


@conflicts.command(name="export")
@package_location_options
def conflicts_export(name: str | None, category: str, custom_folder: str, version: str, export_root: str | None):
    """Check whether a package location already holds assets."""
    project_dir = get_project_dir()
    config = load_config(project_dir)
    root = resolve_export_root(export_root, config, project_dir)
    options = build_options(name, category, custom_folder, version)

    try:
        exists, package_root = create_package_manager(project_dir, config).check_export_conflict(root, options)
    except InvalidExportRequest as e:
        console.print(f"[red]Error:[/red] {escape_markup(e)}")
        sys.exit(1)

    if exists:
        console.print(f"[yellow]Conflict:[/yellow] {escape_markup(package_root)} already contains assets")
    else:
        console.print(f"[green]No conflict:[/green] {escape_markup(package_root)}")


@conflicts.command(name="import")
@click.argument("relative_path")
@click.option("--subfolder", "-s", default="", help="Target folder below the content root")
@click.option("--export-root", type=click.Path(file_okay=False), help="Override the configured export root")
def conflicts_import(relative_path: str, subfolder: str, export_root: str | None):
    """List package files that already exist in the target folder."""
    project_dir = get_project_dir()
    config = load_config(project_dir)
    root = resolve_export_root(export_root, config, project_dir)

    report = create_package_manager(project_dir, config).check_import_conflict(root, relative_path, subfolder)

    if not report.determinable:
        console.print(f"[red]Cannot check conflicts:[/red] {escape_markup(report.reason)}")
        sys.exit(1)

    if not report.has_conflicts:
        console.print("[green]No conflicts[/green]")
        return

    console.print(f"[yellow]{len(report.conflicts)} conflicting file(s):[/yellow]")
    for conflict in report.conflicts:
        console.print(f"  {escape_markup(conflict)}")
