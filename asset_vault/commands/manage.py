"""Housekeeping commands - delete and open packages, list categories."""

from __future__ import annotations

import sys

import click
from rich.table import Table

from ..console import console
from ..errors import PathTraversalError
from ..factory import create_package_manager
from ..factory import get_project_dir
from ..factory import load_config
from ..factory import resolve_export_root
from ..paths import validate_subfolder
from ..types import Category
from ..utils.error_format import escape_markup


@click.command()
@click.argument("relative_path")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.option("--export-root", type=click.Path(file_okay=False), help="Override the configured export root")
def delete(relative_path: str, yes: bool, export_root: str | None):
    """Delete a package folder and everything in it."""
    project_dir = get_project_dir()
    config = load_config(project_dir)
    root = resolve_export_root(export_root, config, project_dir)

    try:
        clean = validate_subfolder(relative_path)
    except PathTraversalError as e:
        console.print(f"[red]Error:[/red] {escape_markup(e)}")
        sys.exit(1)

    # Never delete the export root itself
    if not clean:
        console.print("[red]Error:[/red] A package path is required")
        sys.exit(1)

    target = root / clean
    if not yes and not click.confirm(f"Delete {target} and all its contents?", default=False):
        console.print("[yellow]Cancelled[/yellow]")
        return

    if not create_package_manager(project_dir, config).delete_package(target):
        sys.exit(1)
    console.print(f"[green]✓ Deleted {escape_markup(target)}[/green]")


@click.command(name="open")
@click.argument("relative_path")
@click.option("--export-root", type=click.Path(file_okay=False), help="Override the configured export root")
def open_cmd(relative_path: str, export_root: str | None):
    """Open a package folder in the file manager, creating it if needed."""
    project_dir = get_project_dir()
    config = load_config(project_dir)
    root = resolve_export_root(export_root, config, project_dir)

    try:
        folder = create_package_manager(project_dir, config).open_package_folder(root, relative_path)
    except (PathTraversalError, OSError) as e:
        console.print(f"[red]Error:[/red] {escape_markup(e)}")
        sys.exit(1)
    console.print(f"[dim]Opened {escape_markup(folder)}[/dim]")


@click.command()
def categories():
    """List package categories with their index and display name."""
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Index", justify="right")
    table.add_column("Name", style="green")
    table.add_column("Display name")
    table.add_column("Storable")

    for index, category in enumerate(Category):
        table.add_row(str(index), category.value, category.display_name, "yes" if category.is_storable else "no")

    console.print(table)
