"""Catalog commands - browse exported packages."""

from __future__ import annotations

import sys

import click
from rich.panel import Panel
from rich.table import Table

from ..catalog import filter_and_sort
from ..catalog import find_by_name
from ..console import console
from ..factory import create_package_manager
from ..factory import get_project_dir
from ..factory import load_config
from ..factory import resolve_export_root
from ..types import Category
from ..utils.error_format import escape_markup


@click.group(invoke_without_command=True)
@click.pass_context
def catalog(ctx: click.Context):
    """Browse packages in the export root.

    Every call rescans the export root for sidecar descriptors.
    """
    if ctx.invoked_subcommand is None:
        click.echo("\n" + ctx.get_help())
        ctx.exit()


@catalog.command(name="list")
@click.option(
    "--category",
    "-c",
    type=click.Choice([category.value for category in Category], case_sensitive=False),
    default=Category.ALL.value,
    show_default=True,
    help="Only show packages of this category",
)
@click.option("--export-root", type=click.Path(file_okay=False), help="Override the configured export root")
def catalog_list(category: str, export_root: str | None):
    """List exported packages sorted by name."""
    project_dir = get_project_dir()
    config = load_config(project_dir)
    root = resolve_export_root(export_root, config, project_dir)

    records = filter_and_sort(create_package_manager(project_dir, config).scan_catalog(root), Category.parse(category))

    if not records:
        console.print("[yellow]No packages found.[/yellow]")
        console.print(f"[dim]Export root: {escape_markup(root)}[/dim]")
        return

    table = Table(title=f"Packages in {escape_markup(root)}", show_header=True, header_style="bold cyan")
    table.add_column("Name", style="green")
    table.add_column("Category", style="magenta")
    table.add_column("Version", style="yellow")
    table.add_column("Engine")
    table.add_column("Assets", justify="right")
    table.add_column("Path", style="dim")

    for record in records:
        descriptor = record.descriptor
        table.add_row(
            escape_markup(descriptor.name),
            descriptor.category.display_name,
            escape_markup(descriptor.version),
            escape_markup(descriptor.engine_version or "-"),
            str(len(descriptor.exported_asset_names)),
            escape_markup(descriptor.relative_export_path),
        )

    console.print(table)


@catalog.command(name="show")
@click.argument("name")
@click.option("--export-root", type=click.Path(file_okay=False), help="Override the configured export root")
def catalog_show(name: str, export_root: str | None):
    """Show every descriptor recorded for package NAME."""
    project_dir = get_project_dir()
    config = load_config(project_dir)
    root = resolve_export_root(export_root, config, project_dir)

    matches = find_by_name(create_package_manager(project_dir, config).scan_catalog(root), name)
    if not matches:
        console.print(f"[red]Error:[/red] Package '{escape_markup(name)}' not found")
        sys.exit(1)

    for record in filter_and_sort(matches):
        d = record.descriptor
        lines = [
            f"[bold]Name:[/bold] {escape_markup(d.name)}",
            f"[bold]Category:[/bold] {d.category.display_name}",
            f"[bold]Version:[/bold] {escape_markup(d.version)}",
            f"[bold]Version comment:[/bold] {escape_markup(d.version_comment or '-')}",
            f"[bold]Engine version:[/bold] {escape_markup(d.engine_version or '-')}",
            f"[bold]Description:[/bold] {escape_markup(d.description or '-')}",
            f"[bold]Path:[/bold] {escape_markup(d.relative_export_path)}",
            f"[bold]Tags:[/bold] {escape_markup(', '.join(d.tags) or '-')}",
            f"[bold]Assets:[/bold] {escape_markup(', '.join(d.exported_asset_names) or '-')}",
        ]
        if d.preview_image_paths:
            lines.append(f"[bold]Previews:[/bold] {escape_markup(', '.join(d.preview_image_paths))}")
        console.print(Panel("\n".join(lines), title=escape_markup(record.sidecar_path.name), border_style="cyan"))
