"""Export commands - package an asset and its hard dependencies."""

from __future__ import annotations

import sys
from collections.abc import Callable
from typing import Any

import click
from pydantic import ValidationError

from ..console import console
from ..errors import InvalidExportRequest
from ..factory import create_package_manager
from ..factory import get_project_dir
from ..factory import load_config
from ..factory import resolve_export_root
from ..paths import asset_name
from ..types import Category
from ..types import ExportOptions
from ..utils.error_format import escape_markup

STORABLE_CATEGORIES = [category.value for category in Category if category.is_storable]


def package_location_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Options that determine where a package lives."""
    options = [
        click.option("--name", "-n", help="Package name (defaults to the asset name for a single asset)"),
        click.option(
            "--category",
            "-c",
            type=click.Choice(STORABLE_CATEGORIES, case_sensitive=False),
            default=Category.OTHER.value,
            show_default=True,
            help="Storage category",
        ),
        click.option("--custom-folder", default="", help="Grouping folder below the category"),
        click.option("--version", "-v", "version", default="", help="Package version (omit for an unversioned layout)"),
        click.option("--export-root", type=click.Path(file_okay=False), help="Override the configured export root"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_options(name: str | None, category: str, custom_folder: str, version: str, **extra: Any) -> ExportOptions:
    """ExportOptions from CLI values.

    Raises:
        click.UsageError: missing name or invalid values
    """
    if not name:
        raise click.UsageError("--name is required")
    try:
        return ExportOptions(
            name=name,
            category=Category.parse(category),
            custom_folder=custom_folder,
            version=version,
            **extra,
        )
    except ValidationError as e:
        raise click.UsageError(f"Invalid package options: {e}") from e


@click.command(name="export")
@click.argument("package_ids", nargs=-1, required=True)
@package_location_options
@click.option("--description", "-d", default="", help="Package description")
@click.option("--comment", default="", help="Version comment")
@click.option("--engine-version", default="", help="Engine version (defaults to project.engine_version)")
@click.option("--tag", "tags", multiple=True, help="Tag (repeatable)")
@click.option("--preview", "previews", multiple=True, help="Preview image path (repeatable)")
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing package without asking")
def export_cmd(
    package_ids: tuple[str, ...],
    name: str | None,
    category: str,
    custom_folder: str,
    version: str,
    export_root: str | None,
    description: str,
    comment: str,
    engine_version: str,
    tags: tuple[str, ...],
    previews: tuple[str, ...],
    force: bool,
):
    """Export assets with their hard dependencies.

    PACKAGE_IDS are package ids such as /Game/Chars/Hero. One id produces a
    package named after the asset; several ids need --name.

    Examples:

        \b
        # Export a mesh as version 1.0
        asset-vault export /Game/Props/Crate --category StaticMesh --version 1.0

        \b
        # Export a set of materials as one package
        asset-vault export /Game/M/A /Game/M/B --name Metals --category Material
    """
    project_dir = get_project_dir()
    config = load_config(project_dir)
    root = resolve_export_root(export_root, config, project_dir)

    if name is None and len(package_ids) == 1:
        name = asset_name(package_ids[0])

    options = build_options(
        name,
        category,
        custom_folder,
        version,
        description=description,
        version_comment=comment,
        engine_version=engine_version,
        tags=list(tags),
        preview_image_paths=list(previews),
    )
    manager = create_package_manager(project_dir, config)

    try:
        exists, package_root = manager.check_export_conflict(root, options)
    except InvalidExportRequest as e:
        console.print(f"[red]Error:[/red] {escape_markup(e)}")
        sys.exit(1)

    if exists and not force:
        console.print(f"[yellow]Package already contains assets:[/yellow] {escape_markup(package_root)}")
        if not click.confirm("Overwrite?", default=False):
            console.print("[yellow]Cancelled[/yellow]")
            sys.exit(1)

    if len(package_ids) == 1:
        ok = manager.export(package_ids[0], root, options)
    else:
        ok = manager.export_many(list(package_ids), root, options)

    if not ok:
        sys.exit(1)
