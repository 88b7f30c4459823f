"""Settings commands - inspect and change scoped configuration."""

from __future__ import annotations

import sys
from typing import cast

import click
import yaml
from pydantic import ValidationError

from ..console import console
from ..factory import create_settings
from ..factory import get_project_dir
from ..settings import Scope
from ..utils.error_format import escape_markup


@click.group(invoke_without_command=True)
@click.pass_context
def settings(ctx: click.Context):
    """Show or change asset-vault settings."""
    if ctx.invoked_subcommand is None:
        click.echo("\n" + ctx.get_help())
        ctx.exit()


@settings.command(name="show")
def settings_show():
    """Show the effective configuration after merging all scopes."""
    app_settings = create_settings(get_project_dir())
    config = app_settings.get_config()

    console.print("[bold]Settings files:[/bold]")
    for label, path in [
        ("local", app_settings.paths.local_settings),
        ("project", app_settings.paths.project_settings),
        ("global", app_settings.paths.global_settings),
    ]:
        marker = "[green]✓[/green]" if path.exists() else "[dim]-[/dim]"
        console.print(f"  {marker} {label}: {escape_markup(path)}")

    console.print()
    console.print(escape_markup(yaml.safe_dump(config.model_dump(), default_flow_style=False, sort_keys=False)))


@settings.command(name="set")
@click.argument("key")
@click.argument("value")
@click.option(
    "--scope",
    type=click.Choice(["local", "project", "global"]),
    default="project",
    show_default=True,
    help="Where to store the value",
)
def settings_set(key: str, value: str, scope: str):
    """Set KEY (e.g. project.engine_version) to VALUE.

    Lists are given in YAML flow style, e.g. '[uexp, ubulk]'. Anything else
    is stored as a string.
    """
    parsed: object = value
    if value.lstrip().startswith("["):
        try:
            parsed = yaml.safe_load(value)
        except yaml.YAMLError as e:
            raise click.BadParameter(f"Not a valid list: {e}", param_hint="VALUE") from e

    app_settings = create_settings(get_project_dir())
    try:
        app_settings.set_value(key, parsed, scope=cast(Scope, scope))
    except KeyError:
        console.print(f"[red]Error:[/red] Unknown setting '{escape_markup(key)}'")
        sys.exit(1)
    except ValidationError as e:
        console.print(f"[red]Error:[/red] Invalid value for {escape_markup(key)}: {escape_markup(e)}")
        sys.exit(1)

    console.print(f"[green]✓ Set {escape_markup(key)} at {scope} scope[/green]")
