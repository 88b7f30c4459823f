"""Asset Vault CLI - share packaged assets between projects."""

import logging
from pathlib import Path

import click

from . import __version__
from .commands.catalog import catalog as catalog_group
from .commands.conflicts import conflicts as conflicts_group
from .commands.export import export_cmd
from .commands.import_package import import_cmd
from .commands.manage import categories
from .commands.manage import delete
from .commands.manage import open_cmd
from .commands.settings import settings as settings_group
from .factory import VaultContext
from .logging_setup import init_json_logging

logger = logging.getLogger(__name__)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="asset-vault")
@click.option(
    "--project-dir",
    "-C",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Project directory (defaults to the current directory)",
)
@click.pass_context
def cli(ctx: click.Context, project_dir: Path | None):
    """Asset Vault - export assets with their dependencies and import them elsewhere."""
    init_json_logging()
    project = (project_dir or Path.cwd()).resolve()
    ctx.obj = VaultContext(project_dir=project)
    logger.debug(f"Project directory: {project}")

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(export_cmd)
cli.add_command(import_cmd)
cli.add_command(conflicts_group)
cli.add_command(catalog_group)
cli.add_command(delete)
cli.add_command(open_cmd)
cli.add_command(categories)
cli.add_command(settings_group)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
