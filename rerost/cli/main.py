"""Main CLI entry point for rerost."""

import click
import logging
import sys
import traceback
import yaml
from pathlib import Path
from typing import NoReturn, Optional

from rich.console import Console
from rich.logging import RichHandler

from ..core.config import ConfigManager
from ..core.exceptions import CommandNotFoundError, ForkError
from ..core.registry import ForkRegistry, format_all, format_clean_report, format_listing
from ..storage.cloner import create_cloner


class RerostGroup(click.Group):
    """Command group that reports unknown commands on stdout and exits 1."""

    def resolve_command(self, ctx: click.Context, args):
        cmd_name = click.utils.make_str(args[0])
        if not ctx.resilient_parsing and self.get_command(ctx, cmd_name) is None:
            _fail(ctx, CommandNotFoundError(cmd_name))
        return super().resolve_command(ctx, args)


def _fail(ctx: click.Context, error: Exception) -> NoReturn:
    """Report an operation error on stdout and exit non-zero."""
    click.echo(f"Error: {error}")
    if ctx.find_root().obj and ctx.find_root().obj.get('verbose'):
        traceback.print_exc()
    ctx.exit(1)


def _configure_logging(level: str, verbose: bool) -> None:
    logging.basicConfig(
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)]
    )
    logging.getLogger("rerost").setLevel(logging.DEBUG if verbose else level.upper())


def _build_registry(ctx: click.Context) -> ForkRegistry:
    config = ctx.obj['config']
    clone_config = config['clone']
    cloner = create_cloner(clone_config['strategy'], clone_config['cp_command'])

    root = config['registry'].get('root')
    return ForkRegistry(cloner, Path(root).expanduser().absolute() if root else None)


@click.group(cls=RerostGroup, invoke_without_command=True)
@click.option('--config', '-c', type=click.Path(exists=True, dir_okay=False),
              help='Path to configuration file')
@click.option('--registry-root', '-r', type=click.Path(file_okay=False),
              help='Directory holding fork directories (default: system temp)')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.pass_context
def cli(ctx: click.Context, config: Optional[str], registry_root: Optional[str], verbose: bool):
    """rerost - Developer workflow tools."""
    ctx.ensure_object(dict)

    config_manager = ConfigManager()
    if config:
        config_data = config_manager.load_config(Path(config))
    else:
        config_data = config_manager.load_config()

    validation_errors = config_manager.validate_config(config_data)
    if validation_errors:
        click.echo("Configuration validation errors:", err=True)
        for error in validation_errors:
            click.echo(f"  - {error}", err=True)
        sys.exit(1)

    if registry_root:
        config_data['registry']['root'] = registry_root

    _configure_logging(config_data['logging']['level'], verbose)

    # Store in context for subcommands
    ctx.obj['config'] = config_data
    ctx.obj['config_manager'] = config_manager
    ctx.obj['verbose'] = verbose

    if ctx.invoked_subcommand is None:
        click.echo("Usage: rerost <command> <args>\n")
        for name in cli.list_commands(ctx):
            command = cli.get_command(ctx, name)
            click.echo(f"{name}: {command.get_short_help_str()}")


@cli.group('fork-dir', cls=RerostGroup, invoke_without_command=True)
@click.pass_context
def fork_dir(ctx: click.Context):
    """Copy current directory to a new directory."""
    if ctx.invoked_subcommand is not None:
        return

    try:
        record = _build_registry(ctx).create()
    except ForkError as e:
        _fail(ctx, e)

    click.echo(str(record.clone_path))


@fork_dir.command('list')
@click.pass_context
def list_forks(ctx: click.Context):
    """List forks of the current directory as JSON."""
    try:
        listing = _build_registry(ctx).list_for_source()
    except ForkError as e:
        _fail(ctx, e)

    click.echo(format_listing(listing), nl=False)


@fork_dir.command('list-all')
@click.pass_context
def list_all_forks(ctx: click.Context):
    """List every fork directory, one per line."""
    try:
        fork_paths = _build_registry(ctx).list_all()
    except ForkError as e:
        _fail(ctx, e)

    click.echo(format_all(fork_paths), nl=False)


@fork_dir.command('clean')
@click.pass_context
def clean_forks(ctx: click.Context):
    """Delete every fork directory."""
    try:
        report = _build_registry(ctx).clean()
    except ForkError as e:
        _fail(ctx, e)

    if ctx.obj['verbose']:
        for failure in report.failures:
            click.echo(f"  ✗ {failure.path}: {failure.error}", err=True)

    click.echo(format_clean_report(report), nl=False)


@cli.command()
@click.option('--init', 'create_file', is_flag=True,
              help='Write the default configuration file if it does not exist')
@click.pass_context
def config(ctx: click.Context, create_file: bool):
    """Show current configuration."""
    config_manager = ctx.obj['config_manager']
    config_path = config_manager.get_config_path()

    if create_file:
        if config_path.exists():
            click.echo(f"Configuration file already exists: {config_path}")
        elif config_manager.create_default_config_file():
            click.echo(f"✓ Created configuration file: {config_path}")
        else:
            click.echo(f"✗ Failed to create configuration file: {config_path}", err=True)
            sys.exit(1)
        return

    click.echo(f"Configuration file: {config_path}")
    click.echo("Current configuration:")
    click.echo("=" * 50)
    click.echo(yaml.safe_dump(ctx.obj['config'], default_flow_style=False), nl=False)


if __name__ == '__main__':
    cli()
