"""Command-line interface for sensus."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import click
from rich.logging import RichHandler
from rich.markup import escape

from sensus import __version__
from sensus.config import Config, load_config
from sensus.utils.output import (
    error,
    error_console,
    set_color,
    set_pager,
    set_verbosity,
    warning,
)


class Context:
    """Shared context for all commands."""

    def __init__(self) -> None:
        self.config: Config | None = None
        self.quiet: bool = False


pass_context = click.make_pass_decorator(Context, ensure=True)


def _configure_logging(*, verbose: bool, debug: bool) -> None:
    """Route library log records to stderr through rich."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logger = logging.getLogger("sensus")
    logger.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=error_console, show_path=debug))


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=False, path_type=Path),
    help="Path to config file (default: ~/.config/sensus/config.toml)",
)
@click.option(
    "--review-db",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to the decision database (overrides config)",
)
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colored output",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose output",
)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug output (implies --verbose)",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    default=False,
    help="Suppress non-error output",
)
@click.option(
    "--pager/--no-pager",
    default=None,
    help="Force pager on/off (default: auto-detect)",
)
@click.version_option(version=__version__, prog_name="sensus")
@click.pass_context
def cli(
    ctx: click.Context,
    config: Path | None,
    review_db: Path | None,
    no_color: bool,
    verbose: bool,
    debug: bool,
    quiet: bool,
    pager: bool | None,
) -> None:
    """sensus: Boolean-query screening of the dataWASHES paper corpus.

    Fetch papers, filter them with AND / OR / NOT, parentheses, "quoted
    phrases" and wildcards (soft*), and record include (IC) / exclude (EC)
    decisions for a systematic literature review.

    Configuration is loaded from ~/.config/sensus/config.toml by default.
    Use --config to specify an alternative configuration file.

    Examples:

        # Screen the corpus
        sensus search '(cloud* OR privacy) AND NOT ethics'

        # Include a paper
        sensus decide include 42
    """
    ctx.ensure_object(Context)
    app_ctx = ctx.obj
    app_ctx.quiet = quiet

    set_verbosity(verbose=verbose, debug=debug)
    _configure_logging(verbose=verbose, debug=debug)
    set_pager(pager)

    # Color: disabled by --no-color, NO_COLOR env, or config
    disable_color = no_color or os.environ.get("NO_COLOR") is not None
    if disable_color:
        set_color(False)

    try:
        loaded_config, warnings = load_config(config)
        app_ctx.config = loaded_config

        if review_db is not None:
            loaded_config.review_db = review_db.expanduser().resolve()

        if not disable_color and not loaded_config.colored_output:
            set_color(False)

        if not quiet:
            for warn in warnings:
                warning(escape(warn))

    except Exception as e:
        error(escape(str(e)))
        ctx.exit(1)


@cli.command("help")
@click.argument("command", required=False, nargs=-1)
@click.pass_context
def help_cmd(ctx: click.Context, command: tuple[str, ...]) -> None:
    """Show help for a command."""
    group = cli
    for name in command:
        cmd = group.get_command(ctx, name)
        if cmd is None:
            error(f"Unknown command: {escape(name)}")
            ctx.exit(1)
            return
        if isinstance(cmd, click.Group):
            group = cmd
        else:
            click.echo(cmd.get_help(ctx))
            return
    click.echo(group.get_help(ctx))


def register_commands() -> None:
    """Register all commands from the commands package."""
    from sensus.commands import discover_commands

    for command in discover_commands():
        cli.add_command(command)


# Register commands on import
register_commands()
