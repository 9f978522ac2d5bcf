"""Initialize configuration file for sensus."""

from __future__ import annotations

from importlib import resources
from pathlib import Path

import click
from rich.markup import escape

from sensus.cli import Context, pass_context
from sensus.config import Config, get_default_config_path, save_config
from sensus.exceptions import ConfigValidationError
from sensus.utils.output import error, info, success


def _load_example_config() -> str:
    """Load the example configuration from package data."""
    return resources.files("sensus").joinpath("config.example.toml").read_text()


@click.command("init-config")
@click.option(
    "--force",
    "-f",
    is_flag=True,
    default=False,
    help="Overwrite existing config file",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Output path for config file (default: ~/.config/sensus/config.toml)",
)
@click.option("--api-url", default=None, help="dataWASHES base URL to write into the config")
@click.option(
    "--review-db",
    "review_db",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Decision database path to write into the config",
)
@pass_context
def cli(
    ctx: Context,
    force: bool,
    output: Path | None,
    api_url: str | None,
    review_db: Path | None,
) -> None:
    """Create a new configuration file with default settings.

    Without --api-url/--review-db the documented example config is
    written verbatim. With either option a minimal config holding those
    values (and defaults for the rest) is generated instead.

    Examples:

    \b
      # Create config at default location
      sensus init-config

    \b
      # Point at a local mirror of the service
      sensus init-config --api-url http://localhost:5000 --force
    """
    config_path = output if output is not None else get_default_config_path()
    config_path = config_path.expanduser().resolve()

    if config_path.exists() and not force:
        error(
            f"Config file already exists: {escape(str(config_path))}",
            hint="Use --force to overwrite",
        )
        raise SystemExit(1)

    try:
        if api_url is None and review_db is None:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            config_path.write_text(_load_example_config())
        else:
            config = Config()
            if api_url is not None:
                config.api_base_url = api_url
            if review_db is not None:
                config.review_db = review_db
            config.validate()
            save_config(config, config_path)
    except ConfigValidationError as e:
        error(escape(str(e)))
        raise SystemExit(1)
    except OSError as e:
        error(f"Failed to write config file: {escape(str(e))}")
        raise SystemExit(1)

    success(f"Created config file: {escape(str(config_path))}")
    info("Edit this file to customize your settings.")
