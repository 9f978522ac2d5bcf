"""Export reviewer decisions as JSON backup or CSV audit trail."""

from __future__ import annotations

from pathlib import Path

import click
from rich.markup import escape

from sensus.cli import Context, pass_context
from sensus.commands._shared import EXIT_STORE_ERROR, EXIT_USAGE_ERROR, require_config
from sensus.exceptions import ReviewStoreError
from sensus.review.export import CSV_FILENAME, JSON_FILENAME, export_csv, export_json
from sensus.review.session import get_review_session
from sensus.review.store import load_decisions
from sensus.utils.output import error, success


@click.command("export")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["json", "csv"]),
    default="json",
    help="Export format (default: json)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, allow_dash=True, path_type=Path),
    default=None,
    help=f"Output file, '-' for stdout (default: {JSON_FILENAME} or {CSV_FILENAME})",
)
@pass_context
def cli(ctx: Context, output_format: str, output: Path | None) -> None:
    """Export recorded decisions.

    \b
      --format json   {"metadata": {"date": ...}, "decisions": {id: IC|EC}}
      --format csv    paper_id;decision lines
    """
    config = require_config(ctx)

    try:
        with get_review_session(config.review_db) as session:
            decisions = load_decisions(session)
    except ReviewStoreError as e:
        error(escape(str(e)))
        raise SystemExit(EXIT_STORE_ERROR)

    content = export_json(decisions) if output_format == "json" else export_csv(decisions)
    if output_format == "json":
        content += "\n"

    if output is not None and str(output) == "-":
        click.echo(content, nl=False)
        return

    if output is None:
        output = Path(JSON_FILENAME if output_format == "json" else CSV_FILENAME)

    try:
        output.write_text(content, encoding="utf-8")
    except OSError as e:
        error(escape(f"Failed to write {output}: {e}"))
        raise SystemExit(EXIT_USAGE_ERROR)

    if not ctx.quiet:
        success(f"Exported {len(decisions)} decisions to {escape(str(output))}")
