"""Show an author's papers."""

from __future__ import annotations

import click
from rich.markup import escape

from sensus.api.models import normalize_paper
from sensus.cli import Context, pass_context
from sensus.commands._shared import EXIT_API_ERROR, make_client, require_config
from sensus.exceptions import ApiError
from sensus.utils.output import console, create_table, error


@click.command("author")
@click.argument("author_id", required=False)
@pass_context
def cli(ctx: Context, author_id: str | None) -> None:
    """List authors, or the papers of AUTHOR_ID."""
    config = require_config(ctx)
    client = make_client(config)

    try:
        if author_id is None:
            authors = client.fetch_authors()
        else:
            author = client.fetch_author(author_id)
            papers = [normalize_paper(raw) for raw in client.fetch_author_papers(author_id)]
    except ApiError as e:
        error(f"Could not fetch authors: {escape(str(e))}")
        raise SystemExit(EXIT_API_ERROR)

    if author_id is None:
        table = create_table(show_header=True, header_style="bold")
        table.add_column("ID", justify="right", no_wrap=True)
        table.add_column("Name")
        for raw in authors:
            table.add_row(escape(_author_id(raw)), escape(_author_name(raw)))
        console.print(table)
        return

    console.print(f"[paper.title]{escape(_author_name(author))}[/paper.title]", highlight=False)
    table = create_table(show_header=True, header_style="bold")
    table.add_column("ID", style="paper.id", justify="right", no_wrap=True)
    table.add_column("Year", justify="right", no_wrap=True)
    table.add_column("Title")
    for paper in papers:
        table.add_row(escape(paper.id), escape(paper.year), escape(paper.title))
    console.print(table)


def _author_id(raw: dict) -> str:
    value = raw.get("Author_id", raw.get("author_id"))
    return "" if value is None else str(value)


def _author_name(raw: dict) -> str:
    value = raw.get("Name", raw.get("name"))
    return "Unknown author" if value is None else str(value)
