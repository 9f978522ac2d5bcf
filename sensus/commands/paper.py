"""Show one paper with its citation neighbourhood."""

from __future__ import annotations

import click
from rich.markup import escape

from sensus.api.models import Paper, normalize_paper
from sensus.cli import Context, pass_context
from sensus.commands._shared import EXIT_API_ERROR, EXIT_STORE_ERROR, make_client, require_config
from sensus.exceptions import ApiError, ReviewStoreError
from sensus.review.session import get_review_session
from sensus.review.store import load_decisions
from sensus.utils.output import console, create_table, error, format_decision


def _print_related(title: str, papers: list[Paper]) -> None:
    table = create_table(title=f"{title} ({len(papers)})", show_header=True, header_style="bold")
    table.add_column("ID", style="paper.id", justify="right", no_wrap=True)
    table.add_column("Year", justify="right", no_wrap=True)
    table.add_column("Title", style="paper.title")
    for paper in papers:
        table.add_row(escape(paper.id), escape(paper.year), escape(paper.title))
    console.print(table)


@click.command("paper")
@click.argument("paper_id")
@click.option("--citations", is_flag=True, default=False, help="List papers citing this one")
@click.option("--references", is_flag=True, default=False, help="List papers this one cites")
@pass_context
def cli(ctx: Context, paper_id: str, citations: bool, references: bool) -> None:
    """Show a paper's details, for forward/backward snowballing."""
    config = require_config(ctx)
    client = make_client(config)

    try:
        paper = normalize_paper(client.fetch_paper(paper_id))
        citing = []
        cited = []
        if citations:
            citing = [normalize_paper(raw) for raw in client.fetch_citations(paper_id)]
        if references:
            cited = [normalize_paper(raw) for raw in client.fetch_references(paper_id)]
    except ApiError as e:
        error(escape(f"Could not fetch paper {paper_id}: {e}"))
        raise SystemExit(EXIT_API_ERROR)

    try:
        with get_review_session(config.review_db) as session:
            decision = load_decisions(session).get(paper.id)
    except ReviewStoreError as e:
        error(escape(str(e)))
        raise SystemExit(EXIT_STORE_ERROR)

    console.print(
        f"[paper.id]#{escape(paper.id)}[/paper.id]  {escape(paper.year)}  "
        f"{format_decision(decision)}"
    )
    console.print(f"[paper.title]{escape(paper.title)}[/paper.title]", highlight=False)
    console.print(paper.abstract, highlight=False, markup=False)
    if paper.link:
        console.print(f"[path]{escape(paper.link)}[/path]")

    if citations:
        _print_related("Cited by", citing)
    if references:
        _print_related("References", cited)
