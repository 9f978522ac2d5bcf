"""Filter the corpus with a boolean search query."""

from __future__ import annotations

import json

import click
from rich.markup import escape

from sensus.cli import Context, pass_context
from sensus.commands._shared import (
    EXIT_API_ERROR,
    EXIT_STORE_ERROR,
    EXIT_SUCCESS,
    EXIT_USAGE_ERROR,
    fetch_corpus,
    make_client,
    require_config,
)
from sensus.exceptions import ApiError, QueryError, ReviewStoreError
from sensus.review.session import get_review_session
from sensus.review.state import ReviewState
from sensus.review.store import load_decisions
from sensus.search.highlight import highlight_text
from sensus.search.parser import parse_query
from sensus.search.predicate import build_predicate
from sensus.utils.output import (
    create_table,
    error,
    format_decision,
    info,
    pager_print,
    render_to_string,
)


@click.command("search")
@click.argument("query", nargs=-1, required=True)
@click.option("--year", "-y", type=int, default=None, help="Only fetch papers from this year")
@click.option(
    "--edition",
    "-e",
    default=None,
    help="Only fetch papers from this edition (ignored when --year is given)",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "ids", "json"]),
    default="table",
    help="Output format (default: table)",
)
@click.option("--limit", "-l", type=int, default=None, help="Limit number of results")
@click.option(
    "--undecided",
    is_flag=True,
    default=False,
    help="Only show papers without an IC/EC decision",
)
@click.option(
    "--explain",
    is_flag=True,
    default=False,
    help="Print the fully parenthesized query before searching",
)
@click.option(
    "--highlight/--no-highlight",
    default=None,
    help="Highlight matched terms (default: from config)",
)
@pass_context
def cli(
    ctx: Context,
    query: tuple[str, ...],
    year: int | None,
    edition: str | None,
    output_format: str,
    limit: int | None,
    undecided: bool,
    explain: bool,
    highlight: bool | None,
) -> None:
    """Search titles and abstracts with a boolean query.

    QUERY is joined with spaces. Operators AND, OR, NOT are
    case-insensitive; NOT binds tighter than AND, which binds tighter
    than OR. Adjacent terms need an explicit operator.

    \b
    Syntax examples:
      sensus search 'cloud* AND NOT ethics'
      sensus search '(privacy OR security) AND "software engineering"'
      sensus search 'soft* OR agil*' --year 2023

    \b
    Output formats:
      --format table   Rich table with highlighted terms (default)
      --format ids     One paper id per line (for piping into decide)
      --format json    JSON array of paper objects with decisions
    """
    config = require_config(ctx)
    query_string = " ".join(query)

    # Compile before touching the network so typos fail fast
    try:
        build_predicate(query_string)
    except QueryError as e:
        error(f"Invalid search query: {escape(str(e))}")
        raise SystemExit(EXIT_USAGE_ERROR)
    if explain:
        info(f"Parsed query: {escape(str(parse_query(query_string)))}")

    try:
        with get_review_session(config.review_db) as session:
            decisions = load_decisions(session)
    except ReviewStoreError as e:
        error(escape(str(e)))
        raise SystemExit(EXIT_STORE_ERROR)

    try:
        corpus = fetch_corpus(
            make_client(config),
            year=year,
            edition=edition,
            quiet=ctx.quiet or output_format != "table",
        )
    except ApiError as e:
        error(f"Could not fetch corpus: {escape(str(e))}")
        raise SystemExit(EXIT_API_ERROR)

    state = ReviewState(corpus=corpus, decisions=decisions)
    try:
        papers = state.apply_query(query_string)
    except QueryError as e:
        error(f"Invalid search query: {escape(str(e))}")
        raise SystemExit(EXIT_USAGE_ERROR)

    if undecided:
        papers = [p for p in papers if state.decision_for(p.id) is None]
    if limit is not None:
        papers = papers[:limit]

    if not papers:
        if not ctx.quiet:
            info(f"No results for: {escape(query_string)} ({len(corpus)} papers searched)")
        raise SystemExit(EXIT_SUCCESS)

    if output_format == "ids":
        for paper in papers:
            click.echo(paper.id)
    elif output_format == "json":
        results = []
        for paper in papers:
            record = paper.to_dict()
            decision = state.decision_for(paper.id)
            record["decision"] = str(decision) if decision else None
            results.append(record)
        click.echo(json.dumps(results, indent=2, ensure_ascii=False))
    else:
        use_highlight = config.highlight if highlight is None else highlight
        terms = state.terms if use_highlight else []
        _print_table(state, papers, terms, config.highlight_min_length, quiet=ctx.quiet)

    raise SystemExit(EXIT_SUCCESS)


def _print_table(
    state: ReviewState,
    papers: list,
    terms: list[str],
    min_length: int,
    *,
    quiet: bool = False,
) -> None:
    """Print results as a Rich table, using pager when appropriate."""
    stats = state.stats()
    if not quiet:
        info(
            f"Search: {escape(state.query)} ({len(papers)} shown, {stats.filtered} of "
            f"{stats.total} matched; IC {stats.included} / EC {stats.excluded})"
        )

    table = create_table(show_header=True, header_style="bold", show_lines=True)
    table.add_column("ID", style="paper.id", justify="right", no_wrap=True)
    table.add_column("Year", justify="right", no_wrap=True)
    table.add_column("Paper", ratio=1)
    table.add_column("Dec", justify="center", no_wrap=True)

    for paper in papers:
        title = highlight_text(paper.title, terms, min_length=min_length)
        title.stylize("paper.title")
        abstract = highlight_text(paper.abstract, terms, min_length=min_length)
        body = title + "\n" + abstract
        if paper.link:
            body.append(f"\n{paper.link}", style="path")
        decision = format_decision(state.decision_for(paper.id))
        table.add_row(escape(paper.id), escape(paper.year), body, decision)

    pager_print(render_to_string(table), header_lines=3)
