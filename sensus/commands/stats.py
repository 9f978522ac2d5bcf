"""Show screening progress."""

from __future__ import annotations

import click
from rich.markup import escape

from sensus.cli import Context, pass_context
from sensus.commands._shared import (
    EXIT_API_ERROR,
    EXIT_STORE_ERROR,
    fetch_corpus,
    make_client,
    require_config,
)
from sensus.exceptions import ApiError, ReviewStoreError
from sensus.review.session import get_review_session
from sensus.review.state import ReviewState
from sensus.review.store import load_decisions
from sensus.utils.output import console, create_table, error


@click.command("stats")
@click.option(
    "--corpus",
    "with_corpus",
    is_flag=True,
    default=False,
    help="Also fetch the corpus to report its size",
)
@pass_context
def cli(ctx: Context, with_corpus: bool) -> None:
    """Count included and excluded papers."""
    config = require_config(ctx)

    try:
        with get_review_session(config.review_db) as session:
            decisions = load_decisions(session)
    except ReviewStoreError as e:
        error(escape(str(e)))
        raise SystemExit(EXIT_STORE_ERROR)

    state = ReviewState(decisions=decisions)
    if with_corpus:
        try:
            state.corpus = fetch_corpus(make_client(config), quiet=ctx.quiet)
        except ApiError as e:
            error(f"Could not fetch corpus: {escape(str(e))}")
            raise SystemExit(EXIT_API_ERROR)

    stats = state.stats()
    table = create_table(show_header=False)
    table.add_column("Metric")
    table.add_column("Count", justify="right")
    if with_corpus:
        table.add_row("Papers in corpus", str(stats.total))
    table.add_row("[decision.include]Included (IC)[/decision.include]", str(stats.included))
    table.add_row("[decision.exclude]Excluded (EC)[/decision.exclude]", str(stats.excluded))
    if with_corpus:
        undecided = sum(1 for p in state.corpus if state.decision_for(p.id) is None)
        table.add_row("Undecided", str(undecided))
    console.print(table)
