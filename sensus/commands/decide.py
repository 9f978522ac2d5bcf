"""Record include/exclude decisions for papers."""

from __future__ import annotations

import click
from rich.markup import escape

from sensus.cli import Context, pass_context
from sensus.commands._shared import EXIT_STORE_ERROR, EXIT_USAGE_ERROR, require_config
from sensus.exceptions import ReviewStoreError
from sensus.review.models import Decision
from sensus.review.session import get_review_session
from sensus.review.state import ReviewState
from sensus.review.store import clear_decisions, load_decisions, set_decision
from sensus.utils.output import error, format_decision, info, success

_ACTIONS = {
    "include": Decision.INCLUDE,
    "exclude": Decision.EXCLUDE,
}


@click.command("decide")
@click.argument("action", type=click.Choice(["include", "exclude", "clear"]))
@click.argument("paper_ids", nargs=-1)
@click.option(
    "--all",
    "clear_all",
    is_flag=True,
    default=False,
    help="With 'clear': remove every recorded decision",
)
@pass_context
def cli(ctx: Context, action: str, paper_ids: tuple[str, ...], clear_all: bool) -> None:
    """Mark papers as included (IC) or excluded (EC).

    Repeating the decision a paper already has withdraws it, so
    'decide include 42' twice leaves paper 42 undecided.

    \b
    Examples:
      sensus decide include 42 57
      sensus decide exclude 13
      sensus decide clear 42
      sensus search 'NOT cloud*' -f ids | xargs sensus decide exclude
    """
    config = require_config(ctx)

    if clear_all and action != "clear":
        error("--all can only be used with 'clear'")
        raise SystemExit(EXIT_USAGE_ERROR)
    if not paper_ids and not clear_all:
        error("No paper ids given", hint="Pass one or more ids, e.g. 'sensus decide include 42'")
        raise SystemExit(EXIT_USAGE_ERROR)

    try:
        with get_review_session(config.review_db) as session:
            if clear_all:
                removed = clear_decisions(session)
                success(f"Removed {removed} decisions")
                return

            state = ReviewState(decisions=load_decisions(session))
            for paper_id in paper_ids:
                if action == "clear":
                    new = None
                    state.decisions.pop(paper_id, None)
                else:
                    new = state.toggle_decision(paper_id, _ACTIONS[action])
                set_decision(session, paper_id, new)
                if not ctx.quiet:
                    if new is None:
                        info(f"#{escape(paper_id)}: undecided")
                    else:
                        info(f"#{escape(paper_id)}: {format_decision(new)}")

            stats = state.stats()
    except ReviewStoreError as e:
        error(escape(str(e)))
        raise SystemExit(EXIT_STORE_ERROR)

    if not ctx.quiet:
        success(f"Included: {stats.included}  Excluded: {stats.excluded}")
