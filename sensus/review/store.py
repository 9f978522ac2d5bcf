"""Read and write reviewer decisions."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from sensus.review.models import Decision, PaperDecision

log = logging.getLogger(__name__)


def load_decisions(session: Session) -> dict[str, Decision]:
    """Return all stored decisions keyed by paper id.

    Rows holding an unknown decision code are skipped with a warning.
    """
    decisions: dict[str, Decision] = {}
    for row in session.scalars(select(PaperDecision).order_by(PaperDecision.paper_id)):
        try:
            decisions[row.paper_id] = Decision(row.decision)
        except ValueError:
            log.warning("Ignoring unknown decision %r for paper %s", row.decision, row.paper_id)
    return decisions


def set_decision(session: Session, paper_id: str, decision: Decision | None) -> None:
    """Store *decision* for *paper_id*, or remove it when *decision* is None."""
    row = session.get(PaperDecision, paper_id)
    if decision is None:
        if row is not None:
            session.delete(row)
            session.flush()
        return

    now = datetime.now(timezone.utc).isoformat()
    if row is None:
        session.add(PaperDecision(paper_id=paper_id, decision=decision.value, updated_at=now))
    else:
        row.decision = decision.value
        row.updated_at = now
    session.flush()


def clear_decisions(session: Session) -> int:
    """Remove every stored decision. Returns the number removed."""
    result = session.execute(delete(PaperDecision))
    return result.rowcount or 0
