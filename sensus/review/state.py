"""Reviewer session state: corpus, current filter and decisions."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sensus.api.models import Paper
from sensus.review.models import Decision
from sensus.search.predicate import build_predicate

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReviewStats:
    total: int
    filtered: int
    included: int
    excluded: int


@dataclass
class ReviewState:
    """Everything one screening session knows about.

    The search engine holds no state of its own; this object owns the
    last successful result set and its highlight terms. A query that fails
    to compile leaves both untouched.
    """

    corpus: list[Paper] = field(default_factory=list)
    decisions: dict[str, Decision] = field(default_factory=dict)
    filtered: list[Paper] = field(default_factory=list)
    terms: list[str] = field(default_factory=list)
    query: str = ""

    def apply_query(self, query: str) -> list[Paper]:
        """Filter the corpus with *query* and remember the result.

        A blank query resets to the empty state rather than matching
        everything.

        Raises:
            QueryError: If the query cannot be compiled. State is unchanged.
        """
        if not query.strip():
            self.clear_query()
            return self.filtered

        predicate, terms = build_predicate(query)
        self.filtered = [paper for paper in self.corpus if predicate(paper.search_text)]
        self.terms = terms
        self.query = query
        log.debug("Query %r matched %d of %d papers", query, len(self.filtered), len(self.corpus))
        return self.filtered

    def clear_query(self) -> None:
        self.filtered = []
        self.terms = []
        self.query = ""

    def toggle_decision(self, paper_id: str, decision: Decision) -> Decision | None:
        """Record *decision*, or withdraw it if it is already the current one.

        Returns:
            The decision now in effect for *paper_id*.
        """
        if self.decisions.get(paper_id) == decision:
            del self.decisions[paper_id]
            return None
        self.decisions[paper_id] = decision
        return decision

    def decision_for(self, paper_id: str) -> Decision | None:
        return self.decisions.get(paper_id)

    def stats(self) -> ReviewStats:
        values = list(self.decisions.values())
        return ReviewStats(
            total=len(self.corpus),
            filtered=len(self.filtered),
            included=values.count(Decision.INCLUDE),
            excluded=values.count(Decision.EXCLUDE),
        )
