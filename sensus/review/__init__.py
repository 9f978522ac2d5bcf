"""Reviewer decisions: session state, persistence and export."""

from sensus.review.models import Decision
from sensus.review.state import ReviewState, ReviewStats

__all__ = ["Decision", "ReviewState", "ReviewStats"]
