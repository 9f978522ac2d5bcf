"""SQLAlchemy ORM models for persisted reviewer decisions."""

from __future__ import annotations

import enum

from sqlalchemy import Index, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Decision(str, enum.Enum):
    """Screening decision for a paper: inclusion or exclusion criterion met."""

    INCLUDE = "IC"
    EXCLUDE = "EC"

    def __str__(self) -> str:
        return self.value


class ReviewBase(DeclarativeBase):
    """Base class for review ORM models."""

    pass


class PaperDecision(ReviewBase):
    """The current decision for one paper."""

    __tablename__ = "decisions"

    paper_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    decision: Mapped[str] = mapped_column(String(2), nullable=False)
    updated_at: Mapped[str] = mapped_column(String(32), nullable=False)

    __table_args__ = (Index("ix_decisions_decision", "decision"),)

    def __repr__(self) -> str:
        return f"<PaperDecision(paper_id='{self.paper_id}', decision='{self.decision}')>"
