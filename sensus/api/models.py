"""Normalized records from the dataWASHES service.

The service is inconsistent about field naming (``Paper_id`` vs
``paper_id``, ``Abstract`` vs ``Resumo``), so raw dicts are mapped onto
small frozen dataclasses before anything else touches them.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

MISSING_ID = "N/A"
MISSING_TITLE = "Untitled paper"
MISSING_ABSTRACT = "Abstract unavailable"
MISSING_YEAR = "N/A"


def _first(raw: dict[str, Any], *keys: str) -> Any:
    """Return the first non-None value among *keys*."""
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return None


@dataclass(frozen=True)
class Paper:
    """A paper as shown to the reviewer."""

    id: str
    title: str
    abstract: str
    year: str
    link: str | None = None

    @property
    def search_text(self) -> str:
        """Text the search predicate is tested against."""
        return f"{self.title} {self.abstract}"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Edition:
    """A workshop edition."""

    id: str
    year: str | None = None

    @property
    def label(self) -> str:
        return f"{self.id} ({self.year})" if self.year else self.id


def normalize_paper(raw: dict[str, Any]) -> Paper:
    """Map a raw paper dict from any endpoint onto a :class:`Paper`."""
    paper_id = _first(raw, "Paper_id", "paper_id")
    title = _first(raw, "Title", "title")
    abstract = _first(raw, "Abstract", "Resumo", "abstract")
    year = _first(raw, "Year", "year")
    link = _first(raw, "Download_link", "download_link")
    return Paper(
        id=str(paper_id) if paper_id is not None else MISSING_ID,
        title=str(title) if title is not None else MISSING_TITLE,
        abstract=str(abstract) if abstract is not None else MISSING_ABSTRACT,
        year=str(year) if year is not None else MISSING_YEAR,
        link=str(link) if link else None,
    )


def normalize_edition(raw: dict[str, Any]) -> Edition:
    """Map a raw edition dict onto an :class:`Edition`."""
    edition_id = _first(raw, "Edition_id", "edition_id")
    year = _first(raw, "Year", "year")
    return Edition(
        id=str(edition_id) if edition_id is not None else MISSING_ID,
        year=str(year) if year is not None else None,
    )
