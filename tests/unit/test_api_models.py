"""Unit tests for API record normalization."""

from __future__ import annotations

from sensus.api.models import (
    MISSING_ABSTRACT,
    MISSING_ID,
    MISSING_TITLE,
    Edition,
    normalize_edition,
    normalize_paper,
)


class TestNormalizePaper:
    def test_capitalized_fields(self, raw_papers) -> None:
        paper = normalize_paper(raw_papers[0])
        assert paper.id == "1"
        assert paper.title == "Privacy in Cloud Computing"
        assert paper.abstract.startswith("We survey")
        assert paper.year == "2021"
        assert paper.link == "https://sol.sbc.org.br/1"

    def test_lowercase_and_portuguese_fields(self, raw_papers) -> None:
        paper = normalize_paper(raw_papers[1])
        assert paper.id == "2"
        assert paper.title == "Ethics of AI"
        assert paper.abstract == "Um estudo sobre ética."
        assert paper.link is None

    def test_missing_everything(self) -> None:
        paper = normalize_paper({})
        assert paper.id == MISSING_ID
        assert paper.title == MISSING_TITLE
        assert paper.abstract == MISSING_ABSTRACT
        assert paper.year == "N/A"

    def test_null_prefers_next_key(self) -> None:
        paper = normalize_paper({"Title": None, "title": "lower"})
        assert paper.title == "lower"

    def test_zero_id_kept(self) -> None:
        assert normalize_paper({"Paper_id": 0}).id == "0"

    def test_search_text(self, raw_papers) -> None:
        paper = normalize_paper(raw_papers[2])
        assert paper.search_text == "Cloud Security Threat models for cloud deployments."

    def test_to_dict(self, raw_papers) -> None:
        data = normalize_paper(raw_papers[2]).to_dict()
        assert data["id"] == "3"
        assert set(data) == {"id", "title", "abstract", "year", "link"}


class TestNormalizeEdition:
    def test_label_with_year(self) -> None:
        edition = normalize_edition({"Edition_id": "WASHES 2023", "Year": 2023})
        assert edition == Edition(id="WASHES 2023", year="2023")
        assert edition.label == "WASHES 2023 (2023)"

    def test_label_without_year(self) -> None:
        assert normalize_edition({"edition_id": 4}).label == "4"
