"""Unit tests for term highlighting."""

from __future__ import annotations

from sensus.search.highlight import highlight_text


def _highlighted(text, terms, **kwargs) -> list[str]:
    rendered = highlight_text(text, terms, **kwargs)
    return [rendered.plain[span.start : span.end] for span in rendered.spans]


class TestHighlightText:
    def test_plain_text_unchanged(self) -> None:
        rendered = highlight_text("Cloud Security", ["cloud"])
        assert rendered.plain == "Cloud Security"

    def test_case_insensitive(self) -> None:
        assert _highlighted("Cloud and CLOUD", ["cloud"]) == ["Cloud", "CLOUD"]

    def test_short_terms_skipped(self) -> None:
        assert _highlighted("AI in cloud", ["ai", "cloud"]) == ["cloud"]

    def test_min_length_configurable(self) -> None:
        assert _highlighted("AI in cloud", ["ai"], min_length=2) == ["AI"]

    def test_matches_inside_words(self) -> None:
        assert _highlighted("multicloud", ["cloud"]) == ["cloud"]

    def test_regex_characters_literal(self) -> None:
        assert _highlighted("c++ and cxx", ["c++"], min_length=1) == ["c++"]

    def test_longer_terms_first(self) -> None:
        rendered = highlight_text("cloud computing", ["cloud", "cloud computing"])
        assert rendered.spans[0].end - rendered.spans[0].start == len("cloud computing")

    def test_style_applied(self) -> None:
        rendered = highlight_text("cloud", ["cloud"], style="bold")
        assert rendered.spans[0].style == "bold"

    def test_empty_text(self) -> None:
        assert highlight_text("", ["cloud"]).plain == ""
