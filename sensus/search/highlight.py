"""Highlight matched search terms in rendered text."""

from __future__ import annotations

import re
from collections.abc import Iterable

from rich.text import Text

DEFAULT_MIN_LENGTH = 3


def highlight_text(
    text: str,
    terms: Iterable[str],
    *,
    min_length: int = DEFAULT_MIN_LENGTH,
    style: str = "highlight",
) -> Text:
    """Return *text* as a rich Text with every occurrence of *terms* styled.

    Matching is literal and case-insensitive and is not tied to word
    boundaries. Terms shorter than *min_length* are ignored so that short
    fragments like ``ai`` don't light up half the abstract. Longer terms
    are applied first.

    Args:
        text: Text to render.
        terms: Terms returned by :func:`~sensus.search.predicate.build_predicate`.
        min_length: Minimum term length worth highlighting.
        style: Rich style name applied to matches.
    """
    rendered = Text(text or "")
    for term in sorted(set(terms), key=len, reverse=True):
        if len(term) < min_length:
            continue
        rendered.highlight_regex(f"(?i){re.escape(term)}", style=style)
    return rendered
