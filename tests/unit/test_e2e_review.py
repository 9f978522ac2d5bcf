"""End-to-end test for the fetch → search → decide → export pipeline."""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import pytest

from sensus.api.client import DataWashesClient
from sensus.api.models import normalize_paper
from sensus.exceptions import QueryError
from sensus.review.export import export_csv, export_json
from sensus.review.models import Decision
from sensus.review.session import get_review_session
from sensus.review.state import ReviewState
from sensus.review.store import load_decisions, set_decision


def _response(payload) -> MagicMock:
    response = MagicMock()
    response.status_code = 200
    response.json.return_value = payload
    response.raise_for_status.return_value = None
    return response


@pytest.fixture
def corpus(raw_papers):
    client = DataWashesClient(base_url="http://localhost:5000")
    with patch.object(client._session, "get", return_value=_response({"data": raw_papers})):
        records = client.fetch_corpus()
    return [normalize_paper(raw) for raw in records]


def test_screening_session_round_trip(corpus, temp_dir) -> None:
    db_path = temp_dir / "review.db"
    state = ReviewState(corpus=corpus)

    matched = state.apply_query('(cloud* OR privacy) AND NOT "ethics"')
    assert [p.id for p in matched] == ["1", "3"]
    assert state.terms == ["cloud", "privacy", "ethics"]

    with get_review_session(db_path) as session:
        for paper in matched:
            set_decision(session, paper.id, state.toggle_decision(paper.id, Decision.INCLUDE))
        set_decision(session, "3", state.toggle_decision("3", Decision.EXCLUDE))

    with get_review_session(db_path) as session:
        stored = load_decisions(session)

    assert stored == {"1": Decision.INCLUDE, "3": Decision.EXCLUDE}
    assert export_csv(stored) == "paper_id;decision\n1;IC\n3;EC\n"
    assert json.loads(export_json(stored))["decisions"] == {"1": "IC", "3": "EC"}


def test_failed_query_keeps_previous_results(corpus) -> None:
    state = ReviewState(corpus=corpus)
    state.apply_query("security")

    with pytest.raises(QueryError):
        state.apply_query("(security AND")

    assert [p.id for p in state.filtered] == ["3"]
    assert state.terms == ["security"]
    assert state.query == "security"
