"""Serialize reviewer decisions for backup and audit."""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import datetime, timezone

from sensus.review.models import Decision

JSON_FILENAME = "sensus-backup.json"
CSV_FILENAME = "sensus-audit.csv"
CSV_HEADER = "paper_id;decision"


def export_json(decisions: Mapping[str, Decision], now: datetime | None = None) -> str:
    """Render decisions as a JSON backup document."""
    if now is None:
        now = datetime.now(timezone.utc)
    document = {
        "metadata": {"date": now.isoformat()},
        "decisions": {paper_id: str(decision) for paper_id, decision in decisions.items()},
    }
    return json.dumps(document, indent=2)


def export_csv(decisions: Mapping[str, Decision]) -> str:
    """Render decisions as a semicolon-separated audit trail."""
    lines = [CSV_HEADER]
    lines.extend(f"{paper_id};{str(decision)}" for paper_id, decision in decisions.items())
    return "\n".join(lines) + "\n"
