"""dataWASHES API access."""

from sensus.api.client import DataWashesClient, unwrap_records
from sensus.api.models import Edition, Paper, normalize_edition, normalize_paper

__all__ = [
    "DataWashesClient",
    "Edition",
    "Paper",
    "normalize_edition",
    "normalize_paper",
    "unwrap_records",
]
