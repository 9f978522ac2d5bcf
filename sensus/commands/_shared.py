"""Helpers shared by the sensus commands."""

from __future__ import annotations

from sensus.api.client import DataWashesClient
from sensus.api.models import Paper, normalize_paper
from sensus.cli import Context
from sensus.config import Config
from sensus.utils.output import console, error, verbose

EXIT_SUCCESS = 0
EXIT_USAGE_ERROR = 1
EXIT_API_ERROR = 2
EXIT_STORE_ERROR = 3


def require_config(ctx: Context) -> Config:
    """Return the loaded config or exit."""
    if ctx.config is None:
        error("Configuration not loaded")
        raise SystemExit(EXIT_USAGE_ERROR)
    return ctx.config


def make_client(config: Config) -> DataWashesClient:
    return DataWashesClient(
        base_url=config.api_base_url,
        per_page=config.api_per_page,
        timeout=config.api_timeout,
    )


def fetch_corpus(
    client: DataWashesClient,
    *,
    year: int | None = None,
    edition: str | None = None,
    quiet: bool = False,
) -> list[Paper]:
    """Fetch and normalize the corpus, showing a spinner on the console."""
    if quiet:
        records = client.fetch_corpus(year=year, edition=edition)
    else:
        with console.status("Downloading corpus..."):
            records = client.fetch_corpus(year=year, edition=edition)
        verbose(f"Fetched {len(records)} papers")
    return [normalize_paper(raw) for raw in records]
