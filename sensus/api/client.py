"""HTTP client for the dataWASHES REST API."""

from __future__ import annotations

import logging
import time
from typing import Any

import requests

from sensus import __version__
from sensus.exceptions import ApiConnectionError, ApiError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://datawashes.pythonanywhere.com"
DEFAULT_PER_PAGE = 2000

_USER_AGENT = f"sensus/{__version__}"
_REQUEST_TIMEOUT = 30
_MAX_RETRIES = 3
_BACKOFF_BASE = 2.0


def unwrap_records(payload: Any) -> list[dict[str, Any]]:
    """Normalize an API payload into a list of records.

    Paginated endpoints wrap results as ``{"data": [...], "paging": {...}}``;
    others return a bare list, and detail endpoints a single object.
    """
    if isinstance(payload, dict) and isinstance(payload.get("data"), list):
        return payload["data"]
    if isinstance(payload, list):
        return payload
    return [payload]


class DataWashesClient:
    """Client for the dataWASHES paper, edition and author endpoints.

    No authentication required. Listing endpoints are requested with a
    large ``per_page`` so the whole corpus arrives in one response.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        per_page: int = DEFAULT_PER_PAGE,
        timeout: float = _REQUEST_TIMEOUT,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.per_page = per_page
        self.timeout = timeout
        self._session = requests.Session()
        self._session.headers.update({"User-Agent": _USER_AGENT, "Accept": "application/json"})

    def _request(self, endpoint: str, params: dict[str, Any] | None = None) -> requests.Response:
        """Make a GET request with retry and backoff logic.

        Handles HTTP 429 (rate limited) and 503 (service unavailable)
        with exponential backoff.

        Raises:
            ApiError: On HTTP errors or when retries are exhausted.
            ApiConnectionError: If the connection keeps failing.
        """
        url = f"{self.base_url}{endpoint}"
        for attempt in range(_MAX_RETRIES):
            try:
                resp = self._session.get(url, params=params, timeout=self.timeout)
            except requests.RequestException as e:
                if attempt == _MAX_RETRIES - 1:
                    raise ApiConnectionError(
                        f"Request to {url} failed after {_MAX_RETRIES} attempts: {e}"
                    ) from e
                wait = _BACKOFF_BASE * (2**attempt)
                logger.warning("Request failed, retrying in %.1fs: %s", wait, e)
                time.sleep(wait)
                continue

            if resp.status_code in (429, 503):
                if attempt == _MAX_RETRIES - 1:
                    raise ApiError(
                        f"Rate limited after {_MAX_RETRIES} retries (HTTP {resp.status_code}). "
                        f"Try again later."
                    )
                retry_after = resp.headers.get("Retry-After")
                if retry_after:
                    try:
                        wait = max(float(retry_after), _BACKOFF_BASE)
                    except ValueError:
                        wait = _BACKOFF_BASE * (2**attempt)
                else:
                    wait = _BACKOFF_BASE * (2**attempt)
                logger.warning(
                    "Rate limit detected (HTTP %d), waiting %.1fs...",
                    resp.status_code,
                    wait,
                )
                time.sleep(wait)
                continue

            try:
                resp.raise_for_status()
            except requests.HTTPError as e:
                raise ApiError(f"HTTP {resp.status_code} from {endpoint}") from e
            return resp

        raise ApiError(f"Request to {url} failed unexpectedly")  # pragma: no cover

    def _get_records(
        self, endpoint: str, params: dict[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        resp = self._request(endpoint, params=params)
        try:
            payload = resp.json()
        except ValueError as e:
            raise ApiError(f"Invalid JSON from {endpoint}: {e}") from e
        records = unwrap_records(payload)
        logger.debug("GET %s -> %d records", endpoint, len(records))
        return records

    def _get_record(self, endpoint: str) -> dict[str, Any]:
        """Fetch a single-object endpoint.

        Raises:
            ApiError: If the response holds no record.
        """
        records = self._get_records(endpoint)
        if not records:
            raise ApiError(f"No record at {endpoint}")
        return records[0]

    # Papers

    def fetch_papers(self) -> list[dict[str, Any]]:
        """Fetch the complete corpus with titles, years and abstracts."""
        return self._get_records("/papers/", params={"per_page": self.per_page})

    def fetch_papers_by_year(self, year: int | str) -> list[dict[str, Any]]:
        return self._get_records(f"/papers/by-year/{year}")

    def fetch_paper(self, paper_id: int | str) -> dict[str, Any]:
        return self._get_record(f"/papers/{paper_id}")

    def fetch_citations(self, paper_id: int | str) -> list[dict[str, Any]]:
        """Papers citing *paper_id* (forward snowballing)."""
        return self._get_records(f"/papers/{paper_id}/citations")

    def fetch_references(self, paper_id: int | str) -> list[dict[str, Any]]:
        """Papers cited by *paper_id* (backward snowballing)."""
        return self._get_records(f"/papers/{paper_id}/references")

    # Editions

    def fetch_editions(self) -> list[dict[str, Any]]:
        return self._get_records("/editions/")

    def fetch_edition(self, edition_id: int | str) -> dict[str, Any]:
        return self._get_record(f"/editions/{edition_id}")

    def fetch_edition_papers(self, edition_id: int | str) -> list[dict[str, Any]]:
        return self._get_records(
            f"/editions/{edition_id}/papers", params={"per_page": self.per_page}
        )

    # Authors

    def fetch_authors(self) -> list[dict[str, Any]]:
        return self._get_records("/authors/", params={"per_page": self.per_page})

    def fetch_author(self, author_id: int | str) -> dict[str, Any]:
        return self._get_record(f"/authors/{author_id}")

    def fetch_author_papers(self, author_id: int | str) -> list[dict[str, Any]]:
        return self._get_records(f"/authors/{author_id}/papers")

    def fetch_corpus(
        self, year: int | str | None = None, edition: int | str | None = None
    ) -> list[dict[str, Any]]:
        """Fetch the corpus to review.

        A year filter takes precedence over an edition filter; with neither
        the whole corpus is fetched.
        """
        if year is not None:
            return self.fetch_papers_by_year(year)
        if edition is not None:
            return self.fetch_edition_papers(edition)
        return self.fetch_papers()
