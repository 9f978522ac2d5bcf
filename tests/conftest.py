"""Shared pytest fixtures."""

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest

if TYPE_CHECKING:
    from collections.abc import Generator

    from sensus.config import Config


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    path = Path(tempfile.mkdtemp())
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def sample_config(temp_dir: Path) -> Path:
    """Create a sample config file."""
    config_path = temp_dir / "config.toml"
    config_path.write_text(f"""[api]
base_url = "http://localhost:5000"
per_page = 1000

[paths]
review_db = "{temp_dir / 'review.db'}"

[display]
colored_output = false
highlight = false
""")
    return config_path


@pytest.fixture
def raw_papers() -> list[dict[str, Any]]:
    """Raw paper records with the service's inconsistent field names."""
    return [
        {
            "Paper_id": 1,
            "Title": "Privacy in Cloud Computing",
            "Abstract": "We survey privacy risks of public clouds.",
            "Year": 2021,
            "Download_link": "https://sol.sbc.org.br/1",
        },
        {
            "paper_id": 2,
            "title": "Ethics of AI",
            "Resumo": "Um estudo sobre ética.",
            "Year": 2022,
        },
        {
            "Paper_id": 3,
            "Title": "Cloud Security",
            "Abstract": "Threat models for cloud deployments.",
            "Year": 2023,
        },
    ]


@pytest.fixture
def mock_config(temp_dir: Path) -> Config:
    """Create a Config object for testing."""
    from sensus.config import Config

    return Config(
        api_base_url="http://localhost:5000",
        review_db=temp_dir / "review.db",
        colored_output=False,
    )
