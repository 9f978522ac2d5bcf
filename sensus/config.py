"""Configuration management for sensus."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

from sensus.api.client import DEFAULT_BASE_URL, DEFAULT_PER_PAGE
from sensus.exceptions import (
    ConfigParseError,
    ConfigValidationError,
)
from sensus.search.highlight import DEFAULT_MIN_LENGTH


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".config" / "sensus" / "config.toml"


def get_default_review_db_path() -> Path:
    """Get the default path of the reviewer decision database."""
    return Path.home() / ".local" / "share" / "sensus" / "review.db"


@dataclass
class Config:
    """Application configuration.

    Attributes:
        api_base_url: Root URL of the dataWASHES service.
        api_per_page: Page size requested from listing endpoints. Large
            enough to fetch the whole corpus in one request.
        api_timeout: HTTP timeout in seconds.
        review_db: Path to the SQLite database holding decisions.
        colored_output: Whether to use colored terminal output.
        highlight: Whether to highlight matched terms in search results.
        highlight_min_length: Shortest term that gets highlighted.
        config_path: Path where config was loaded from (None if defaults).
    """

    api_base_url: str = DEFAULT_BASE_URL
    api_per_page: int = DEFAULT_PER_PAGE
    api_timeout: float = 30.0
    review_db: Path = field(default_factory=get_default_review_db_path)
    colored_output: bool = True
    highlight: bool = True
    highlight_min_length: int = DEFAULT_MIN_LENGTH
    config_path: Path | None = None

    def validate(self) -> list[str]:
        """Validate configuration values.

        Returns:
            List of warning messages for non-fatal issues.

        Raises:
            ConfigValidationError: If a critical validation fails.
        """
        warnings: list[str] = []

        self.review_db = self.review_db.expanduser().resolve()

        if not self.api_base_url.startswith(("http://", "https://")):
            raise ConfigValidationError(
                "api.base_url", self.api_base_url, "must be an http(s) URL"
            )
        if self.api_per_page <= 0:
            raise ConfigValidationError("api.per_page", self.api_per_page, "must be positive")
        if self.api_timeout <= 0:
            raise ConfigValidationError("api.timeout", self.api_timeout, "must be positive")

        if self.api_per_page < 500:
            warnings.append(
                f"api.per_page={self.api_per_page} may truncate the corpus; "
                f"the service does not paginate search results for you"
            )
        if self.highlight_min_length < 1:
            warnings.append(
                f"search.highlight_min_length={self.highlight_min_length} "
                f"highlights every fragment; using 1"
            )
            self.highlight_min_length = 1

        return warnings


def load_config(config_path: Path | None = None) -> tuple[Config, list[str]]:
    """Load configuration from file or use defaults.

    Args:
        config_path: Explicit config file path. If None, uses default location.

    Returns:
        Tuple of (Config object, list of warning messages).

    Raises:
        ConfigParseError: If config file exists but has invalid syntax.
        ConfigValidationError: If config values are invalid.
    """
    warnings: list[str] = []

    if config_path is None:
        config_path = get_default_config_path()

    config_path = config_path.expanduser().resolve()

    if not config_path.exists():
        config = Config()
        warnings.append(
            f"No config file found at {config_path}. Using defaults. "
            f"Create config with: sensus init-config"
        )
        config_warnings = config.validate()
        return config, warnings + config_warnings

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(config_path, str(e)) from e

    config = _parse_config_dict(data, config_path)
    config_warnings = config.validate()

    return config, warnings + config_warnings


def _parse_config_dict(data: dict[str, Any], config_path: Path) -> Config:
    """Parse configuration dictionary into Config object."""
    config = Config(config_path=config_path)

    # Parse [api] section
    api = data.get("api", {})
    if "base_url" in api:
        value = api["base_url"]
        if not isinstance(value, str):
            raise ConfigValidationError("api.base_url", value, "must be a string")
        config.api_base_url = value

    if "per_page" in api:
        value = api["per_page"]
        if not isinstance(value, int) or isinstance(value, bool):
            raise ConfigValidationError("api.per_page", value, "must be an integer")
        config.api_per_page = value

    if "timeout" in api:
        value = api["timeout"]
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            raise ConfigValidationError("api.timeout", value, "must be a number")
        config.api_timeout = float(value)

    # Parse [paths] section
    paths = data.get("paths", {})
    if "review_db" in paths:
        value = paths["review_db"]
        if not isinstance(value, str):
            raise ConfigValidationError("paths.review_db", value, "must be a string path")
        config.review_db = Path(value)

    # Parse [display] section
    display = data.get("display", {})
    if "colored_output" in display:
        value = display["colored_output"]
        if not isinstance(value, bool):
            raise ConfigValidationError("display.colored_output", value, "must be a boolean")
        config.colored_output = value

    if "highlight" in display:
        value = display["highlight"]
        if not isinstance(value, bool):
            raise ConfigValidationError("display.highlight", value, "must be a boolean")
        config.highlight = value

    # Parse [search] section
    search = data.get("search", {})
    if "highlight_min_length" in search:
        value = search["highlight_min_length"]
        if not isinstance(value, int) or isinstance(value, bool):
            raise ConfigValidationError(
                "search.highlight_min_length", value, "must be an integer"
            )
        config.highlight_min_length = value

    return config


def save_config(config: Config, config_path: Path | None = None) -> None:
    """Save configuration to file.

    Args:
        config: Configuration to save.
        config_path: Path to save to. If None, uses config.config_path or default.
    """
    if config_path is None:
        config_path = config.config_path or get_default_config_path()

    config_path = config_path.expanduser().resolve()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data: dict[str, Any] = {
        "api": {
            "base_url": config.api_base_url,
            "per_page": config.api_per_page,
            "timeout": config.api_timeout,
        },
        "paths": {
            "review_db": str(config.review_db),
        },
        "display": {
            "colored_output": config.colored_output,
            "highlight": config.highlight,
        },
    }

    if config.highlight_min_length != DEFAULT_MIN_LENGTH:
        data["search"] = {"highlight_min_length": config.highlight_min_length}

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
