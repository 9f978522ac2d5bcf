"""Exception hierarchy for sensus."""

from pathlib import Path


class SensusError(Exception):
    """Base exception for all sensus errors.

    All exceptions in this package inherit from this class,
    allowing callers to catch all sensus errors with
    a single except clause.
    """

    pass


# Configuration Errors
class ConfigError(SensusError):
    """Configuration-related errors."""

    pass


class ConfigParseError(ConfigError):
    """Configuration file has invalid syntax."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid config at {path}: {detail}")


class ConfigValidationError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: object, reason: str) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid config value for '{key}': {reason}")


# Query Errors
class QueryError(SensusError):
    """A search query could not be compiled.

    Compilation is all-or-nothing: when any of these is raised no
    predicate exists and callers keep whatever result set they had.
    """

    def __init__(self, query: object, message: str) -> None:
        self.query = query
        self.message = message
        super().__init__(message)


class QueryInputError(QueryError):
    """Query is missing, not a string, or blank."""

    pass


class QueryLexError(QueryError):
    """Query text cannot be split into tokens."""

    def __init__(self, query: str, message: str, position: int | None = None) -> None:
        self.position = position
        super().__init__(query, message)


class QuerySyntaxError(QueryError):
    """Token sequence does not form a valid boolean expression."""

    pass


# API Errors
class ApiError(SensusError):
    """The dataWASHES service returned an error or unusable response."""

    pass


class ApiConnectionError(ApiError):
    """The dataWASHES service could not be reached."""

    pass


# Review Store Errors
class ReviewStoreError(SensusError):
    """Reviewer decisions could not be read or written."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Review store {path}: {detail}")
