"""sensus: boolean-query literature triage for the dataWASHES corpus."""

__version__ = "0.1.0"
