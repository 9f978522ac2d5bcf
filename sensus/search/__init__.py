"""Boolean/wildcard search queries compiled into text predicates."""

from sensus.exceptions import QueryError, QueryInputError, QueryLexError, QuerySyntaxError
from sensus.search.ast_nodes import And, Node, Not, Or, Term
from sensus.search.highlight import highlight_text
from sensus.search.parser import parse_query
from sensus.search.predicate import (
    CompiledQuery,
    Predicate,
    build_predicate,
    compile_predicate,
    extract_terms,
    wildcard_to_pattern,
)

__all__ = [
    "And",
    "CompiledQuery",
    "Node",
    "Not",
    "Or",
    "Predicate",
    "QueryError",
    "QueryInputError",
    "QueryLexError",
    "QuerySyntaxError",
    "Term",
    "build_predicate",
    "compile_predicate",
    "extract_terms",
    "highlight_text",
    "parse_query",
    "wildcard_to_pattern",
]
