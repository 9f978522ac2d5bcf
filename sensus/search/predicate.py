"""Compile a query AST into a reusable text predicate."""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import NamedTuple

from sensus.exceptions import QueryInputError
from sensus.search.ast_nodes import And, Node, Not, Or, Term
from sensus.search.parser import parse_query

Predicate = Callable[[str], bool]

WILDCARD = "*"


class CompiledQuery(NamedTuple):
    """Result of :func:`build_predicate`.

    ``terms`` is only meant for highlighting; it plays no part in matching.
    """

    predicate: Predicate
    terms: list[str]


def wildcard_to_pattern(term: str, *, wildcards: bool = True) -> re.Pattern[str]:
    """Translate a search term into a case-insensitive regex.

    ``*`` matches any run of characters (line breaks included) unless
    *wildcards* is false; every other character is literal. The pattern
    must start at a word boundary but has no trailing boundary, so ``cat``
    also matches ``category``.
    """
    if wildcards:
        body = ".*".join(re.escape(part) for part in term.split(WILDCARD))
    else:
        body = re.escape(term)
    return re.compile(rf"\b{body}", re.IGNORECASE | re.DOTALL)


def compile_predicate(node: Node) -> Predicate:
    """Walk *node* once and return a function ``text -> bool``."""
    if isinstance(node, Term):
        pattern = wildcard_to_pattern(node.value, wildcards=not node.quoted)

        def match_term(text: str) -> bool:
            return pattern.search(text) is not None

        return match_term

    if isinstance(node, And):
        left = compile_predicate(node.left)
        right = compile_predicate(node.right)
        return lambda text: left(text) and right(text)

    if isinstance(node, Or):
        left = compile_predicate(node.left)
        right = compile_predicate(node.right)
        return lambda text: left(text) or right(text)

    if isinstance(node, Not):
        operand = compile_predicate(node.operand)
        return lambda text: not operand(text)

    raise TypeError(f"Unknown query node: {node!r}")


def extract_terms(node: Node) -> list[str]:
    """Collect the distinct leaf terms of *node* with wildcards removed.

    Terms are returned in first-occurrence order. Quoted phrases are kept
    verbatim; a bare term that is nothing but wildcards contributes nothing.
    """
    seen: dict[str, None] = {}

    def visit(current: Node) -> None:
        if isinstance(current, Term):
            literal = current.value if current.quoted else current.value.replace(WILDCARD, "")
            if literal:
                seen.setdefault(literal)
        elif isinstance(current, (And, Or)):
            visit(current.left)
            visit(current.right)
        elif isinstance(current, Not):
            visit(current.operand)

    visit(node)
    return list(seen)


def build_predicate(query: object) -> CompiledQuery:
    """Compile a boolean search string into a predicate and its terms.

    Supports ``AND``, ``OR``, ``NOT`` (case-insensitive), parentheses,
    quoted phrases and ``*`` wildcards. The predicate is pure and can be
    shared across threads.

    Args:
        query: The search string.

    Returns:
        A :class:`CompiledQuery` ``(predicate, terms)``.

    Raises:
        QueryInputError: If *query* is not a string or is blank.
        QueryLexError: If the query cannot be tokenized.
        QuerySyntaxError: If the tokens do not form a valid expression.
    """
    if not isinstance(query, str):
        raise QueryInputError(query, f"Search query must be a string, got {type(query).__name__}")
    if not query.strip():
        raise QueryInputError(query, "Search query is empty")

    ast = parse_query(query)
    return CompiledQuery(compile_predicate(ast), extract_terms(ast))
