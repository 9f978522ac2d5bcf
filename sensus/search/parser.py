"""Recursive-descent parser for boolean search queries.

Grammar (precedence from lowest to highest: OR, AND, NOT)::

    expr     := and_expr (OR and_expr)*
    and_expr := not_expr (AND not_expr)*
    not_expr := NOT not_expr | primary
    primary  := TERM | '(' expr ')'

Binary operators are left-associative. Juxtaposed terms without an
operator (``cloud privacy``) are rejected rather than implicitly ANDed.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable

from sensus.exceptions import QuerySyntaxError
from sensus.search.ast_nodes import And, Node, Not, Or, Term
from sensus.search.lexer import Token, TokenType, normalize_query, tokenize, validate_parentheses

log = logging.getLogger(__name__)


class _Parser:
    """Consumes a token queue from the left while building the AST."""

    def __init__(self, query: str, tokens: Iterable[Token]) -> None:
        self.query = query
        self.tokens: deque[Token] = deque(tokens)

    def _peek_is(self, token_type: TokenType) -> bool:
        return bool(self.tokens) and self.tokens[0].type is token_type

    def parse(self) -> Node:
        node = self.parse_or()
        if self.tokens:
            leftover = self.tokens[0]
            raise QuerySyntaxError(
                self.query, f"Unexpected trailing input: {leftover.describe()}"
            )
        return node

    def parse_or(self) -> Node:
        node = self.parse_and()
        while self._peek_is(TokenType.OR):
            self.tokens.popleft()
            node = Or(node, self.parse_and())
        return node

    def parse_and(self) -> Node:
        node = self.parse_not()
        while self._peek_is(TokenType.AND):
            self.tokens.popleft()
            node = And(node, self.parse_not())
        return node

    def parse_not(self) -> Node:
        if self._peek_is(TokenType.NOT):
            self.tokens.popleft()
            return Not(self.parse_not())
        return self.parse_primary()

    def parse_primary(self) -> Node:
        if not self.tokens:
            raise QuerySyntaxError(self.query, "Incomplete expression")

        token = self.tokens.popleft()
        if token.type is TokenType.TERM:
            return Term(token.value, quoted=token.quoted)

        if token.type is TokenType.LPAREN:
            node = self.parse_or()
            if not self._peek_is(TokenType.RPAREN):
                raise QuerySyntaxError(self.query, "Unclosed parenthesis")
            self.tokens.popleft()
            return node

        raise QuerySyntaxError(self.query, f"Unexpected token {token.describe()}")


def parse_tokens(tokens: Iterable[Token], query: str = "") -> Node:
    """Parse a token sequence into an AST.

    Args:
        tokens: Tokens produced by :func:`~sensus.search.lexer.tokenize`.
        query: Original query text, attached to errors.

    Returns:
        Root node of the expression.

    Raises:
        QuerySyntaxError: If the tokens do not form exactly one expression.
    """
    return _Parser(query, tokens).parse()


def parse_query(query: str) -> Node:
    """Normalize, lex and parse a query string into an AST.

    Raises:
        QueryLexError: If the text cannot be tokenized.
        QuerySyntaxError: If the tokens do not form a valid expression.
    """
    normalized = normalize_query(query)
    validate_parentheses(normalized)
    tokens = tokenize(normalized)
    log.debug("Tokenized %r into %d tokens", normalized, len(tokens))
    return parse_tokens(tokens, normalized)
