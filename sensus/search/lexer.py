"""Split boolean query strings into tokens."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass

from sensus.exceptions import QueryLexError

# Typographic quotes that editors and PDF viewers substitute for '"'
_QUOTE_GLYPHS = re.compile("[“”„‟″＂]")

# Operators only count as standalone words, never as a prefix of a term
_OPERATOR_RE = re.compile(r'(AND|OR|NOT)(?=[\s()"]|$)', re.IGNORECASE)
_TERM_RE = re.compile(r'[^\s()"]+')


class TokenType(enum.Enum):
    TERM = "TERM"
    AND = "AND"
    OR = "OR"
    NOT = "NOT"
    LPAREN = "("
    RPAREN = ")"


@dataclass(frozen=True)
class Token:
    """A single lexical token.

    ``value`` is only set for TERM tokens; ``quoted`` marks TERMs that came
    from a double-quoted phrase.
    """

    type: TokenType
    value: str | None = None
    quoted: bool = False

    def describe(self) -> str:
        """Human-readable form for error messages."""
        if self.type is TokenType.TERM:
            return f"term '{self.value}'"
        return f"'{self.type.value}'"


def normalize_query(query: str) -> str:
    """Replace typographic quotes with '"' and trim surrounding whitespace."""
    return _QUOTE_GLYPHS.sub('"', query).strip()


def validate_parentheses(query: str) -> None:
    """Check that parentheses in *query* are balanced.

    Raises:
        QueryLexError: If a ``)`` appears before its ``(`` or a ``(`` is
            never closed.
    """
    depth = 0
    for pos, char in enumerate(query):
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth < 0:
                raise QueryLexError(
                    query, f"Parenthesis closed too early at position {pos}", position=pos
                )
    if depth != 0:
        raise QueryLexError(query, f"Parenthesis never closed ({depth} still open)")


def tokenize(query: str) -> list[Token]:
    """Convert a normalized query string into a list of tokens.

    Args:
        query: Query text, already passed through :func:`normalize_query`.

    Returns:
        Tokens in input order.

    Raises:
        QueryLexError: On an unterminated or empty quoted phrase, or a
            character that cannot start any token.
    """
    tokens: list[Token] = []
    pos = 0
    length = len(query)

    while pos < length:
        char = query[pos]

        if char.isspace():
            pos += 1
            continue

        if char == "(":
            tokens.append(Token(TokenType.LPAREN))
            pos += 1
            continue
        if char == ")":
            tokens.append(Token(TokenType.RPAREN))
            pos += 1
            continue

        if char == '"':
            end = query.find('"', pos + 1)
            if end == -1:
                raise QueryLexError(
                    query, f"Unterminated quote starting at position {pos}", position=pos
                )
            phrase = query[pos + 1 : end]
            if not phrase:
                raise QueryLexError(query, f"Empty quoted phrase at position {pos}", position=pos)
            tokens.append(Token(TokenType.TERM, phrase, quoted=True))
            pos = end + 1
            continue

        match = _OPERATOR_RE.match(query, pos)
        if match:
            tokens.append(Token(TokenType[match.group(1).upper()]))
            pos = match.end()
            continue

        match = _TERM_RE.match(query, pos)
        if match:
            tokens.append(Token(TokenType.TERM, match.group(0)))
            pos = match.end()
            continue

        raise QueryLexError(
            query, f"Unexpected character {char!r} at position {pos}", position=pos
        )

    return tokens
