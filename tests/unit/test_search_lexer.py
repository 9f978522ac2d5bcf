"""Unit tests for the query lexer."""

from __future__ import annotations

import pytest

from sensus.exceptions import QueryLexError
from sensus.search.lexer import (
    Token,
    TokenType,
    normalize_query,
    tokenize,
    validate_parentheses,
)


def _types(tokens: list[Token]) -> list[TokenType]:
    return [t.type for t in tokens]


class TestNormalizeQuery:
    def test_trims_whitespace(self) -> None:
        assert normalize_query("   cloud  \n") == "cloud"

    def test_replaces_typographic_quotes(self) -> None:
        assert normalize_query("“software engineering”") == '"software engineering"'

    def test_replaces_low_double_quote(self) -> None:
        assert normalize_query("„agile”") == '"agile"'


class TestValidateParentheses:
    def test_balanced(self) -> None:
        validate_parentheses("((a) OR (b))")

    def test_closed_too_early(self) -> None:
        with pytest.raises(QueryLexError, match="closed too early") as exc_info:
            validate_parentheses("a) OR (b")
        assert exc_info.value.position == 1

    def test_never_closed(self) -> None:
        with pytest.raises(QueryLexError, match="never closed"):
            validate_parentheses("(a AND b")


class TestTokenize:
    def test_single_term(self) -> None:
        assert tokenize("cloud") == [Token(TokenType.TERM, "cloud")]

    def test_operators_case_insensitive(self) -> None:
        tokens = tokenize("a and b Or not c")
        assert _types(tokens) == [
            TokenType.TERM,
            TokenType.AND,
            TokenType.TERM,
            TokenType.OR,
            TokenType.NOT,
            TokenType.TERM,
        ]

    def test_operator_prefix_is_a_term(self) -> None:
        tokens = tokenize("ORacle ANDroid NOTation")
        assert tokens == [
            Token(TokenType.TERM, "ORacle"),
            Token(TokenType.TERM, "ANDroid"),
            Token(TokenType.TERM, "NOTation"),
        ]

    def test_operator_with_suffix_punctuation_is_a_term(self) -> None:
        assert tokenize("AND-ing") == [Token(TokenType.TERM, "AND-ing")]

    def test_operator_next_to_parenthesis(self) -> None:
        assert _types(tokenize("NOT(a)")) == [
            TokenType.NOT,
            TokenType.LPAREN,
            TokenType.TERM,
            TokenType.RPAREN,
        ]

    def test_parentheses_split_terms(self) -> None:
        assert _types(tokenize("(a)(b)")) == [
            TokenType.LPAREN,
            TokenType.TERM,
            TokenType.RPAREN,
            TokenType.LPAREN,
            TokenType.TERM,
            TokenType.RPAREN,
        ]

    def test_quoted_phrase_is_one_term(self) -> None:
        tokens = tokenize('"cloud AND privacy*"')
        assert tokens == [Token(TokenType.TERM, "cloud AND privacy*", quoted=True)]

    def test_quoted_phrase_keeps_inner_whitespace(self) -> None:
        assert tokenize('" a  b "') == [Token(TokenType.TERM, " a  b ", quoted=True)]

    def test_quote_ends_a_term(self) -> None:
        assert tokenize('soft"ware"') == [
            Token(TokenType.TERM, "soft"),
            Token(TokenType.TERM, "ware", quoted=True),
        ]

    def test_wildcard_kept_in_term(self) -> None:
        assert tokenize("soft*") == [Token(TokenType.TERM, "soft*")]

    def test_unterminated_quote(self) -> None:
        with pytest.raises(QueryLexError, match="Unterminated quote") as exc_info:
            tokenize('cloud AND "unterminated')
        assert exc_info.value.position == 10

    def test_empty_quoted_phrase(self) -> None:
        with pytest.raises(QueryLexError, match="Empty quoted phrase"):
            tokenize('""')

    def test_empty_input(self) -> None:
        assert tokenize("") == []

    def test_no_term_is_empty(self) -> None:
        tokens = tokenize('a ( "b c" ) OR d*')
        assert all(t.value for t in tokens if t.type is TokenType.TERM)

    def test_describe(self) -> None:
        assert Token(TokenType.TERM, "x").describe() == "term 'x'"
        assert Token(TokenType.AND).describe() == "'AND'"
        assert Token(TokenType.RPAREN).describe() == "')'"
