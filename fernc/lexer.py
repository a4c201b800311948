"""Turns a source text into a forest of token trees."""

from __future__ import annotations

import string
from typing import Iterator, Sequence

from fernc.diagnostics import (
    CompileError,
    Diagnostic,
    illegal_char,
    mismatched_close_paren,
    unmatched_close_paren,
    unmatched_open_paren,
)
from fernc.source_map import Source, Span
from fernc.tokens import TokenError, TokenErrorKind, TokenKind, TokenTree

_WHITESPACE = frozenset(" \t\n\x0c\r")
_DIGITS = frozenset(string.digits)
_IDENT_START = frozenset(string.ascii_letters + "_")
_IDENT_CONTINUE = _IDENT_START | _DIGITS

_KEYWORDS = {
    "fn": TokenKind.FN,
    "let": TokenKind.LET,
    "if": TokenKind.IF,
    "while": TokenKind.WHILE,
    "for": TokenKind.FOR,
}

_TWO_CHAR_SYMBOLS = {
    "->": TokenKind.R_ARROW,
    "!=": TokenKind.NOT_EQ,
    "||": TokenKind.OR_OR,
    "&&": TokenKind.AND_AND,
    "==": TokenKind.EQ_EQ,
    "<=": TokenKind.LTE,
    ">=": TokenKind.GTE,
}

_ONE_CHAR_SYMBOLS = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.MUL,
    "/": TokenKind.DIV,
    "!": TokenKind.NOT,
    "=": TokenKind.EQ,
    "<": TokenKind.LT,
    ">": TokenKind.GT,
    ";": TokenKind.SEMICOLON,
    ":": TokenKind.COLON,
    ",": TokenKind.COMMA,
}

_OPENERS = frozenset("({[")
_CLOSERS = frozenset(")}]")


class _Cursor:
    """Walks the characters of a source while tracking byte offsets."""

    def __init__(self, source: Source) -> None:
        self._source = source
        self._text = source.text
        self._index = 0
        self._byte = 0
        self._start_index = 0
        self._start_byte = 0

    def peek(self) -> str | None:
        if self._index < len(self._text):
            return self._text[self._index]
        return None

    def peek_is(self, char: str) -> bool:
        return self.peek() == char

    def pop(self) -> str | None:
        char = self.peek()
        if char is not None:
            self._index += 1
            self._byte += len(char.encode("utf-8"))
        return char

    def popped_text(self) -> str:
        return self._text[self._start_index : self._index]

    def ignore(self) -> None:
        self._start_index = self._index
        self._start_byte = self._byte

    def take_span(self) -> Span:
        span = self._source.span(self._start_byte, self._byte)
        self.ignore()
        return span

    def take_token(self, kind: TokenKind, error: TokenError | None = None) -> TokenTree:
        return TokenTree(kind, self.take_span(), error=error)


class Lexer:
    """Splits a source into token trees, nesting tokens inside delimiters."""

    def __init__(self, source: Source) -> None:
        self.source = source

    def tokens(self) -> list[TokenTree]:
        """Lex the whole source; problems become error tokens, never exceptions."""
        cursor = _Cursor(self.source)
        stack: list[tuple[TokenKind, Span, list[TokenTree]]] = []
        tokens: list[TokenTree] = []

        while (char := cursor.pop()) is not None:
            if char in _OPENERS:
                stack.append((TokenKind.from_paren(char), cursor.take_span(), tokens))
                tokens = []
            elif char in _CLOSERS:
                if not stack:
                    error = TokenError(TokenErrorKind.UNMATCHED_CLOSE_PAREN)
                    tokens.append(TokenTree.new_error(error, cursor.take_span()))
                    continue

                open_kind, open_span, previous = stack.pop()
                close_kind = TokenKind.from_paren(char)
                close_span = cursor.take_span()

                if open_kind is not close_kind:
                    # The tree is still built; the mismatch is recorded as an
                    # extra error token at the end of its children.
                    error = TokenError(TokenErrorKind.MISMATCHED_PAREN, open_span)
                    tokens.append(TokenTree.new_error(error, close_span))

                tree = TokenTree.new_nested(open_kind, Span.union(open_span, close_span), tokens)
                tokens = previous
                tokens.append(tree)
            else:
                leaf = self._leaf(cursor, char)
                if leaf is not None:
                    tokens.append(leaf)

        # Unclosed delimiters are replaced by error tokens and their contents
        # are spliced into the enclosing level.
        for _, open_span, previous in reversed(stack):
            error = TokenError(TokenErrorKind.UNMATCHED_OPEN_PAREN)
            previous.append(TokenTree.new_error(error, open_span))
            previous.extend(tokens)
            tokens = previous

        return tokens

    @staticmethod
    def _leaf(cursor: _Cursor, char: str) -> TokenTree | None:
        if char in _WHITESPACE:
            cursor.ignore()
            return None

        if char == "/" and cursor.peek_is("/"):
            while cursor.peek() not in (None, "\n"):
                cursor.pop()
            cursor.ignore()
            return None

        if char in _DIGITS:
            while (nxt := cursor.peek()) is not None and nxt in _DIGITS:
                cursor.pop()
            return cursor.take_token(TokenKind.INT_LIT)

        if char in _IDENT_START:
            while (nxt := cursor.peek()) is not None and nxt in _IDENT_CONTINUE:
                cursor.pop()
            kind = _KEYWORDS.get(cursor.popped_text(), TokenKind.IDENT)
            return cursor.take_token(kind)

        nxt = cursor.peek()
        if nxt is not None:
            kind = _TWO_CHAR_SYMBOLS.get(char + nxt)
            if kind is not None:
                cursor.pop()
                return cursor.take_token(kind)

        kind = _ONE_CHAR_SYMBOLS.get(char)
        if kind is not None:
            return cursor.take_token(kind)

        return cursor.take_token(TokenKind.ERROR, TokenError(TokenErrorKind.ILLEGAL_CHAR))


def _diagnostic_for(token: TokenTree, source: Source) -> Diagnostic:
    error = token.error
    assert error is not None
    if error.kind is TokenErrorKind.ILLEGAL_CHAR:
        return illegal_char(token.span, source)
    if error.kind is TokenErrorKind.UNMATCHED_OPEN_PAREN:
        return unmatched_open_paren(token.span, source)
    if error.kind is TokenErrorKind.UNMATCHED_CLOSE_PAREN:
        return unmatched_close_paren(token.span, source)
    assert error.open_span is not None
    return mismatched_close_paren(error.open_span, token.span, source)


def _walk_errors(tokens: Sequence[TokenTree], source: Source) -> Iterator[Diagnostic]:
    for token in tokens:
        yield from _walk_errors(token.children, source)
        if token.kind is TokenKind.ERROR:
            yield _diagnostic_for(token, source)


def find_errors(tokens: Sequence[TokenTree], source: Source) -> list[Diagnostic]:
    """Diagnostics for every error token, children before their parent."""
    return list(_walk_errors(tokens, source))


def lex_source(source: Source) -> list[TokenTree]:
    """Lex `source`, raising `CompileError` if it contains lexical errors."""
    tokens = Lexer(source).tokens()
    errors = find_errors(tokens, source)
    if errors:
        raise CompileError(errors)
    return tokens