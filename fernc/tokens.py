"""Token kinds and the token trees produced by the lexer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from fernc.source_map import Span


class TokenKind(Enum):
    """Lexical category of a token; whitespace and comments have none."""

    IDENT = auto()

    INT_LIT = auto()

    FN = auto()
    LET = auto()
    IF = auto()
    WHILE = auto()
    FOR = auto()

    PARENS = auto()
    BRACKETS = auto()
    CURLY_BRACKETS = auto()

    SEMICOLON = auto()
    COLON = auto()
    COMMA = auto()
    R_ARROW = auto()

    PLUS = auto()
    MINUS = auto()
    MUL = auto()
    DIV = auto()
    NOT = auto()

    OR_OR = auto()
    AND_AND = auto()

    EQ = auto()
    EQ_EQ = auto()
    NOT_EQ = auto()
    LT = auto()
    LTE = auto()
    GT = auto()
    GTE = auto()

    ERROR = auto()

    @staticmethod
    def from_paren(char: str) -> TokenKind:
        """The nested kind an opening or closing delimiter belongs to."""
        try:
            return _PAREN_KINDS[char]
        except KeyError:
            raise ValueError(f"{char!r} is not a delimiter") from None

    def is_nested(self) -> bool:
        """Whether tokens of this kind hold children."""
        return self in (TokenKind.PARENS, TokenKind.BRACKETS, TokenKind.CURLY_BRACKETS)


_PAREN_KINDS = {
    "(": TokenKind.PARENS,
    ")": TokenKind.PARENS,
    "[": TokenKind.BRACKETS,
    "]": TokenKind.BRACKETS,
    "{": TokenKind.CURLY_BRACKETS,
    "}": TokenKind.CURLY_BRACKETS,
}


class TokenErrorKind(Enum):
    """What went wrong with an error token."""

    ILLEGAL_CHAR = auto()
    UNMATCHED_OPEN_PAREN = auto()
    UNMATCHED_CLOSE_PAREN = auto()
    MISMATCHED_PAREN = auto()


@dataclass(frozen=True)
class TokenError:
    """Details of an error token; `open_span` is set for mismatched delimiters."""

    kind: TokenErrorKind
    open_span: Span | None = None

    def __post_init__(self) -> None:
        if (self.kind is TokenErrorKind.MISMATCHED_PAREN) != (self.open_span is not None):
            raise ValueError("open_span is required exactly for mismatched delimiters")


@dataclass
class TokenTree:
    """A token, possibly holding the tokens between a pair of delimiters."""

    kind: TokenKind
    span: Span
    children: list[TokenTree] = field(default_factory=list)
    error: TokenError | None = None

    def __post_init__(self) -> None:
        if self.children and not self.kind.is_nested():
            raise ValueError("only nested tokens can have children")
        if (self.kind is TokenKind.ERROR) != (self.error is not None):
            raise ValueError("error details are required exactly for error tokens")

    @staticmethod
    def new_error(error: TokenError, span: Span) -> TokenTree:
        """An error token covering `span`."""
        return TokenTree(TokenKind.ERROR, span, error=error)

    @staticmethod
    def new_nested(kind: TokenKind, span: Span, children: list[TokenTree]) -> TokenTree:
        """A delimited token holding `children`."""
        if not kind.is_nested():
            raise ValueError("only nested tokens can have children")
        return TokenTree(kind, span, list(children))