"""Parser from token trees to the syntax tree.

Grammar covered so far::

    file     ::= fn_decl*
    fn_decl  ::= FN IDENT fn_args (R_ARROW type)? block
    fn_args  ::= L_PAREN (fn_arg COMMA)* fn_arg? R_PAREN
    fn_arg   ::= IDENT COLON type
    block    ::= L_CURLY ... R_CURLY
    type     ::= IDENT

Tokens that cannot start a declaration are skipped up to the next `fn`.
"""

from __future__ import annotations

from typing import Collection, Sequence

from fernc.lexer import lex_source
from fernc.source_map import Source
from fernc.syntax import BlockAst, FileAst, FnArgAst, FnDeclAst, FnReturnTypeAst, TypeAst
from fernc.tokens import TokenKind, TokenTree


class _Desync(Exception):
    """The parser met a token it did not expect and lost its place."""


class _Cursor:
    def __init__(self, tokens: Sequence[TokenTree]) -> None:
        self._tokens = tokens
        self._pos = 0

    def is_eof(self) -> bool:
        return self._pos >= len(self._tokens)

    def peek_is(self, kind: TokenKind) -> bool:
        return not self.is_eof() and self._tokens[self._pos].kind is kind

    def pop(self) -> TokenTree:
        token = self._tokens[self._pos]
        self._pos += 1
        return token

    def pop_expect(self, kind: TokenKind) -> TokenTree:
        if not self.peek_is(kind):
            raise _Desync
        return self.pop()

    def pop_if(self, kind: TokenKind) -> TokenTree | None:
        return self.pop() if self.peek_is(kind) else None

    def sync_to(self, kinds: Collection[TokenKind]) -> None:
        while not self.is_eof() and self._tokens[self._pos].kind not in kinds:
            self._pos += 1


def _parse_ty(cursor: _Cursor) -> TypeAst:
    name = cursor.pop_if(TokenKind.IDENT)
    return TypeAst(name.span if name is not None else None)


def _parse_block(cursor: _Cursor) -> BlockAst:
    cursor.pop_if(TokenKind.CURLY_BRACKETS)
    return BlockAst()


def _parse_fn_arg(cursor: _Cursor) -> FnArgAst:
    name = cursor.pop_expect(TokenKind.IDENT)
    colon = cursor.pop_expect(TokenKind.COLON)
    return FnArgAst(name.span, colon.span, _parse_ty(cursor))


def _parse_fn_args(cursor: _Cursor) -> list[FnArgAst]:
    parens = cursor.pop_expect(TokenKind.PARENS)
    inner = _Cursor(parens.children)
    args: list[FnArgAst] = []

    while not inner.is_eof():
        try:
            args.append(_parse_fn_arg(inner))
        except _Desync:
            inner.sync_to({TokenKind.COMMA})
        if inner.pop_if(TokenKind.COMMA) is None:
            break

    if not inner.is_eof():
        raise _Desync
    return args


def _parse_fn_return_ty(cursor: _Cursor) -> FnReturnTypeAst | None:
    r_arrow = cursor.pop_if(TokenKind.R_ARROW)
    if r_arrow is None:
        return None
    return FnReturnTypeAst(r_arrow.span, _parse_ty(cursor))


def _parse_fn(cursor: _Cursor) -> FnDeclAst:
    fn_kw = cursor.pop_expect(TokenKind.FN)
    name = cursor.pop_if(TokenKind.IDENT)
    try:
        args: list[FnArgAst] | None = _parse_fn_args(cursor)
    except _Desync:
        args = None
    return_ty = _parse_fn_return_ty(cursor)
    body = _parse_block(cursor)

    if name is None or args is None:
        raise _Desync
    return FnDeclAst(fn_kw.span, name.span, args, return_ty, body)


def _parse_decl(cursor: _Cursor) -> FnDeclAst | None:
    if cursor.peek_is(TokenKind.FN):
        try:
            return _parse_fn(cursor)
        except _Desync:
            pass
    cursor.sync_to({TokenKind.FN})
    return None


def _parse_file(cursor: _Cursor) -> FileAst:
    declarations = []
    while not cursor.is_eof():
        decl = _parse_decl(cursor)
        if decl is not None:
            declarations.append(decl)
    return FileAst(declarations)


def parse_source(source: Source) -> FileAst:
    """Parse `source`; raises `CompileError` when lexing fails."""
    return _parse_file(_Cursor(lex_source(source)))