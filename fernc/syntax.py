"""Syntax tree nodes produced by the parser."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from fernc.source_map import Span


@dataclass
class TypeAst:
    """A type written in the source; `name` is the span of its identifier."""

    name: Optional[Span] = None


@dataclass
class TypeAnnotationAst:
    """A `: type` annotation."""

    colon: Span
    ty: TypeAst


@dataclass
class FnArgAst:
    """One `name: type` function parameter."""

    name: Span
    colon: Span
    ty: TypeAst


@dataclass
class FnReturnTypeAst:
    """The `-> type` part of a function declaration."""

    r_arrow: Span
    ty: TypeAst


@dataclass
class SemicolonStatementAst:
    """A lone `;` statement."""

    span: Span


@dataclass
class IfExprAst:
    """An `if condition { ... }` expression."""

    if_kw: Span
    condition: ExpressionAst
    body: BlockAst


@dataclass
class LetStatementAst:
    """A `let name: type = value;` statement."""

    let_kw: Span
    name_ident: Span
    type_annotation: Optional[TypeAnnotationAst]
    equals: Span
    value: ExpressionAst
    semicolon: Span


@dataclass
class ExpressionStatementAst:
    """An expression used as a statement, optionally ended by `;`."""

    expr: ExpressionAst
    semicolon: Optional[Span] = None


@dataclass
class BlockAst:
    """A `{ ... }` block of statements with an optional trailing expression."""

    statements: list[StatementAst] = field(default_factory=list)
    return_expr: Optional[ExpressionAst] = None


@dataclass
class FnDeclAst:
    """A function declaration."""

    fn_kw: Span
    name_ident: Span
    args: list[FnArgAst]
    return_ty: Optional[FnReturnTypeAst]
    body: BlockAst


@dataclass
class FileAst:
    """All declarations of one source file."""

    declarations: list[FnDeclAst] = field(default_factory=list)


# `if` is the only expression form the language has so far.
ExpressionAst = IfExprAst
StatementAst = Union[SemicolonStatementAst, LetStatementAst, ExpressionStatementAst]