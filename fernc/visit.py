"""Traversal of syntax trees and a printer that writes them back as code."""

from __future__ import annotations

import textwrap
from dataclasses import fields
from typing import Any

from fernc.source_map import Source
from fernc.syntax import (
    BlockAst,
    ExpressionStatementAst,
    FileAst,
    FnArgAst,
    FnDeclAst,
    FnReturnTypeAst,
    IfExprAst,
    LetStatementAst,
    SemicolonStatementAst,
    TypeAnnotationAst,
    TypeAst,
)

_METHOD_NAMES: dict[type, str] = {
    FileAst: "visit_file",
    FnDeclAst: "visit_fn_decl",
    FnArgAst: "visit_fn_arg",
    FnReturnTypeAst: "visit_fn_ret_ty",
    BlockAst: "visit_block",
    SemicolonStatementAst: "visit_semicolon",
    LetStatementAst: "visit_let_statement",
    TypeAnnotationAst: "visit_type_annotation",
    ExpressionStatementAst: "visit_expr_stmt",
    IfExprAst: "visit_if_expr",
    TypeAst: "visit_ty",
}

_NODE_TYPES = tuple(_METHOD_NAMES)

_INDENT = "    "


class AstVisitor:
    """Dispatches each node to `visit_<kind>`, falling back to `generic_visit`."""

    def visit(self, node: Any) -> Any:
        """Visit one syntax node and return what its handler returns."""
        try:
            name = _METHOD_NAMES[type(node)]
        except KeyError:
            raise TypeError(f"not a syntax node: {node!r}") from None
        handler = getattr(self, name, None)
        if handler is None:
            return self.generic_visit(node)
        return handler(node)

    def generic_visit(self, node: Any) -> None:
        """Visit every child node of `node` in field order."""
        for f in fields(node):
            value = getattr(node, f.name)
            if isinstance(value, list):
                for item in value:
                    if isinstance(item, _NODE_TYPES):
                        self.visit(item)
            elif isinstance(value, _NODE_TYPES):
                self.visit(value)


class PrettyPrinter(AstVisitor):
    """Renders syntax nodes as canonically formatted source text."""

    def __init__(self, source: Source) -> None:
        self.source = source

    def _text(self, span) -> str:
        return self.source.text_of_span(span)

    def visit_file(self, file: FileAst) -> str:
        return "\n".join(self.visit(decl) for decl in file.declarations)

    def visit_fn_decl(self, decl: FnDeclAst) -> str:
        args = ", ".join(self.visit(arg) for arg in decl.args)
        ret = f" {self.visit(decl.return_ty)}" if decl.return_ty is not None else ""
        return f"fn {self._text(decl.name_ident)}({args}){ret} {self.visit(decl.body)}"

    def visit_fn_arg(self, arg: FnArgAst) -> str:
        return f"{self._text(arg.name)}: {self.visit(arg.ty)}"

    def visit_fn_ret_ty(self, ret: FnReturnTypeAst) -> str:
        return f"-> {self.visit(ret.ty)}"

    def visit_block(self, block: BlockAst) -> str:
        parts = [self.visit(stmt) for stmt in block.statements]
        if block.return_expr is not None:
            parts.append(self.visit(block.return_expr))
        if not parts:
            return "{}"
        return "{\n" + textwrap.indent("\n".join(parts), _INDENT) + "\n}"

    def visit_semicolon(self, stmt: SemicolonStatementAst) -> str:
        return ";"

    def visit_let_statement(self, stmt: LetStatementAst) -> str:
        annotation = (
            self.visit(stmt.type_annotation) if stmt.type_annotation is not None else ""
        )
        name = self._text(stmt.name_ident)
        return f"let {name}{annotation} = {self.visit(stmt.value)};"

    def visit_type_annotation(self, annotation: TypeAnnotationAst) -> str:
        return f": {self.visit(annotation.ty)}"

    def visit_expr_stmt(self, stmt: ExpressionStatementAst) -> str:
        end = ";" if stmt.semicolon is not None else ""
        return f"{self.visit(stmt.expr)}{end}"

    def visit_if_expr(self, expr: IfExprAst) -> str:
        return f"if {self.visit(expr.condition)} {self.visit(expr.body)}"

    def visit_ty(self, ty: TypeAst) -> str:
        return self._text(ty.name) if ty.name is not None else "_"


def pretty_print(file: FileAst, source: Source) -> str:
    """Format a parsed file as source text."""
    return PrettyPrinter(source).visit(file)