"""Compiler diagnostics and their terminal rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Union

from fernc.source_map import Source, SourceMap, SourcePos, Span

BOLD = "\x1b[1m"
RED_FG = "\x1b[91m"
BLUE_FG = "\x1b[94m"
RESET = "\x1b[0m"


@dataclass
class DiagnosticPart:
    """A highlighted span with an explanatory note."""

    span: Span
    help: str


@dataclass
class Diagnostic:
    """An error message with the source spans it concerns."""

    msg: str
    parts: list[DiagnosticPart] = field(default_factory=list)

    def add_part(self, span: Span, help: str) -> Diagnostic:
        """Attach a highlighted span and return the diagnostic for chaining."""
        self.parts.append(DiagnosticPart(span, help))
        return self

    def render(self, sm: SourceMap) -> str:
        """Render the diagnostic as ANSI-coloured text."""
        return _render(self, sm)


class CompileError(Exception):
    """Raised when compilation produces one or more diagnostics."""

    def __init__(self, diagnostics: Iterable[Diagnostic]) -> None:
        self.diagnostics = list(diagnostics)
        super().__init__("; ".join(d.msg for d in self.diagnostics))


@dataclass(frozen=True)
class _PosLine:
    pos: SourcePos


@dataclass(frozen=True)
class _PaddingLine:
    pass


@dataclass(frozen=True)
class _CodeLine:
    source: Source
    line: int


@dataclass(frozen=True)
class _HighlightLine:
    span: Span
    message: str


_RenderLine = Union[_PosLine, _PaddingLine, _CodeLine, _HighlightLine]


def _gutter_width(line: _RenderLine) -> int:
    if isinstance(line, _CodeLine):
        return len(str(line.line))
    return 0


def _layout(diag: Diagnostic, sm: SourceMap) -> list[_RenderLine]:
    lines: list[_RenderLine] = []
    for part in sorted(diag.parts, key=lambda p: p.span.start.byte):
        source = sm.get_source(part.span.src_id())
        start_line = source.line_of(part.span.start)
        end_line = source.line_of(part.span.end)
        if start_line != end_line:
            raise ValueError("diagnostic spans covering several lines are not supported")

        lines.append(_PosLine(part.span.start))
        lines.append(_PaddingLine())
        for line in range(start_line, end_line + 1):
            lines.append(_CodeLine(source, line))
            if line == start_line:
                lines.append(_HighlightLine(part.span, part.help))
        lines.append(_PaddingLine())

    # Padding directly after a highlight is redundant.
    collapsed: list[_RenderLine] = []
    previous: _RenderLine | None = None
    for line in lines:
        if not (isinstance(line, _PaddingLine) and isinstance(previous, _HighlightLine)):
            collapsed.append(line)
        previous = line
    return collapsed


def _render(diag: Diagnostic, sm: SourceMap) -> str:
    lines = _layout(diag, sm)
    gw = max((_gutter_width(line) for line in lines), default=0)
    gutter = " " * gw

    out = [f"{RED_FG}{BOLD}error{RESET}{BOLD}: {diag.msg}{RESET}\n"]
    for line in lines:
        match line:
            case _PosLine(pos=pos):
                source = sm.get_source(pos.src_id)
                out.append(
                    f"{gutter}{BLUE_FG}{BOLD}-->{RESET} "
                    f"{source.filename}:{source.line_of(pos)}:{source.col_of(pos)}\n"
                )
            case _PaddingLine():
                out.append(f"{gutter}{BLUE_FG}{BOLD} |{RESET}\n")
            case _CodeLine(source=source, line=number):
                text = source.text_of_span(source.span_of_line(number))
                out.append(f"{BLUE_FG}{BOLD}{number:>{gw}} |{RESET} {text}\n")
            case _HighlightLine(span=span, message=message):
                source = sm.get_source(span.src_id())
                offset = source.col_of(span.start) - 1
                carets = "^" * len(source.text_of_span(span))
                out.append(
                    f"{gutter}{BLUE_FG}{BOLD} | {RESET}{' ' * offset}"
                    f"{RED_FG}{BOLD}{carets} {message}{RESET}\n"
                )
    return "".join(out)


def illegal_char(span: Span, source: Source) -> Diagnostic:
    """Diagnostic for a character the lexer does not recognise."""
    sym_text = source.text_of_span(span)
    return Diagnostic(f"Illegal character `{sym_text}`.").add_part(span, "")


def unmatched_open_paren(span: Span, source: Source) -> Diagnostic:
    """Diagnostic for an opening delimiter that is never closed."""
    paren_text = source.text_of_span(span)
    return Diagnostic(f"Unclosed delimiter `{paren_text}`.").add_part(span, "has no match")


def unmatched_close_paren(span: Span, source: Source) -> Diagnostic:
    """Diagnostic for a closing delimiter with no opener."""
    paren_text = source.text_of_span(span)
    return Diagnostic(f"Unexpected closing delimiter `{paren_text}`.").add_part(
        span, "has no match"
    )


def mismatched_close_paren(open_span: Span, close_span: Span, source: Source) -> Diagnostic:
    """Diagnostic for a closing delimiter of the wrong kind."""
    close_text = source.text_of_span(close_span)
    return (
        Diagnostic(f"Mismatched closing delimiter `{close_text}`.")
        .add_part(open_span, "unclosed delimiter")
        .add_part(close_span, "mismatched closing delimiter")
    )