import pytest

from fernc.diagnostics import (
    BLUE_FG,
    BOLD,
    RED_FG,
    RESET,
    CompileError,
    Diagnostic,
    DiagnosticPart,
    illegal_char,
    mismatched_close_paren,
    unmatched_close_paren,
    unmatched_open_paren,
)
from fernc.source_map import SourceMap


def make(text, name="test.fern"):
    sm = SourceMap()
    return sm, sm.get_source(sm.add_source(name, text))


def test_render_without_parts_is_just_header():
    sm, _ = make("")
    out = Diagnostic("boom").render(sm)
    assert out == f"{RED_FG}{BOLD}error{RESET}{BOLD}: boom{RESET}\n"


def test_render_illegal_char_worked_example():
    text = "let x = $;\n"
    sm, src = make(text)
    at = text.index("$")
    out = illegal_char(src.span_with_len(at, 1), src).render(sm)
    expected = (
        f"{RED_FG}{BOLD}error{RESET}{BOLD}: Illegal character `$`.{RESET}\n"
        f" {BLUE_FG}{BOLD}-->{RESET} test.fern:1:9\n"
        f" {BLUE_FG}{BOLD} |{RESET}\n"
        f"{BLUE_FG}{BOLD}1 |{RESET} let x = $;\n"
        f" {BLUE_FG}{BOLD} | {RESET}{' ' * at}{RED_FG}{BOLD}^ {RESET}\n"
    )
    assert out == expected


def test_parts_rendered_in_source_order():
    text = "aaa bbb"
    sm, src = make(text)
    diag = (
        Diagnostic("x")
        .add_part(src.span(4, 7), "second note")
        .add_part(src.span(0, 3), "first note")
    )
    out = diag.render(sm)
    assert out.index("first note") < out.index("second note")


def test_gutter_width_follows_largest_line_number():
    text = "\n" * 9 + "x$\n"
    sm, src = make(text)
    span = src.span_with_len(text.index("$"), 1)
    line = src.line_of(span.start)
    out = illegal_char(span, src).render(sm)
    gutter = " " * len(str(line))
    assert f"{BLUE_FG}{BOLD}{line} |{RESET} x$\n" in out
    assert f"{gutter}{BLUE_FG}{BOLD} |{RESET}\n" in out
    assert f"{gutter}{BLUE_FG}{BOLD}-->{RESET} test.fern:{line}:" in out


def test_highlight_length_counts_characters():
    text = "éé;"
    sm, src = make(text)
    out = Diagnostic("m").add_part(src.span(0, 4), "here").render(sm)
    assert f"{RED_FG}{BOLD}^^ here{RESET}" in out


def test_multiline_span_rejected():
    sm, src = make("ab\ncd")
    with pytest.raises(ValueError):
        Diagnostic("m").add_part(src.span(0, 4), "").render(sm)


def test_add_part_chains_and_records():
    _, src = make("abc")
    diag = Diagnostic("m")
    span = src.span(0, 1)
    assert diag.add_part(span, "note") is diag
    assert diag.parts == [DiagnosticPart(span, "note")]


def test_illegal_char_message():
    _, src = make("a$b")
    span = src.span(1, 2)
    diag = illegal_char(span, src)
    assert diag.msg == "Illegal character `$`."
    assert diag.parts == [DiagnosticPart(span, "")]


def test_unmatched_open_paren_message():
    _, src = make("(")
    span = src.span(0, 1)
    diag = unmatched_open_paren(span, src)
    assert diag.msg == "Unclosed delimiter `(`."
    assert diag.parts == [DiagnosticPart(span, "has no match")]


def test_unmatched_close_paren_message():
    _, src = make("}")
    span = src.span(0, 1)
    diag = unmatched_close_paren(span, src)
    assert diag.msg == "Unexpected closing delimiter `}`."
    assert diag.parts == [DiagnosticPart(span, "has no match")]


def test_mismatched_close_paren_message_and_render():
    text = "(\n]"
    sm, src = make(text)
    open_span = src.span(0, 1)
    close_span = src.span(2, 3)
    diag = mismatched_close_paren(open_span, close_span, src)
    assert diag.msg == "Mismatched closing delimiter `]`."
    assert diag.parts == [
        DiagnosticPart(open_span, "unclosed delimiter"),
        DiagnosticPart(close_span, "mismatched closing delimiter"),
    ]
    out = diag.render(sm)
    assert out.index("unclosed delimiter") < out.index("mismatched closing delimiter")


def test_compile_error_carries_diagnostics():
    diags = [Diagnostic("first"), Diagnostic("second")]
    err = CompileError(diags)
    assert err.diagnostics == diags
    assert "first" in str(err) and "second" in str(err)