import pytest

from fernc.diagnostics import CompileError
from fernc.parsing import parse_source
from fernc.source_map import Source, SourceId
from fernc.syntax import BlockAst


def make_source(text):
    return Source(SourceId(0), "test.fern", text)


def names(source, file):
    return [source.text_of_span(d.name_ident) for d in file.declarations]


def test_empty_source():
    assert parse_source(make_source("")).declarations == []


def test_simple_function():
    src = make_source("fn main() {}")
    file = parse_source(src)
    assert names(src, file) == ["main"]
    decl = file.declarations[0]
    assert src.text_of_span(decl.fn_kw) == "fn"
    assert decl.args == []
    assert decl.return_ty is None
    assert decl.body == BlockAst()


def test_arguments_and_return_type():
    src = make_source("fn add(a: i32, b: i32) -> i32 {}")
    decl = parse_source(src).declarations[0]
    assert [src.text_of_span(a.name) for a in decl.args] == ["a", "b"]
    assert [src.text_of_span(a.ty.name) for a in decl.args] == ["i32", "i32"]
    assert src.text_of_span(decl.return_ty.r_arrow) == "->"
    assert src.text_of_span(decl.return_ty.ty.name) == "i32"


def test_trailing_comma_in_arguments():
    src = make_source("fn f(a: x,) {}")
    decl = parse_source(src).declarations[0]
    assert [src.text_of_span(a.name) for a in decl.args] == ["a"]


def test_missing_argument_type_is_tolerated():
    src = make_source("fn f(a:) {}")
    decl = parse_source(src).declarations[0]
    assert decl.args[0].ty.name is None


def test_bad_argument_is_skipped_to_next_comma():
    src = make_source("fn f(1, b: t) {}")
    decl = parse_source(src).declarations[0]
    assert [src.text_of_span(a.name) for a in decl.args] == ["b"]


def test_stray_tokens_before_function_are_skipped():
    src = make_source("let x fn main() {}")
    assert names(src, parse_source(src)) == ["main"]


@pytest.mark.parametrize(
    "text",
    ["fn () {} fn ok() {}", "fn main {} fn ok() {}", "fn f(a: x y) {} fn ok() {}"],
)
def test_malformed_functions_are_dropped(text):
    src = make_source(text)
    assert names(src, parse_source(src)) == ["ok"]


def test_several_functions_in_order():
    src = make_source("fn a() {}\nfn b(x: y) {}\nfn c() -> z {}")
    assert names(src, parse_source(src)) == ["a", "b", "c"]


def test_lex_errors_are_raised():
    with pytest.raises(CompileError) as info:
        parse_source(make_source("fn main() { $ }"))
    assert [d.msg for d in info.value.diagnostics] == ["Illegal character `$`."]