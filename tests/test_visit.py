import pytest

from fernc.parsing import parse_source
from fernc.source_map import Source, SourceId
from fernc.syntax import BlockAst, SemicolonStatementAst, TypeAst
from fernc.visit import AstVisitor, PrettyPrinter, pretty_print


def make_source(text):
    return Source(SourceId(0), "test.fern", text)


@pytest.mark.parametrize(
    "text",
    [
        "fn main() {}",
        "fn add(a: i32, b: i32) -> i32 {}",
        "fn a() {}\nfn b(x: y) -> z {}",
    ],
)
def test_canonical_code_round_trips(text):
    src = make_source(text)
    assert pretty_print(parse_source(src), src) == text


def test_formatting_is_idempotent():
    src = make_source("fn   f ( a :t ,b:u, )->v{ }  fn g(){}")
    once = pretty_print(parse_source(src), src)
    again_src = make_source(once)
    assert pretty_print(parse_source(again_src), again_src) == once


def test_empty_file_prints_nothing():
    src = make_source("")
    assert pretty_print(parse_source(src), src) == ""


def test_missing_type_prints_placeholder():
    src = make_source("x")
    assert PrettyPrinter(src).visit(TypeAst()) == "_"
    assert PrettyPrinter(src).visit(TypeAst(src.span(0, 1))) == "x"


def test_block_statements_are_indented():
    src = make_source(";")
    block = BlockAst([SemicolonStatementAst(src.span(0, 1))])
    assert PrettyPrinter(src).visit(block) == "{\n    ;\n}"


def test_generic_visit_reaches_nested_nodes():
    class ArgCollector(AstVisitor):
        def __init__(self, source):
            self.source = source
            self.names = []

        def visit_fn_arg(self, arg):
            self.names.append(self.source.text_of_span(arg.name))

    src = make_source("fn f(a: x, b: y) {} fn g(c: z) {}")
    collector = ArgCollector(src)
    collector.visit(parse_source(src))
    assert collector.names == ["a", "b", "c"]


def test_visit_rejects_non_nodes():
    with pytest.raises(TypeError):
        AstVisitor().visit("not a node")