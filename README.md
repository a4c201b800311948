# fernc

The front end of a compiler for the Fern programming language. It reads Fern
source files and turns each one into a tree of tokens. It then parses the
function declarations and prints them back in a canonical layout. Lexical
errors are reported as diagnostics that point at the source text at fault.

## Installation

```
pip install .
```

## Command line

```
fernc [FILE ...]
```

Each file is parsed, and the declarations in it are printed in formatted form,
for example `fn main(x: int) -> int {}`. With no arguments the command reads
`examples/simple.fern`, which is looked up relative to the current directory.
If a file cannot be read, the command exits with a usage error.

If any source has lexical errors, every diagnostic is printed after the output
of the files that parsed cleanly. The terminal output is coloured with ANSI
codes. Without the colours, it looks like this for the input `fn main( {}`:

```
error: Unclosed delimiter `(`.
 --> examples/simple.fern:1:8
  |
1 | fn main( {}
  |        ^ has no match
```

The lexer reports illegal characters, unclosed delimiters, closing delimiters
without an opener, and closing delimiters of the wrong kind.

## Library use

```python
from fernc.diagnostics import CompileError
from fernc.parsing import parse_source
from fernc.source_map import SourceMap
from fernc.visit import pretty_print

sm = SourceMap()
sm.add_source("example.fern", "fn main(x: int) -> int {}\n")

for source in sm.sources():
    try:
        ast = parse_source(source)
    except CompileError as err:
        for diagnostic in err.diagnostics:
            print(diagnostic.render(sm))
    else:
        print(pretty_print(ast, source))
```

The modules:

- `fernc.source_map`: `SourceMap`, `Source`, `SourceId`, `SourcePos` and
  `Span`. Positions are byte offsets. `Source.line_of` and `Source.col_of` give
  1-based lines and byte columns.
- `fernc.tokens`: `TokenKind`, `TokenErrorKind`, `TokenError` and `TokenTree`.
- `fernc.lexer`: `Lexer`, `find_errors` and `lex_source`. `lex_source` builds
  nested `TokenTree`s, in which each pair of parentheses, brackets or braces
  becomes one token that holds its contents. It raises `CompileError` when
  there are lexical errors.
- `fernc.syntax`: the syntax tree dataclasses (`FileAst`, `FnDeclAst`,
  `FnArgAst`, `FnReturnTypeAst`, `BlockAst`, `TypeAst` and the statement and
  expression nodes).
- `fernc.parsing`: `parse_source` returns a `FileAst` holding the function
  declarations.
- `fernc.diagnostics`: `Diagnostic`, `DiagnosticPart`, `CompileError`, and the
  constructors `illegal_char`, `unmatched_open_paren`, `unmatched_close_paren`
  and `mismatched_close_paren`.
- `fernc.visit`: `AstVisitor`, which dispatches to `visit_<kind>` methods;
  `PrettyPrinter`; and `pretty_print`.
- `fernc.cli`: `pipeline` and `main`, which back the `fernc` command.

## Limitations

- Only the front end exists: there is no type checking and no code generation.
- The parser reads function headers only: the name, the `name: type`
  parameters and the optional `-> type`. The contents of a function body are
  skipped, so every body is printed as `{}`.
- Only lexical errors produce diagnostics. When a declaration does not parse,
  the parser skips ahead to the next `fn` and reports nothing.
- A diagnostic whose span runs over more than one line cannot be rendered and
  raises `ValueError`.

## Tests

```
pip install .[test]
pytest
```