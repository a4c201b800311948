"""Command-line driver: parse each source file and print it back formatted."""

from __future__ import annotations

import argparse
from typing import Iterator, Sequence

from fernc.diagnostics import CompileError, Diagnostic
from fernc.parsing import parse_source
from fernc.source_map import SourceMap
from fernc.visit import pretty_print

DEFAULT_INPUT = "examples/simple.fern"


def pipeline(sm: SourceMap) -> Iterator[str]:
    """Yield the formatted text of each source that parses.

    After every source has been tried, raises `CompileError` holding the
    diagnostics of all sources that failed.
    """
    errors: list[Diagnostic] = []
    for source in sm.sources():
        try:
            parsed = parse_source(source)
        except CompileError as exc:
            errors.extend(exc.diagnostics)
            continue
        yield pretty_print(parsed, source)

    if errors:
        raise CompileError(errors)


def main(argv: Sequence[str] | None = None) -> None:
    """Run the compiler on the given files."""
    parser = argparse.ArgumentParser(prog="fernc", description="Compile Fern source files.")
    parser.add_argument("files", nargs="*", default=[DEFAULT_INPUT], metavar="FILE")
    args = parser.parse_args(argv)

    sm = SourceMap()
    for filename in args.files:
        try:
            sm.add_source_from_file(filename)
        except OSError as exc:
            parser.error(f"cannot read {filename}: {exc.strerror or exc}")

    try:
        for out in pipeline(sm):
            print(out)
    except CompileError as exc:
        print("".join(d.render(sm) + "\n" for d in exc.diagnostics), end="")


if __name__ == "__main__":
    main()