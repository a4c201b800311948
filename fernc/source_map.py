"""Ownership of source texts and byte-based positions and spans within them."""

from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator


@dataclass(frozen=True)
class SourceId:
    """Handle for a `Source` inside its `SourceMap`."""

    index: int


@dataclass(frozen=True)
class SourcePos:
    """A byte offset within a source, aligned to a UTF-8 code point."""

    src_id: SourceId
    byte: int


@dataclass(frozen=True)
class Span:
    """A half-open byte range within a single source."""

    start: SourcePos
    end: SourcePos

    def __post_init__(self) -> None:
        if self.start.src_id != self.end.src_id:
            raise ValueError("span endpoints belong to different sources")
        if self.start.byte > self.end.byte:
            raise ValueError("span start lies after its end")

    @staticmethod
    def union(start: Span, end: Span) -> Span:
        """The span from the start of `start` to the end of `end`."""
        return Span(start.start, end.end)

    def src_id(self) -> SourceId:
        """The id of the source this span lies in."""
        return self.start.src_id

    def byte_range(self) -> range:
        """The byte offsets covered by the span."""
        return range(self.start.byte, self.end.byte)


def _newline_offsets(data: bytes) -> list[int]:
    offsets = [i for i, b in enumerate(data) if b == 0x0A]
    # The last line is always treated as terminated.
    if not data.endswith(b"\n"):
        offsets.append(len(data))
    return offsets


@dataclass(frozen=True, eq=False)
class Source:
    """A real or virtual file of source code."""

    id: SourceId
    filename: str
    text: str
    _data: bytes = field(init=False, repr=False)
    _newlines: list[int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        data = self.text.encode("utf-8")
        object.__setattr__(self, "_data", data)
        object.__setattr__(self, "_newlines", _newline_offsets(data))

    def _is_char_boundary(self, byte: int) -> bool:
        if byte < 0 or byte > len(self._data):
            return False
        return byte == len(self._data) or (self._data[byte] & 0xC0) != 0x80

    def _pos(self, byte: int) -> SourcePos:
        if not self._is_char_boundary(byte):
            raise ValueError(f"byte offset {byte} is not a character boundary")
        return SourcePos(self.id, byte)

    def _check_owned(self, pos: SourcePos) -> None:
        if pos.src_id != self.id:
            raise ValueError("position belongs to a different source")

    def _first_byte_of_line(self, line: int) -> int:
        if line == 1:
            return 0
        return self._newlines[line - 2] + 1

    def text_of_span(self, span: Span) -> str:
        """The text covered by `span`."""
        return self._data[span.start.byte : span.end.byte].decode("utf-8")

    def line_of(self, pos: SourcePos) -> int:
        """The 1-based line of `pos`; a newline belongs to the line it ends."""
        self._check_owned(pos)
        return bisect_left(self._newlines, pos.byte) + 1

    def col_of(self, pos: SourcePos) -> int:
        """The 1-based byte column of `pos` within its line."""
        self._check_owned(pos)
        return pos.byte - self._first_byte_of_line(self.line_of(pos)) + 1

    def span(self, start: int, end: int) -> Span:
        """The span from inclusive byte `start` to exclusive byte `end`."""
        return Span(self._pos(start), self._pos(end))

    def span_with_len(self, start: int, length: int) -> Span:
        """The span of `length` bytes beginning at byte `start`."""
        return self.span(start, start + length)

    def span_of_line(self, line: int) -> Span:
        """The span of the given 1-based line, without its newline."""
        if not 1 <= line <= len(self._newlines):
            raise IndexError(f"line {line} is out of range")
        start = self._first_byte_of_line(line)
        end = self._first_byte_of_line(line + 1) - 1
        return self.span(start, end)


@dataclass
class SourceMap:
    """Owns every `Source` the compiler works on."""

    _sources: list[Source] = field(default_factory=list)

    def add_source(self, filename: str, text: str) -> SourceId:
        """Register a new source and return its id."""
        source_id = SourceId(len(self._sources))
        self._sources.append(Source(source_id, filename, text))
        return source_id

    def add_source_from_file(self, filename: str) -> SourceId:
        """Read a UTF-8 file from disk and register it as a source."""
        text = Path(filename).read_text(encoding="utf-8")
        return self.add_source(filename, text)

    def get_source(self, source_id: SourceId) -> Source:
        """The source with the given id."""
        return self._sources[source_id.index]

    def sources(self) -> Iterator[Source]:
        """Iterate over the sources in the order they were added."""
        return iter(self._sources)