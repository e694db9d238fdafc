"""Split raw DXF text into an addressable sequence of trimmed lines.

Group codes and values are not paired up front. Decoders address them
positionally: the code sits at line ``i`` and its value at ``i + 1``.
"""

from __future__ import annotations

from collections.abc import Iterator


class TagStream:
    """Immutable, bounds-safe view over the trimmed lines of a DXF document."""

    __slots__ = ("_lines",)

    def __init__(self, lines: tuple[str, ...]) -> None:
        self._lines = lines

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self._lines)

    def line(self, index: int) -> str:
        """Return the line at ``index``, or ``""`` outside the stream."""
        if 0 <= index < len(self._lines):
            return self._lines[index]
        return ""

    def code_at(self, index: int) -> str:
        return self.line(index)

    def value_at(self, index: int) -> str:
        """Return the value belonging to the group code at ``index``."""
        return self.line(index + 1)

    def pair(self, index: int) -> tuple[str, str]:
        return self.line(index), self.line(index + 1)


def scan_lines(text: str) -> TagStream:
    """Split ``text`` into trimmed lines (handles ``\\n``, ``\\r\\n`` and a BOM).

    Only ``\\n`` separates lines; other Unicode line breaks inside a value
    stay part of that value.
    """
    if text.startswith("\ufeff"):
        text = text[1:]
    if text.endswith("\n"):
        text = text[:-1]
    if not text:
        return TagStream(())
    return TagStream(tuple(line.strip() for line in text.split("\n")))
