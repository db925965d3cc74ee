"""The -print and -print0 actions."""

from __future__ import annotations

import enum

from .base import FileEntry, Matcher, MatcherIO


class PrintDelimiter(enum.Enum):
    """What follows each printed path."""

    NEWLINE = "\n"
    NULL = "\0"


class Printer(Matcher):
    """Writes the entry's path to the output and always matches."""

    def __init__(self, delimiter: PrintDelimiter = PrintDelimiter.NEWLINE) -> None:
        self.delimiter = delimiter

    def matches(self, entry: FileEntry, matcher_io: MatcherIO) -> bool:
        matcher_io.write(f"{entry.path}{self.delimiter.value}")
        matcher_io.flush()
        return True

    def has_side_effects(self) -> bool:
        return True