"""Core types shared by every matcher: file entries, matcher I/O and comparisons."""

from __future__ import annotations

import enum
import os
import stat
import sys
import time
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import TextIO


class FindError(Exception):
    """Raised for invalid expressions and arguments."""


class FileType(enum.Enum):
    """The kind of object a directory entry refers to."""

    FILE = "f"
    DIRECTORY = "d"
    SYMLINK = "l"
    BLOCK_DEVICE = "b"
    CHAR_DEVICE = "c"
    FIFO = "p"
    SOCKET = "s"
    UNKNOWN = "U"


def file_type_from_mode(mode: int) -> FileType:
    """Classify a ``st_mode`` value."""
    if stat.S_ISREG(mode):
        return FileType.FILE
    if stat.S_ISDIR(mode):
        return FileType.DIRECTORY
    if stat.S_ISLNK(mode):
        return FileType.SYMLINK
    if stat.S_ISBLK(mode):
        return FileType.BLOCK_DEVICE
    if stat.S_ISCHR(mode):
        return FileType.CHAR_DEVICE
    if stat.S_ISFIFO(mode):
        return FileType.FIFO
    if stat.S_ISSOCK(mode):
        return FileType.SOCKET
    return FileType.UNKNOWN


@dataclass
class FileEntry:
    """A single entry found while walking a directory tree."""

    path: str
    depth: int = 0
    follow_links: bool = False
    _file_type: FileType | None = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.path = os.fspath(self.path)

    @property
    def name(self) -> str:
        """The final component of the path, or the whole path if it has none."""
        stripped = self.path.rstrip("/" + os.sep) or self.path
        base = os.path.basename(stripped)
        if base in ("", ".", ".."):
            return self.path
        return base

    def metadata(self) -> os.stat_result:
        """Stat the entry, following a symlink only when links are followed."""
        if self.follow_links:
            return os.stat(self.path)
        return os.lstat(self.path)

    def file_type(self) -> FileType:
        """The entry's type, determined once and then remembered."""
        if self._file_type is None:
            try:
                self._file_type = file_type_from_mode(self.metadata().st_mode)
            except OSError:
                return FileType.UNKNOWN
        return self._file_type

    def path_is_symlink(self) -> bool:
        """Whether the path itself names a symbolic link."""
        return os.path.islink(self.path)


def walk_entries(root: str | os.PathLike[str]) -> Iterator[FileEntry]:
    """Yield the root and everything beneath it, parents before children.

    Children are visited in name order; symbolic links are not followed.
    Raises ``OSError`` if the root itself cannot be examined.
    """
    root_path = os.fspath(root)
    os.lstat(root_path)
    stack = [FileEntry(root_path, 0)]
    while stack:
        entry = stack.pop()
        yield entry
        if entry.file_type() is not FileType.DIRECTORY:
            continue
        try:
            names = sorted(os.listdir(entry.path))
        except OSError as err:
            print(f"Error reading {entry.path}: {err}", file=sys.stderr)
            continue
        stack.extend(
            FileEntry(os.path.join(entry.path, name), entry.depth + 1)
            for name in reversed(names)
        )


class MatcherIO:
    """Output and per-entry state shared by the matchers of one evaluation."""

    def __init__(
        self,
        output: TextIO | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._output = output if output is not None else sys.stdout
        self._clock = clock if clock is not None else time.time
        self._skip_dir = False
        self._quit = False

    def mark_current_dir_to_be_skipped(self) -> None:
        self._skip_dir = True

    def should_skip_current_dir(self) -> bool:
        return self._skip_dir

    def quit(self) -> None:
        self._quit = True

    def should_quit(self) -> bool:
        return self._quit

    def now(self) -> float:
        """The current time as seconds since the epoch."""
        return self._clock()

    def write(self, text: str) -> None:
        self._output.write(text)

    def flush(self) -> None:
        self._output.flush()


class Matcher(ABC):
    """A predicate over directory entries, possibly with side effects."""

    @abstractmethod
    def matches(self, entry: FileEntry, matcher_io: MatcherIO) -> bool:
        """Return whether the entry satisfies this matcher."""

    def has_side_effects(self) -> bool:
        """Whether the matcher acts (prints, deletes, runs) rather than only tests."""
        return False

    def finished_dir(self, directory: str) -> None:
        """Called once a directory has been fully processed."""

    def finished(self) -> None:
        """Called once the whole walk is over."""


class Comparison(enum.Enum):
    MORE_THAN = "+"
    EQUAL_TO = ""
    LESS_THAN = "-"


@dataclass(frozen=True)
class ComparableValue:
    """A numeric test such as ``+5``, ``5`` or ``-5``."""

    comparison: Comparison
    limit: int

    def matches(self, value: int) -> bool:
        if self.comparison is Comparison.MORE_THAN:
            return value > self.limit
        if self.comparison is Comparison.LESS_THAN:
            return value < self.limit
        return value == self.limit

    def imatches(self, value: int) -> bool:
        """Like ``matches``, but a negative value is less than any limit."""
        if self.comparison is Comparison.MORE_THAN:
            return value >= 0 and value > self.limit
        if self.comparison is Comparison.LESS_THAN:
            return value < 0 or value < self.limit
        return value >= 0 and value == self.limit