"""Matchers that compare names, paths and link targets against glob patterns."""

from __future__ import annotations

import errno
import os
import sys

from .base import FileEntry, Matcher, MatcherIO
from .glob import Pattern


def _read_link_target(entry: FileEntry) -> str | None:
    """Return the target of a symbolic link, or ``None`` if there is none."""
    try:
        return os.readlink(entry.path)
    except OSError as err:
        # Not being a symlink is expected and is not worth reporting.
        if err.errno != errno.EINVAL:
            print(f"Error reading target of {entry.path}: {err}", file=sys.stderr)
        return None


class NameMatcher(Matcher):
    """Implements -name and -iname: matches the entry's file name."""

    def __init__(self, pattern_string: str, caseless: bool = False) -> None:
        self.pattern = Pattern(pattern_string, caseless)

    def matches(self, entry: FileEntry, matcher_io: MatcherIO) -> bool:
        return self.pattern.matches(entry.name)


class PathMatcher(Matcher):
    """Implements -path, -ipath, -wholename and -iwholename: matches the whole path."""

    def __init__(self, pattern_string: str, caseless: bool = False) -> None:
        self.pattern = Pattern(pattern_string, caseless)

    def matches(self, entry: FileEntry, matcher_io: MatcherIO) -> bool:
        return self.pattern.matches(entry.path)


class LinkNameMatcher(Matcher):
    """Implements -lname and -ilname: matches the target of a symbolic link."""

    def __init__(self, pattern_string: str, caseless: bool = False) -> None:
        self.pattern = Pattern(pattern_string, caseless)

    def matches(self, entry: FileEntry, matcher_io: MatcherIO) -> bool:
        target = _read_link_target(entry)
        if target is None:
            return False
        return self.pattern.matches(target)