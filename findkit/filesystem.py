"""Matchers that test or act on the file system: access, -delete, -empty, -prune."""

from __future__ import annotations

import os
import sys

from .base import FileEntry, FileType, Matcher, MatcherIO


class AccessMatcher(Matcher):
    """Implements -readable, -writable and -executable.

    ``mode`` is one of ``os.R_OK``, ``os.W_OK`` or ``os.X_OK``.
    """

    def __init__(self, mode: int) -> None:
        if mode not in (os.R_OK, os.W_OK, os.X_OK):
            raise ValueError(f"unsupported access mode: {mode!r}")
        self.mode = mode

    def matches(self, entry: FileEntry, matcher_io: MatcherIO) -> bool:
        return os.access(entry.path, self.mode)


class DeleteMatcher(Matcher):
    """Deletes the entry: files are unlinked, directories removed if empty."""

    def matches(self, entry: FileEntry, matcher_io: MatcherIO) -> bool:
        # Traditionally "." is never removed but still counts as a match.
        if entry.path == ".":
            return True
        try:
            if entry.file_type() is FileType.DIRECTORY:
                os.rmdir(entry.path)
            else:
                os.remove(entry.path)
        except OSError as err:
            print(f"Failed to delete {entry.path}: {err}", file=sys.stderr)
            return False
        return True

    def has_side_effects(self) -> bool:
        return True


class EmptyMatcher(Matcher):
    """Matches empty regular files and empty directories."""

    def matches(self, entry: FileEntry, matcher_io: MatcherIO) -> bool:
        kind = entry.file_type()
        if kind is FileType.FILE:
            try:
                return entry.metadata().st_size == 0
            except OSError as err:
                print(f"Error getting size for {entry.path}: {err}", file=sys.stderr)
                return False
        if kind is FileType.DIRECTORY:
            try:
                with os.scandir(entry.path) as children:
                    return next(children, None) is None
            except OSError as err:
                print(f"Error getting contents of {entry.path}: {err}", file=sys.stderr)
                return False
        return False


class PruneMatcher(Matcher):
    """Always matches; stops descent into the entry if it is a directory."""

    def matches(self, entry: FileEntry, matcher_io: MatcherIO) -> bool:
        if entry.file_type() is FileType.DIRECTORY:
            matcher_io.mark_current_dir_to_be_skipped()
        return True