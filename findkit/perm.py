"""The -perm test: compares permission bits against a numeric or symbolic mode."""

from __future__ import annotations

import enum
import os
import re
import stat
import sys

from .base import FileEntry, FindError, Matcher, MatcherIO

_SETID_BITS = 0o4000 | 0o2000
_OCTAL = re.compile(r"\+?[0-7]+")


class ComparisonType(enum.Enum):
    """How a mode pattern is compared with a file's mode."""

    EXACT = "exact"
    """Mode bits have to match exactly."""
    AT_LEAST = "at_least"
    """All specified bits must be set; others may be too."""
    ANY_OF = "any_of"
    """At least one specified bit must be set; an empty pattern matches anything."""

    def mode_bits_match(self, pattern: int, value: int) -> bool:
        if self is ComparisonType.EXACT:
            return (value & 0o7777) == pattern
        if self is ComparisonType.AT_LEAST:
            return (value & pattern) == pattern
        return pattern == 0 or (value & pattern) > 0


def split_comparison_type(pattern: str) -> tuple[ComparisonType, str]:
    """Split a leading ``-`` or ``/`` off a pattern into its comparison type."""
    if pattern.startswith("-"):
        return ComparisonType.AT_LEAST, pattern[1:]
    if pattern.startswith("/"):
        return ComparisonType.ANY_OF, pattern[1:]
    return ComparisonType.EXACT, pattern


def _parse_op(mode: str) -> str:
    if not mode:
        raise FindError("unexpected end of mode")
    ch = mode[0]
    if ch not in "+-=":
        raise FindError(f"invalid operator (expected +, -, or =, but found {ch})")
    return ch


def _parse_numeric(fperm: int, mode: str, considering_dir: bool) -> int:
    op = mode[0] if mode and mode[0] in "+-=" else None
    if op is not None:
        mode = mode[1:]
    mode = mode.strip()
    if not mode:
        change = 0
    elif _OCTAL.fullmatch(mode):
        change = int(mode, 8)
    else:
        raise FindError(f"invalid digit found in mode: {mode}")
    if change > 0o7777:
        raise FindError(f"mode is too large ({oct(change)[2:]} > 7777)")
    if op == "+":
        return fperm | change
    if op == "-":
        return fperm & ~change & 0xFFFFFFFF
    if op is None and considering_dir and len(mode) < 5:
        return change | (fperm & _SETID_BITS)
    return change


def _parse_levels(mode: str) -> tuple[int, int]:
    masks = {"u": 0o4700, "g": 0o2070, "o": 0o1007, "a": 0o7777}
    mask = 0
    pos = 0
    for ch in mode:
        if ch not in masks:
            break
        mask |= masks[ch]
        pos += 1
    if pos == 0:
        mask = 0o7777
    return mask, pos


def _parse_change(mode: str, fperm: int, considering_dir: bool) -> tuple[int, int]:
    srwx = 0
    pos = 0
    for ch in mode:
        if ch == "r":
            srwx |= 0o444
        elif ch == "w":
            srwx |= 0o222
        elif ch == "x":
            srwx |= 0o111
        elif ch == "X":
            if considering_dir or fperm & 0o111:
                srwx |= 0o111
        elif ch == "s":
            srwx |= _SETID_BITS
        elif ch == "t":
            srwx |= 0o1000
        elif ch in "ugo":
            # Copying another class's bits takes exactly one letter.
            if ch == "u":
                srwx = (fperm & 0o700) | ((fperm >> 3) & 0o070) | ((fperm >> 6) & 0o007)
            elif ch == "g":
                srwx = ((fperm << 3) & 0o700) | (fperm & 0o070) | ((fperm >> 3) & 0o007)
            else:
                srwx = ((fperm << 6) & 0o700) | ((fperm << 3) & 0o070) | (fperm & 0o007)
            pos = 1
            break
        else:
            break
        pos += 1
    if pos == 0:
        srwx = 0
    return srwx, pos


def _parse_symbolic(fperm: int, mode: str, umask: int, considering_dir: bool) -> int:
    mask, pos = _parse_levels(mode)
    if pos == len(mode):
        raise FindError(f"invalid mode ({mode})")
    respect_umask = pos == 0
    mode = mode[pos:]
    while mode:
        op = _parse_op(mode)
        mode = mode[1:]
        srwx, pos = _parse_change(mode, fperm, considering_dir)
        if respect_umask:
            srwx &= ~umask
        mode = mode[pos:]
        if op == "+":
            fperm |= srwx & mask
        elif op == "-":
            fperm &= ~(srwx & mask)
        else:
            if considering_dir:
                srwx |= fperm & _SETID_BITS
            fperm = (fperm & ~mask) | (srwx & mask)
    return fperm


def parse_mode(pattern: str, for_dir: bool) -> int:
    """Parse an octal or comma-separated symbolic mode into permission bits."""
    if any(ch.isascii() and ch.isdigit() for ch in pattern):
        return _parse_numeric(0, pattern, for_dir)
    mode = 0
    for chunk in pattern.split(","):
        mode = _parse_symbolic(mode, chunk, 0, for_dir)
    return mode


class PermMatcher(Matcher):
    """Implements -perm MODE, -perm -MODE and -perm /MODE."""

    def __init__(self, pattern: str) -> None:
        if os.name != "posix":
            raise FindError("Permission matching is not available on this platform")
        self.comparison_type, mode = split_comparison_type(pattern)
        self.file_pattern = parse_mode(mode, False)
        self.dir_pattern = parse_mode(mode, False)

    def matches(self, entry: FileEntry, matcher_io: MatcherIO) -> bool:
        try:
            meta = entry.metadata()
        except OSError as err:
            print(f"Error getting permissions for {entry.path}: {err}", file=sys.stderr)
            return False
        pattern = self.dir_pattern if stat.S_ISDIR(meta.st_mode) else self.file_pattern
        return self.comparison_type.mode_bits_match(pattern, meta.st_mode)