"""fnmatch()-style glob patterns, expressed through POSIX basic regular expressions."""

from __future__ import annotations

import re

# Character classes usable inside a bracket expression, as Python class bodies.
_POSIX_CLASSES = {
    "alnum": "a-zA-Z0-9",
    "alpha": "a-zA-Z",
    "blank": r" \t",
    "cntrl": r"\x00-\x1f\x7f",
    "digit": "0-9",
    "graph": "!-~",
    "lower": "a-z",
    "print": " -~",
    "punct": r"!-/:-@\[-`{-~",
    "space": r" \t\n\r\f\v",
    "upper": "A-Z",
    "xdigit": "0-9A-Fa-f",
}

_BRE_SPECIAL = frozenset(".[\\*^$")


def _escape_in_class(ch: str) -> str:
    return re.escape(ch)


def _parse_bracket(bre: str, start: int) -> tuple[str, int]:
    """Translate the bracket expression at ``bre[start]`` into a Python class.

    Returns the class and the index just past the closing bracket. Raises
    ``ValueError`` if the expression is malformed.
    """
    n = len(bre)
    i = start + 1
    negate = False
    if i < n and bre[i] == "^":
        negate = True
        i += 1

    parts: list[str] = []
    first = True
    while True:
        if i >= n:
            raise ValueError("unterminated bracket expression")
        ch = bre[i]
        if ch == "]" and not first:
            i += 1
            break
        first = False

        if ch == "[" and i + 1 < n and bre[i + 1] in ".=:":
            delim = bre[i + 1]
            close = bre.find(delim + "]", i + 2)
            if close < 0:
                raise ValueError(f"unterminated [{delim} in bracket expression")
            content = bre[i + 2 : close]
            i = close + 2
            if delim == ":":
                try:
                    parts.append(_POSIX_CLASSES[content])
                except KeyError:
                    raise ValueError(f"invalid character class: {content}") from None
                continue
            if len(content) != 1:
                raise ValueError(f"invalid collating element: {content}")
            low = content
        else:
            low = ch
            i += 1

        if i + 1 < n and bre[i] == "-" and bre[i + 1] != "]":
            i += 1
            if bre[i] == "[" and i + 1 < n and bre[i + 1] == ".":
                close = bre.find(".]", i + 2)
                if close < 0:
                    raise ValueError("unterminated [. in bracket expression")
                high = bre[i + 2 : close]
                if len(high) != 1:
                    raise ValueError(f"invalid collating element: {high}")
                i = close + 2
            elif bre[i] == "[" and i + 1 < n and bre[i + 1] in "=:":
                raise ValueError("invalid range end")
            else:
                high = bre[i]
                i += 1
            if ord(high) < ord(low):
                raise ValueError(f"empty range {low}-{high}")
            parts.append(f"{_escape_in_class(low)}-{_escape_in_class(high)}")
        else:
            parts.append(_escape_in_class(low))

    body = "".join(parts)
    return (f"[^{body}]" if negate else f"[{body}]"), i


def _bre_to_python(bre: str) -> str:
    """Translate the subset of BRE produced by :func:`glob_to_regex`."""
    out: list[str] = []
    i = 0
    n = len(bre)
    while i < n:
        ch = bre[i]
        if ch == "\\":
            if i + 1 >= n:
                raise ValueError("trailing backslash")
            out.append(re.escape(bre[i + 1]))
            i += 2
        elif ch == "[":
            cls, i = _parse_bracket(bre, i)
            out.append(cls)
        elif ch == ".":
            out.append(".")
            i += 1
        elif ch == "*":
            out.append("*" if out else re.escape("*"))
            i += 1
        elif ch == "^":
            out.append(r"\A")
            i += 1
        elif ch == "$":
            out.append(r"\Z")
            i += 1
        else:
            out.append(re.escape(ch))
            i += 1
    return "".join(out)


def _compile_bre(bre: str, caseless: bool = False) -> re.Pattern[str]:
    flags = re.DOTALL | (re.IGNORECASE if caseless else 0)
    return re.compile(_bre_to_python(bre), flags)


def _is_valid_bracket(expr: str) -> bool:
    try:
        _, end = _parse_bracket(expr, 0)
    except ValueError:
        return False
    return end == len(expr)


def _push_literal(regex: list[str], ch: str) -> None:
    if ch in _BRE_SPECIAL:
        regex.append("\\")
    regex.append(ch)


def _extract_bracket_expr(pattern: str) -> tuple[str, str] | None:
    """Split a bracket expression off the text following a ``[``.

    Returns the expression in BRE form and the rest of the pattern, or
    ``None`` if no valid bracket expression starts here.
    """
    expr = ["["]
    n = len(pattern)
    i = 0
    if i < n and pattern[i] == "!":
        expr.append("^")
        i += 1
    if i < n and pattern[i] == "]":
        expr.append("]")
        i += 1

    while i < n:
        ch = pattern[i]
        i += 1
        expr.append(ch)
        if ch == "[":
            if i < n:
                delim = pattern[i]
                i += 1
                expr.append(delim)
                if delim in ".=:":
                    rest = pattern[i:]
                    positions = [p for p in (rest.find(delim), rest.find("]")) if p >= 0]
                    if not positions:
                        return None
                    end = min(positions) + 2
                    expr.append(rest[:end])
                    i += end
        elif ch == "]":
            break

    text = "".join(expr)
    if _is_valid_bracket(text):
        return text, pattern[i:]
    return None


def glob_to_regex(pattern: str) -> str:
    """Convert a POSIX glob into a POSIX basic regular expression."""
    regex: list[str] = []
    n = len(pattern)
    i = 0
    while i < n:
        ch = pattern[i]
        i += 1
        if ch == "?":
            regex.append(".")
        elif ch == "*":
            regex.append(".*")
        elif ch == "\\":
            if i >= n:
                # A trailing unescaped backslash never matches.
                return "$."
            _push_literal(regex, pattern[i])
            i += 1
        elif ch == "[":
            extracted = _extract_bracket_expr(pattern[i:])
            if extracted is None:
                _push_literal(regex, ch)
            else:
                expr, rest = extracted
                regex.append(expr)
                i = n - len(rest)
        else:
            _push_literal(regex, ch)
    return "".join(regex)


class Pattern:
    """An fnmatch()-style glob that must match a whole string."""

    def __init__(self, pattern: str, caseless: bool = False) -> None:
        self.pattern = pattern
        self.caseless = caseless
        self._regex = _compile_bre(glob_to_regex(pattern), caseless)

    def __repr__(self) -> str:
        return f"Pattern({self.pattern!r}, caseless={self.caseless})"

    def matches(self, string: str) -> bool:
        """Test whether this pattern matches the whole of ``string``."""
        return self._regex.fullmatch(string) is not None