"""The -exec and -execdir actions."""

from __future__ import annotations

import os
import subprocess
import sys
from collections.abc import Sequence
from dataclasses import dataclass

from .base import FileEntry, Matcher, MatcherIO

_PLACEHOLDER = "{}"


@dataclass(frozen=True)
class _Arg:
    """A command argument; if ``parts`` has several items, the path goes between them."""

    parts: tuple[str, ...]

    def render(self, path: str) -> str:
        return path.join(self.parts)


def _file_name(path: str) -> str | None:
    """The final normal component of ``path``, or ``None`` if there is none."""
    trimmed = path
    while True:
        stripped = trimmed.rstrip("/")
        if stripped.endswith("/."):
            trimmed = stripped[:-2]
            continue
        break
    if not stripped:
        return None
    base = os.path.basename(stripped)
    if base in ("", ".", ".."):
        return None
    return base


def _parent(path: str) -> str | None:
    """The parent of ``path``: ``None`` for a root, ``""`` for a bare name."""
    stripped = path.rstrip("/")
    if not stripped:
        return None
    if "/" not in stripped:
        return ""
    head = os.path.dirname(stripped)
    return head.rstrip("/") or "/"


class SingleExecMatcher(Matcher):
    """Runs a command once per entry; matches when the command succeeds.

    Every occurrence of ``{}`` in an argument is replaced by the entry's path.
    With ``exec_in_parent_dir`` the command runs in the entry's directory and
    the path is given as ``./<name>``.
    """

    def __init__(
        self,
        executable: str,
        args: Sequence[str],
        exec_in_parent_dir: bool = False,
    ) -> None:
        self.executable = executable
        self.args = [_Arg(tuple(a.split(_PLACEHOLDER))) for a in args]
        self.exec_in_parent_dir = exec_in_parent_dir

    def matches(self, entry: FileEntry, matcher_io: MatcherIO) -> bool:
        cwd: str | None = None
        if self.exec_in_parent_dir:
            name = _file_name(entry.path)
            path_to_file = os.path.join(".", name if name is not None else entry.path)
            parent = _parent(entry.path)
            if parent is None:
                # Roots have no parent; run them from the root itself.
                cwd = entry.path
            elif parent:
                cwd = parent
        else:
            path_to_file = entry.path

        command = [self.executable, *(arg.render(path_to_file) for arg in self.args)]
        try:
            completed = subprocess.run(command, cwd=cwd, check=False)
        except OSError as err:
            print(f"Failed to run {self.executable}: {err}", file=sys.stderr)
            return False
        return completed.returncode == 0

    def has_side_effects(self) -> bool:
        return True