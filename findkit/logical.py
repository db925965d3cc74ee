"""Matchers that combine other matchers with boolean logic, and their builders.

The builders follow find's precedence rules: ``-a`` binds tighter than
``-o``, which binds tighter than ``,``. So "-foo -o -bar -baz" means
"-foo -o ( -bar -baz )".
"""

from __future__ import annotations

from collections.abc import Iterable

from .base import FileEntry, FindError, Matcher, MatcherIO


class _CompositeMatcher(Matcher):
    """Shared behaviour of matchers that hold a sequence of sub-matchers."""

    def __init__(self, submatchers: Iterable[Matcher]) -> None:
        self.submatchers = list(submatchers)

    def has_side_effects(self) -> bool:
        return any(m.has_side_effects() for m in self.submatchers)

    def finished_dir(self, directory: str) -> None:
        for m in self.submatchers:
            m.finished_dir(directory)

    def finished(self) -> None:
        for m in self.submatchers:
            m.finished()


class AndMatcher(_CompositeMatcher):
    """Matches when every sub-matcher matches, stopping at the first failure."""

    def matches(self, entry: FileEntry, matcher_io: MatcherIO) -> bool:
        for matcher in self.submatchers:
            if not matcher.matches(entry, matcher_io):
                return False
            if matcher_io.should_quit():
                break
        return True

    def has_side_effects(self) -> bool:
        return super().has_side_effects()

    def finished_dir(self, directory: str) -> None:
        super().finished_dir(directory)

    def finished(self) -> None:
        super().finished()


class OrMatcher(_CompositeMatcher):
    """Matches when any sub-matcher matches, stopping at the first success."""

    def matches(self, entry: FileEntry, matcher_io: MatcherIO) -> bool:
        for matcher in self.submatchers:
            if matcher.matches(entry, matcher_io):
                return True
            if matcher_io.should_quit():
                break
        return False

    def has_side_effects(self) -> bool:
        return super().has_side_effects()

    def finished_dir(self, directory: str) -> None:
        super().finished_dir(directory)

    def finished(self) -> None:
        super().finished()


class ListMatcher(_CompositeMatcher):
    """Runs every sub-matcher and returns the result of the last one."""

    def matches(self, entry: FileEntry, matcher_io: MatcherIO) -> bool:
        result = False
        for matcher in self.submatchers:
            result = matcher.matches(entry, matcher_io)
            if matcher_io.should_quit():
                break
        return result

    def has_side_effects(self) -> bool:
        return super().has_side_effects()

    def finished_dir(self, directory: str) -> None:
        super().finished_dir(directory)

    def finished(self) -> None:
        super().finished()


class TrueMatcher(Matcher):
    """Always matches."""

    def matches(self, entry: FileEntry, matcher_io: MatcherIO) -> bool:
        return True


class FalseMatcher(Matcher):
    """Never matches."""

    def matches(self, entry: FileEntry, matcher_io: MatcherIO) -> bool:
        return False


class NotMatcher(Matcher):
    """Inverts the result of another matcher."""

    def __init__(self, submatcher: Matcher) -> None:
        self.submatcher = submatcher

    def matches(self, entry: FileEntry, matcher_io: MatcherIO) -> bool:
        return not self.submatcher.matches(entry, matcher_io)

    def has_side_effects(self) -> bool:
        return self.submatcher.has_side_effects()

    def finished_dir(self, directory: str) -> None:
        self.submatcher.finished_dir(directory)

    def finished(self) -> None:
        self.submatcher.finished()


class AndMatcherBuilder:
    """Collects conditions joined by an implicit or explicit ``-a``."""

    def __init__(self) -> None:
        self.submatchers: list[Matcher] = []

    def new_and_condition(self, matcher: Matcher) -> None:
        self.submatchers.append(matcher)

    def build(self) -> Matcher:
        if len(self.submatchers) == 1:
            return self.submatchers[0]
        return AndMatcher(self.submatchers)


class OrMatcherBuilder:
    """Collects ``-a`` groups joined by ``-o``."""

    def __init__(self) -> None:
        self.submatchers: list[AndMatcherBuilder] = [AndMatcherBuilder()]

    def new_and_condition(self, matcher: Matcher) -> None:
        self.submatchers[-1].new_and_condition(matcher)

    def new_or_condition(self, arg: str) -> None:
        if not self.submatchers[-1].submatchers:
            raise FindError(
                "invalid expression; you have used a binary operator "
                f"'{arg}' with nothing before it."
            )
        self.submatchers.append(AndMatcherBuilder())

    def build(self) -> Matcher:
        if len(self.submatchers) == 1:
            return self.submatchers[0].build()
        return OrMatcher(builder.build() for builder in self.submatchers)


class ListMatcherBuilder:
    """Collects ``-o`` groups joined by ``,``."""

    def __init__(self) -> None:
        self.submatchers: list[OrMatcherBuilder] = [OrMatcherBuilder()]

    def _current_and_is_empty(self) -> bool:
        return not self.submatchers[-1].submatchers[-1].submatchers

    def new_and_condition(self, matcher: Matcher) -> None:
        self.submatchers[-1].new_and_condition(matcher)

    def new_or_condition(self, arg: str) -> None:
        self.submatchers[-1].new_or_condition(arg)

    def check_new_and_condition(self) -> None:
        if self._current_and_is_empty():
            raise FindError(
                "invalid expression; you have used a binary operator '-a' "
                "with nothing before it."
            )

    def new_list_condition(self) -> None:
        if self._current_and_is_empty():
            raise FindError(
                "invalid expression; you have used a binary operator ',' "
                "with nothing before it."
            )
        self.submatchers.append(OrMatcherBuilder())

    def build(self) -> Matcher:
        if len(self.submatchers) == 1:
            return self.submatchers[0].build()
        return ListMatcher(builder.build() for builder in self.submatchers)