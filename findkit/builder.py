"""Turns find's command-line expression into a tree of matchers."""

from __future__ import annotations

import os
import re
import sys
from collections.abc import Sequence
from dataclasses import dataclass

from .base import ComparableValue, Comparison, FindError, Matcher
from .exec import SingleExecMatcher
from .filesystem import AccessMatcher, DeleteMatcher, EmptyMatcher, PruneMatcher
from .logical import (
    AndMatcherBuilder,
    FalseMatcher,
    ListMatcherBuilder,
    NotMatcher,
    TrueMatcher,
)
from .names import LinkNameMatcher, NameMatcher, PathMatcher
from .perm import PermMatcher
from .printer import PrintDelimiter, Printer

_U64_MAX = 2**64 - 1

_COMPARABLE = re.compile(r"([+-]?)([0-9]+)\Z")
_COMPARABLE_WITH_SUFFIX = re.compile(r"([+-]?)([0-9]+)(.*)\Z", re.DOTALL)
_UNSIGNED = re.compile(r"\+?[0-9]+")

# Tests and actions this package does not provide. Those taking an argument
# still have it checked, so that malformed expressions report the usual error.
_UNSUPPORTED_WITH_ARG = frozenset(
    {"-printf", "-regextype", "-regex", "-iregex", "-type", "-newer"}
)
_UNSUPPORTED_WITH_COMPARABLE = frozenset(
    {"-mtime", "-atime", "-ctime", "-inum", "-links"}
)


@dataclass
class Config:
    """Settings gathered from the expression that affect the walk itself."""

    same_file_system: bool = False
    depth_first: bool = False
    min_depth: int = 0
    max_depth: int = sys.maxsize
    sorted_output: bool = False
    help_requested: bool = False
    version_requested: bool = False


def _comparison_for(sign: str) -> Comparison:
    if sign == "+":
        return Comparison.MORE_THAN
    if sign == "-":
        return Comparison.LESS_THAN
    return Comparison.EQUAL_TO


def convert_arg_to_number(option_name: str, value: str) -> int:
    """Parse a non-negative decimal integer argument."""
    if _UNSIGNED.fullmatch(value):
        number = int(value)
        if number <= _U64_MAX:
            return number
    raise FindError(
        f"Expected a positive decimal integer argument to {option_name}, "
        f"but got `{value}'"
    )


def convert_arg_to_comparable_value(option_name: str, value: str) -> ComparableValue:
    """Parse an argument such as ``+5``, ``5`` or ``-5``."""
    groups = _COMPARABLE.search(value)
    if groups is not None:
        limit = int(groups.group(2))
        if limit <= _U64_MAX:
            return ComparableValue(_comparison_for(groups.group(1)), limit)
    raise FindError(
        "Expected a decimal integer (with optional + or - prefix) argument "
        f"to {option_name}, but got `{value}'"
    )


def _convert_arg_to_comparable_value_and_suffix(
    option_name: str, value: str
) -> tuple[ComparableValue, str]:
    groups = _COMPARABLE_WITH_SUFFIX.search(value)
    if groups is not None:
        limit = int(groups.group(2))
        if limit <= _U64_MAX:
            return (
                ComparableValue(_comparison_for(groups.group(1)), limit),
                groups.group(3),
            )
    raise FindError(
        "Expected a decimal integer (with optional + or - prefix) and "
        f"(optional suffix) argument to {option_name}, but got `{value}'"
    )


def _require_argument(args: Sequence[str], i: int) -> None:
    if i >= len(args) - 1:
        raise FindError(f"missing argument to {args[i]}")


def _are_more_expressions(args: Sequence[str], index: int) -> bool:
    return index < len(args) - 1 and args[index + 1] != ")"


def _require_expression(args: Sequence[str], i: int) -> None:
    if not _are_more_expressions(args, i):
        raise FindError(f"expected an expression after {args[i]}")


def _unsupported(flag: str) -> FindError:
    return FindError(f"{flag} is not supported")


def _parse_exec(args: Sequence[str], i: int) -> tuple[int, Matcher]:
    expression = args[i]
    end = i + 1
    while end < len(args) and args[end] != ";":
        if args[end - 1] == "{}" and args[end] == "+":
            raise FindError(
                f"{expression} [args...] + isn't supported yet. "
                f"Only {expression} [args...] ;"
            )
        end += 1
    if end < i + 2 or end == len(args):
        raise FindError(f"missing argument to {expression}")
    matcher = SingleExecMatcher(
        args[i + 1], list(args[i + 2 : end]), expression == "-execdir"
    )
    return end, matcher


def _build_matcher_tree(
    args: Sequence[str],
    config: Config,
    arg_index: int,
    expecting_bracket: bool,
) -> tuple[int, Matcher]:
    """Parse from ``arg_index``; return the index reached and the matcher built."""
    top_level = ListMatcherBuilder()
    invert_next = False
    i = arg_index
    while i < len(args):
        arg = args[i]
        submatcher: Matcher | None = None

        if arg == "-print":
            submatcher = Printer(PrintDelimiter.NEWLINE)
        elif arg == "-print0":
            submatcher = Printer(PrintDelimiter.NULL)
        elif arg == "-true":
            submatcher = TrueMatcher()
        elif arg == "-false":
            submatcher = FalseMatcher()
        elif arg in ("-lname", "-ilname"):
            _require_argument(args, i)
            i += 1
            submatcher = LinkNameMatcher(args[i], arg.startswith("-i"))
        elif arg in ("-name", "-iname"):
            _require_argument(args, i)
            i += 1
            submatcher = NameMatcher(args[i], arg.startswith("-i"))
        elif arg in ("-path", "-ipath", "-wholename", "-iwholename"):
            _require_argument(args, i)
            i += 1
            submatcher = PathMatcher(args[i], arg.startswith("-i"))
        elif arg == "-readable":
            submatcher = AccessMatcher(os.R_OK)
        elif arg == "-writable":
            submatcher = AccessMatcher(os.W_OK)
        elif arg == "-executable":
            submatcher = AccessMatcher(os.X_OK)
        elif arg == "-delete":
            # -delete implies -depth.
            config.depth_first = True
            submatcher = DeleteMatcher()
        elif arg == "-empty":
            submatcher = EmptyMatcher()
        elif arg == "-prune":
            submatcher = PruneMatcher()
        elif arg == "-perm":
            _require_argument(args, i)
            i += 1
            submatcher = PermMatcher(args[i])
        elif arg in ("-exec", "-execdir"):
            i, submatcher = _parse_exec(args, i)
        elif arg in _UNSUPPORTED_WITH_ARG:
            _require_argument(args, i)
            raise _unsupported(arg)
        elif arg in _UNSUPPORTED_WITH_COMPARABLE:
            _require_argument(args, i)
            convert_arg_to_comparable_value(arg, args[i + 1])
            raise _unsupported(arg)
        elif arg == "-size":
            _require_argument(args, i)
            _convert_arg_to_comparable_value_and_suffix(arg, args[i + 1])
            raise _unsupported(arg)
        elif arg == "-quit":
            raise _unsupported(arg)
        elif arg in ("-not", "!"):
            _require_expression(args, i)
            invert_next = not invert_next
        elif arg in ("-and", "-a"):
            _require_expression(args, i)
            top_level.check_new_and_condition()
        elif arg in ("-or", "-o"):
            _require_expression(args, i)
            top_level.new_or_condition(arg)
        elif arg == ",":
            _require_expression(args, i)
            top_level.new_list_condition()
        elif arg == "(":
            i, submatcher = _build_matcher_tree(args, config, i + 1, True)
        elif arg == ")":
            if not expecting_bracket:
                raise FindError("you have too many ')'")
            return i, top_level.build()
        elif arg in ("-d", "-depth"):
            config.depth_first = True
        elif arg in ("-mount", "-xdev"):
            config.same_file_system = True
        elif arg == "-sorted":
            config.sorted_output = True
        elif arg == "-maxdepth":
            _require_argument(args, i)
            config.max_depth = convert_arg_to_number(arg, args[i + 1])
            i += 1
        elif arg == "-mindepth":
            _require_argument(args, i)
            config.min_depth = convert_arg_to_number(arg, args[i + 1])
            i += 1
        elif arg in ("-help", "--help"):
            config.help_requested = True
        elif arg in ("-version", "--version"):
            config.version_requested = True
        else:
            raise FindError(f"Unrecognized flag: '{arg}'")

        if submatcher is not None:
            if invert_next:
                top_level.new_and_condition(NotMatcher(submatcher))
                invert_next = False
            else:
                top_level.new_and_condition(submatcher)
        i += 1

    if expecting_bracket:
        raise FindError(
            "invalid expression; I was expecting to find a ')' somewhere but "
            "did not see one."
        )
    return i, top_level.build()


def build_top_level_matcher(args: Sequence[str], config: Config) -> Matcher:
    """Build the matcher for an expression, printing by default if nothing acts."""
    _, matcher = _build_matcher_tree(list(args), config, 0, False)
    if not matcher.has_side_effects():
        builder = AndMatcherBuilder()
        builder.new_and_condition(matcher)
        builder.new_and_condition(Printer(PrintDelimiter.NEWLINE))
        return builder.build()
    return matcher