import io
import os

import pytest

from findkit.base import FileEntry, FindError, MatcherIO
from findkit.perm import ComparisonType, PermMatcher, parse_mode, split_comparison_type

EXACT = ComparisonType.EXACT
AT_LEAST = ComparisonType.AT_LEAST
ANY_OF = ComparisonType.ANY_OF


def assert_parse(pattern, comparison_type, mode):
    matcher = PermMatcher(pattern)
    assert matcher.comparison_type is comparison_type
    assert matcher.file_pattern == mode
    assert matcher.dir_pattern == mode


@pytest.mark.parametrize(
    "pattern, kind, mode",
    [
        ("u=rwx", EXACT, 0o700),
        ("-u=rwx", AT_LEAST, 0o700),
        ("/u=rwx", ANY_OF, 0o700),
        ("700", EXACT, 0o700),
        ("-700", AT_LEAST, 0o700),
        ("/700", ANY_OF, 0o700),
    ],
)
def test_parsing_prefix(pattern, kind, mode):
    assert_parse(pattern, kind, mode)


def test_parsing_octal():
    assert_parse("/1", ANY_OF, 0o001)
    assert_parse("/7777", ANY_OF, 0o7777)


@pytest.mark.parametrize(
    "pattern, mode",
    [
        ("/u=r", 0o400),
        ("/u=w", 0o200),
        ("/u=x", 0o100),
        ("/g=r", 0o040),
        ("/g=w", 0o020),
        ("/g=x", 0o010),
        ("/o+r", 0o004),
        ("/o+w", 0o002),
        ("/o+x", 0o001),
        ("/a+r", 0o444),
        ("/a+w", 0o222),
        ("/a+x", 0o111),
    ],
)
def test_parsing_human_readable_individual_bits(pattern, mode):
    assert_parse(pattern, ANY_OF, mode)


def test_parsing_human_readable_multiple_bits():
    assert_parse("/u=rwx", ANY_OF, 0o700)
    assert_parse("/a=rwx", ANY_OF, 0o777)


def test_parsing_human_readable_multiple_categories():
    assert_parse("/u=rwx,g=rx,o+r", ANY_OF, 0o754)
    assert_parse("/u=rwx,g=rx,o+r,a+w", ANY_OF, 0o776)
    assert_parse("/ug=rwx,o+r", ANY_OF, 0o774)


def test_parsing_human_readable_set_id_bits():
    assert_parse("/u=s", ANY_OF, 0o4000)
    assert_parse("/g=s", ANY_OF, 0o2000)
    assert_parse("/ug=s", ANY_OF, 0o6000)
    assert_parse("/o=s", ANY_OF, 0o0000)


def test_parsing_human_readable_sticky_bit():
    assert_parse("/o=t", ANY_OF, 0o1000)


@pytest.mark.parametrize(
    "pattern",
    [
        "urwx,g=rx,o+r",
        "d=rwx,g=rx,o+r",
        "u=dwx,g=rx,o+r",
        "u_rwx,g=rx,o+r",
        "77777777777777",
    ],
)
def test_parsing_fails(pattern):
    with pytest.raises(FindError):
        PermMatcher(pattern)


def test_bad_operator_message():
    with pytest.raises(FindError, match="invalid operator"):
        PermMatcher("foo")


def test_split_comparison_type():
    assert split_comparison_type("-644") == (AT_LEAST, "644")
    assert split_comparison_type("/644") == (ANY_OF, "644")
    assert split_comparison_type("644") == (EXACT, "644")


def test_parse_mode_numeric_and_symbolic_agree():
    assert parse_mode("755", False) == parse_mode("u=rwx,g=rx,o=rx", False) == 0o755


def test_comparison_type_exact():
    c = EXACT
    assert c.mode_bits_match(0, 0)
    assert not c.mode_bits_match(0, 0o444)
    assert c.mode_bits_match(0o444, 0o444)
    assert not c.mode_bits_match(0o444, 0o777)
    assert c.mode_bits_match(0o444, 0o70444)


def test_comparison_type_at_least():
    c = AT_LEAST
    assert c.mode_bits_match(0, 0)
    assert c.mode_bits_match(0, 0o444)
    assert c.mode_bits_match(0o444, 0o777)
    assert not c.mode_bits_match(0o444, 0o700)
    assert c.mode_bits_match(0o444, 0o70444)


def test_comparison_type_any_of():
    c = ANY_OF
    assert c.mode_bits_match(0, 0)
    assert c.mode_bits_match(0, 0o444)
    assert c.mode_bits_match(0o444, 0o777)
    assert c.mode_bits_match(0o777, 0o001)
    assert not c.mode_bits_match(0o010, 0o001)
    assert c.mode_bits_match(0o444, 0o70444)


def test_perm_matches(tmp_path):
    path = tmp_path / "abbbc"
    path.write_text("")
    os.chmod(path, 0o644)
    entry = FileEntry(str(path), 1)

    readable = PermMatcher("-u+r")
    assert readable.matches(entry, MatcherIO(output=io.StringIO()))

    executable = PermMatcher("-u+x")
    assert not executable.matches(entry, MatcherIO(output=io.StringIO()))


def test_perm_missing_file_does_not_match(tmp_path, capsys):
    entry = FileEntry(str(tmp_path / "missing"), 1)
    assert not PermMatcher("/777").matches(entry, MatcherIO(output=io.StringIO()))
    assert "Error getting permissions" in capsys.readouterr().err