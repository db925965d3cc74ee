import io
import os

from findkit.base import FileEntry, MatcherIO
from findkit.printer import PrintDelimiter, Printer


def _entry():
    return FileEntry(os.path.join(".", "test_data", "simple", "abbbc"), 2)


def test_prints_newline():
    out = io.StringIO()
    matcher = Printer(PrintDelimiter.NEWLINE)
    assert matcher.matches(_entry(), MatcherIO(output=out))
    assert out.getvalue() == os.path.join(".", "test_data", "simple", "abbbc") + "\n"


def test_prints_null():
    out = io.StringIO()
    matcher = Printer(PrintDelimiter.NULL)
    assert matcher.matches(_entry(), MatcherIO(output=out))
    assert out.getvalue() == os.path.join(".", "test_data", "simple", "abbbc") + "\0"


def test_default_delimiter_is_newline():
    out = io.StringIO()
    Printer().matches(FileEntry("a"), MatcherIO(output=out))
    Printer().matches(FileEntry("b"), MatcherIO(output=out))
    assert out.getvalue() == "a\nb\n"


def test_printer_has_side_effects():
    assert Printer().has_side_effects() is True