import io
import os

import pytest

from findkit.base import FileEntry, MatcherIO
from findkit.filesystem import AccessMatcher, DeleteMatcher, EmptyMatcher, PruneMatcher


def _io():
    return MatcherIO(output=io.StringIO())


@pytest.fixture
def simple(tmp_path):
    root = tmp_path / "simple"
    root.mkdir()
    abbbc = root / "abbbc"
    abbbc.write_text("")
    os.chmod(abbbc, 0o644)
    (root / "subdir").mkdir()
    sized = tmp_path / "512bytes"
    sized.write_bytes(b"x" * 512)
    return tmp_path


def test_access_matcher(simple):
    entry = FileEntry(str(simple / "simple" / "abbbc"), 1)
    assert AccessMatcher(os.R_OK).matches(entry, _io()), "file should be readable"
    assert AccessMatcher(os.W_OK).matches(entry, _io()), "file should be writable"
    assert not AccessMatcher(os.X_OK).matches(entry, _io()), "file should not be executable"


def test_access_matcher_missing_file(tmp_path):
    entry = FileEntry(str(tmp_path / "missing"))
    assert not AccessMatcher(os.R_OK).matches(entry, _io())


def test_access_matcher_rejects_bad_mode():
    with pytest.raises(ValueError):
        AccessMatcher(0o7777)


def test_delete_matcher(tmp_path):
    matcher = DeleteMatcher()
    (tmp_path / "test").write_text("")
    (tmp_path / "test_dir").mkdir()

    assert matcher.matches(FileEntry(str(tmp_path / "test"), 1), _io())
    assert not (tmp_path / "test").exists()

    assert matcher.matches(FileEntry(str(tmp_path / "test_dir"), 1), _io())
    assert not (tmp_path / "test_dir").exists()


def test_delete_matcher_nonempty_dir_fails(tmp_path, capsys):
    target = tmp_path / "full"
    target.mkdir()
    (target / "child").write_text("x")
    assert not DeleteMatcher().matches(FileEntry(str(target), 1), _io())
    assert target.exists()
    assert "Failed to delete" in capsys.readouterr().err


def test_delete_matcher_dot_is_a_match_without_deleting():
    assert DeleteMatcher().matches(FileEntry("."), _io())
    assert os.path.isdir(".")


def test_delete_matcher_has_side_effects():
    assert DeleteMatcher().has_side_effects() is True


def test_empty_files(simple):
    matcher = EmptyMatcher()
    assert matcher.matches(FileEntry(str(simple / "simple" / "abbbc"), 1), _io())
    assert not matcher.matches(FileEntry(str(simple / "512bytes"), 1), _io())


def test_empty_directories(tmp_path):
    matcher = EmptyMatcher()
    subdir = tmp_path / "subdir"
    subdir.mkdir()
    assert matcher.matches(FileEntry(str(subdir), 1), _io())

    (subdir / "a").write_text("")
    assert not matcher.matches(FileEntry(str(subdir), 1), _io())


def test_empty_missing_entry_is_no_match(tmp_path):
    assert not EmptyMatcher().matches(FileEntry(str(tmp_path / "gone")), _io())


def test_prune_skips_directory(simple):
    matcher_io = _io()
    assert not matcher_io.should_skip_current_dir()
    assert PruneMatcher().matches(FileEntry(str(simple / "simple"), 1), matcher_io)
    assert matcher_io.should_skip_current_dir()


def test_prune_only_skips_directories(simple):
    matcher_io = _io()
    assert PruneMatcher().matches(FileEntry(str(simple / "simple" / "abbbc"), 2), matcher_io)
    assert not matcher_io.should_skip_current_dir()