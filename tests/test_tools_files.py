import os

import pytest

from gx.exceptions import ToolExecutionError
from gx.tools import ToolRegistry
from gx.tools.files import MAX_CAT_SIZE, cat, ls, pwd, stat


@pytest.fixture
def tree(tmp_path):
    (tmp_path / "b.txt").write_text("hello")
    (tmp_path / "a_dir").mkdir()
    (tmp_path / "a_dir" / "inner.log").write_text("12345678")
    return tmp_path


def test_pwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert pwd() == os.getcwd()


def test_ls_flat(tree):
    assert ls(str(tree)).splitlines() == [
        f"d a_dir ({os.stat(tree / 'a_dir').st_size} bytes)",
        "- b.txt (5 bytes)",
    ]


def test_ls_recursive_uses_relative_paths(tree):
    lines = ls(str(tree), recursive=True).splitlines()
    assert lines[0].startswith("d a_dir (")
    assert lines[1] == f"- {os.path.join('a_dir', 'inner.log')} (8 bytes)"
    assert lines[2] == "- b.txt (5 bytes)"


def test_ls_on_file_returns_name(tree):
    assert ls(str(tree / "b.txt")) == "b.txt"


def test_ls_missing_path(tmp_path):
    with pytest.raises(ToolExecutionError, match="failed to access path"):
        ls(str(tmp_path / "nope"))


def test_stat_file(tree):
    record = stat(str(tree / "b.txt")).splitlines()
    assert record[0] == "Name: b.txt"
    assert record[1] == "Type: file"
    assert record[2] == "Size: 5 bytes"
    assert record[3].startswith("Mode: -")
    assert record[4].startswith("Modified: ")


def test_stat_directory(tree):
    assert "Type: directory" in stat(str(tree / "a_dir"))


@pytest.mark.skipif(not hasattr(os, "symlink") or os.name == "nt", reason="symlinks")
def test_stat_symlink(tree):
    link = tree / "link"
    os.symlink(tree / "b.txt", link)
    assert "Type: symlink" in stat(str(link))


def test_stat_missing(tmp_path):
    with pytest.raises(ToolExecutionError, match="failed to stat file"):
        stat(str(tmp_path / "nope"))


def test_cat_reads_content(tree):
    assert cat(str(tree / "b.txt")) == "hello"


def test_cat_rejects_directory(tree):
    with pytest.raises(ToolExecutionError, match="cannot cat a directory"):
        cat(str(tree / "a_dir"))


def test_cat_size_boundary(tmp_path):
    exact = tmp_path / "exact.bin"
    exact.write_bytes(b"x" * MAX_CAT_SIZE)
    over = tmp_path / "over.bin"
    over.write_bytes(b"x" * (MAX_CAT_SIZE + 1))

    assert len(cat(str(exact))) == 100 * 1024
    with pytest.raises(ToolExecutionError, match="file too large"):
        cat(str(over))


def test_cat_size_guard_through_registry(tmp_path):
    over = tmp_path / "over.bin"
    over.write_bytes(b"x" * (MAX_CAT_SIZE + 1))
    result = ToolRegistry().dispatch("cat", {"path": str(over)})
    assert result.error == f"file too large (max {MAX_CAT_SIZE} bytes, got {MAX_CAT_SIZE + 1} bytes)"


def test_missing_file_error_is_short(tmp_path):
    result = ToolRegistry().dispatch("cat", {"path": str(tmp_path / "missing")})
    assert result.error.startswith("failed to access file: ")
    assert "Traceback" not in result.error


@pytest.mark.parametrize("operation", [ls, stat, cat])
def test_nul_byte_path_is_a_tool_error(operation):
    with pytest.raises(ToolExecutionError, match="embedded null byte"):
        operation("a\x00b")


def test_unencodable_path_is_a_tool_error():
    with pytest.raises(ToolExecutionError, match="failed to access file"):
        cat("bad\ud800name")
