"""File system tools: ``pwd``, ``ls``, ``stat`` and ``cat``.

Every function returns plain text for the model and raises
:class:`~gx.exceptions.ToolExecutionError` with a short cause when the
underlying OS call fails.
"""

from __future__ import annotations

import os
import stat as _stat
from datetime import datetime
from typing import Iterator, List, Tuple

from ..exceptions import ToolExecutionError

# Largest file ``cat`` will return, in bytes
MAX_CAT_SIZE = 100 * 1024

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def _cause(exc: Exception) -> str:
    # ValueError covers NUL bytes and unencodable characters in the path
    return getattr(exc, "strerror", None) or str(exc)


def _entry_line(is_dir: bool, name: str, size: int) -> str:
    prefix = "d" if is_dir else "-"
    return f"{prefix} {name} ({size} bytes)"


def _sorted_entries(path: str) -> List[os.DirEntry]:
    with os.scandir(path) as it:
        return sorted(it, key=lambda entry: entry.name)


def _walk(root: str, relative: str = "") -> Iterator[Tuple[str, os.DirEntry]]:
    # Depth-first in lexical order; symlinked directories are not followed.
    directory = os.path.join(root, relative) if relative else root
    for entry in _sorted_entries(directory):
        rel_path = os.path.join(relative, entry.name) if relative else entry.name
        yield rel_path, entry
        if entry.is_dir(follow_symlinks=False):
            yield from _walk(root, rel_path)


def pwd() -> str:
    """Return the current working directory."""
    try:
        return os.getcwd()
    except OSError as exc:
        raise ToolExecutionError(f"failed to get working directory: {_cause(exc)}") from exc


def ls(path: str = ".", recursive: bool = False) -> str:
    """List *path* as ``<d|-> <name> (<size> bytes)`` lines.

    A file path yields just its name.  With *recursive*, the whole subtree
    is listed with paths relative to *path*.  Entries that cannot be
    stat'ed are skipped.
    """
    try:
        info = os.stat(path)
    except (OSError, ValueError) as exc:
        raise ToolExecutionError(f"failed to access path: {_cause(exc)}") from exc

    if not _stat.S_ISDIR(info.st_mode):
        return os.path.basename(os.path.normpath(path))

    lines: List[str] = []
    if recursive:
        try:
            for rel_path, entry in _walk(path):
                try:
                    size = entry.stat(follow_symlinks=False).st_size
                except OSError:
                    continue
                lines.append(_entry_line(entry.is_dir(follow_symlinks=False), rel_path, size))
        except OSError as exc:
            raise ToolExecutionError(f"failed to walk directory: {_cause(exc)}") from exc
    else:
        try:
            entries = _sorted_entries(path)
        except OSError as exc:
            raise ToolExecutionError(f"failed to read directory: {_cause(exc)}") from exc
        for entry in entries:
            try:
                size = entry.stat(follow_symlinks=False).st_size
            except OSError:
                continue
            lines.append(_entry_line(entry.is_dir(follow_symlinks=False), entry.name, size))

    return "\n".join(lines)


def stat(path: str) -> str:
    """Return a multi-line record describing *path*."""
    try:
        info = os.lstat(path)
    except (OSError, ValueError) as exc:
        raise ToolExecutionError(f"failed to stat file: {_cause(exc)}") from exc

    if _stat.S_ISLNK(info.st_mode):
        file_type = "symlink"
    elif _stat.S_ISDIR(info.st_mode):
        file_type = "directory"
    else:
        file_type = "file"

    modified = datetime.fromtimestamp(info.st_mtime).strftime(TIMESTAMP_FORMAT)
    return (
        f"Name: {os.path.basename(os.path.normpath(path))}\n"
        f"Type: {file_type}\n"
        f"Size: {info.st_size} bytes\n"
        f"Mode: {_stat.filemode(info.st_mode)}\n"
        f"Modified: {modified}"
    )


def cat(path: str) -> str:
    """Return the text content of *path*, refusing directories and large files."""
    try:
        info = os.stat(path)
    except (OSError, ValueError) as exc:
        raise ToolExecutionError(f"failed to access file: {_cause(exc)}") from exc

    if _stat.S_ISDIR(info.st_mode):
        raise ToolExecutionError("cannot cat a directory")

    if info.st_size > MAX_CAT_SIZE:
        raise ToolExecutionError(
            f"file too large (max {MAX_CAT_SIZE} bytes, got {info.st_size} bytes)"
        )

    try:
        with open(path, "rb") as handle:
            data = handle.read()
    except OSError as exc:
        raise ToolExecutionError(f"failed to read file: {_cause(exc)}") from exc
    return data.decode("utf-8", errors="replace")


__all__ = ["pwd", "ls", "stat", "cat", "MAX_CAT_SIZE"]
