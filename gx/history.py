"""Prompt history and the staged command.

History lives in ``~/.gxhistory`` as a JSON array of
``{"prompt": ..., "response": ...}`` objects, newest last.  The most
recently generated command is staged in ``~/.gx`` for ``gx -x``.  A
missing or corrupted history file reads as empty.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from .config import DEFAULT_MAX_HISTORY
from .exceptions import HistoryError

HISTORY_FILE = ".gxhistory"
STAGING_FILE = ".gx"


class HistoryEntry(BaseModel):
    """A single completed prompt/response exchange."""
    model_config = ConfigDict(frozen=True)

    prompt: str
    response: str


_ENTRIES = TypeAdapter(List[HistoryEntry])


def _write_private(path: Path, data: str) -> None:
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8") as handle:
        handle.write(data)


class HistoryManager:
    """Reads and writes the history and staging files."""

    def __init__(self, home: Optional[Path] = None, max_history: int = DEFAULT_MAX_HISTORY) -> None:
        if home is None:
            try:
                home = Path.home()
            except RuntimeError as exc:
                raise HistoryError(f"failed to get home directory: {exc}") from exc
        self.history_path = Path(home) / HISTORY_FILE
        self.staging_path = Path(home) / STAGING_FILE
        self.max_history = max_history if max_history > 0 else DEFAULT_MAX_HISTORY

    def load(self) -> List[HistoryEntry]:
        """Return all stored entries, oldest first."""
        try:
            data = self.history_path.read_bytes()
        except FileNotFoundError:
            return []
        except OSError as exc:
            raise HistoryError(f"failed to read history: {exc}") from exc
        try:
            return _ENTRIES.validate_json(data)
        except (ValidationError, UnicodeDecodeError):
            return []

    def save(self, entries: Sequence[HistoryEntry]) -> None:
        entries = list(entries)[-self.max_history:]
        data = _ENTRIES.dump_json(entries, indent=2).decode("utf-8")
        try:
            _write_private(self.history_path, data)
        except OSError as exc:
            raise HistoryError(f"failed to write history: {exc}") from exc

    def append(self, prompt: str, response: str) -> None:
        try:
            entries = self.load()
        except HistoryError:
            entries = []
        entries.append(HistoryEntry(prompt=prompt, response=response))
        self.save(entries)

    def recent(self, n: int) -> List[HistoryEntry]:
        """Return the last *n* entries, oldest first."""
        entries = self.load()
        if n <= 0:
            return []
        return entries[-n:]

    def stage(self, command: str) -> None:
        try:
            _write_private(self.staging_path, command)
        except OSError as exc:
            raise HistoryError(f"failed to stage command: {exc}") from exc

    def staged_command(self) -> str:
        try:
            return self.staging_path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise HistoryError("no staged command found (run gx with a prompt first)") from exc
        except OSError as exc:
            raise HistoryError(f"failed to read staged command: {exc}") from exc

    def clear(self) -> None:
        """Remove both the history and the staging file."""
        for path, label in ((self.history_path, "history"), (self.staging_path, "staging file")):
            try:
                path.unlink()
            except FileNotFoundError:
                continue
            except OSError as exc:
                raise HistoryError(f"failed to remove {label}: {exc}") from exc


__all__ = ["HistoryEntry", "HistoryManager", "HISTORY_FILE", "STAGING_FILE"]
