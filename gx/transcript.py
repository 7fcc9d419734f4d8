"""Prompt transcript for debugging.

Every invocation records what was sent to and received from the model:
system instruction, history, user prompt and each tool-calling turn.
The transcript is written once, at the end of the invocation, to
``GX_PROMPT_OUTPUT`` (``~/.gxprompt`` by default).  Writing is best
effort: a failure is logged at debug level and otherwise ignored.
"""

from __future__ import annotations

import logging
import os
from typing import List, Optional, Sequence

from .history import HistoryEntry

logger = logging.getLogger(__name__)

SEPARATOR = "\n---\n\n"
DEFAULT_OUTPUT = os.path.join("~", ".gxprompt")


def system_section(instruction: str) -> str:
    return f"SYSTEM INSTRUCTION:\n{instruction}"


def history_section(history: Sequence[HistoryEntry]) -> str:
    text = "HISTORY CONTEXT:\n"
    for entry in history:
        text += f"User: {entry.prompt}\nAssistant: {entry.response}\n"
    return text


def prompt_section(prompt: str) -> str:
    return f"USER PROMPT:\n{prompt}"


def opening_sections(instruction: str, prompt: str, history: Sequence[HistoryEntry]) -> List[str]:
    """Sections shared by the dry-run preview and the live transcript."""
    sections = [system_section(instruction)]
    if history:
        sections.append(history_section(history))
    sections.append(prompt_section(prompt))
    return sections


def resolve_output_path(path: Optional[str] = None) -> str:
    """Expand ``~`` in *path*, defaulting to ``~/.gxprompt``."""
    return os.path.expanduser(path or DEFAULT_OUTPUT)


class Transcript:
    """Append-only list of text blocks, flushed to disk once."""

    def __init__(self, output_path: Optional[str] = None, enabled: bool = True) -> None:
        self.output_path = output_path
        self.enabled = enabled
        self.blocks: List[str] = []

    def append(self, block: str) -> None:
        self.blocks.append(block)

    def extend(self, blocks: Sequence[str]) -> None:
        self.blocks.extend(blocks)

    def render(self) -> str:
        return SEPARATOR.join(self.blocks)

    def flush(self) -> Optional[str]:
        """Write the transcript; return the path written or ``None``."""
        if not self.enabled:
            return None
        try:
            path = resolve_output_path(self.output_path)
            with open(path, "w", encoding="utf-8", errors="replace") as handle:
                handle.write(self.render())
        except OSError as exc:
            logger.debug("could not write prompt transcript: %s", exc)
            return None
        return path


__all__ = [
    "SEPARATOR",
    "Transcript",
    "history_section",
    "opening_sections",
    "prompt_section",
    "resolve_output_path",
    "system_section",
]
