"""Configuration resolution.

All environment-driven settings are read once, at invocation start, into
an immutable :class:`Settings` snapshot.  A ``.env`` file in the working
directory is loaded first with ``python-dotenv``; variables already set in
the process environment win.

Recognised variables
--------------------
``GX_PROVIDER``
    Hosted model provider (``gemini`` or ``openai``).  Default ``gemini``.
``GX_MODEL``
    Model name.  Defaults to the provider's default model.
``GX_HISTORY``
    Maximum number of history entries kept on disk.  Default 10.
``GX_HISTORY_CONTEXT``
    Number of recent history entries replayed to the model.  Default 3.
``GX_PROMPT_OUTPUT``
    Path of the transcript file.  Default ``~/.gxprompt``.
``GX_MAX_TURNS``
    Maximum number of tool-calling rounds, 0 for no limit.  Default 0.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv

from .models import DEFAULT_PROVIDER

DEFAULT_MAX_HISTORY = 10
DEFAULT_HISTORY_CONTEXT = 3
DEFAULT_PROMPT_OUTPUT = "~/.gxprompt"


@dataclass(frozen=True)
class Settings:
    """Immutable snapshot of the gx configuration."""
    provider: str = DEFAULT_PROVIDER
    model: Optional[str] = None
    max_history: int = DEFAULT_MAX_HISTORY
    history_context: int = DEFAULT_HISTORY_CONTEXT
    prompt_output: Optional[str] = None
    max_turns: int = 0


def _positive_int(value: Optional[str], default: int) -> int:
    if not value:
        return default
    try:
        number = int(value)
    except ValueError:
        return default
    return number if number > 0 else default


def _non_negative_int(value: Optional[str], default: int) -> int:
    if not value:
        return default
    try:
        number = int(value)
    except ValueError:
        return default
    return number if number >= 0 else default


def load_settings(environ: Optional[Mapping[str, str]] = None, use_dotenv: bool = True) -> Settings:
    """Resolve :class:`Settings` from the environment.

    Parameters
    ----------
    environ : Mapping[str, str], optional
        Environment to read.  Defaults to ``os.environ``.
    use_dotenv : bool
        Load a ``.env`` file into ``os.environ`` before reading.  Ignored
        when *environ* is given explicitly.
    """
    if environ is None:
        if use_dotenv:
            load_dotenv(find_dotenv(usecwd=True))
        environ = os.environ

    provider = (environ.get("GX_PROVIDER") or DEFAULT_PROVIDER).strip().lower()
    return Settings(
        provider=provider,
        model=environ.get("GX_MODEL") or None,
        max_history=_positive_int(environ.get("GX_HISTORY"), DEFAULT_MAX_HISTORY),
        history_context=_positive_int(environ.get("GX_HISTORY_CONTEXT"), DEFAULT_HISTORY_CONTEXT),
        prompt_output=environ.get("GX_PROMPT_OUTPUT") or None,
        max_turns=_non_negative_int(environ.get("GX_MAX_TURNS"), 0),
    )


__all__ = ["Settings", "load_settings", "DEFAULT_MAX_HISTORY", "DEFAULT_HISTORY_CONTEXT"]
