"""Run a generated command in the operator's shell.

The command is passed verbatim; there is no sandboxing.  stdin, stdout
and stderr are inherited so interactive commands behave normally.
"""

from __future__ import annotations

import os
import subprocess
from typing import List, Mapping, Optional

from .environment import current_os


def shell_argv(command: str, os_name: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> List[str]:
    """Return the argv that runs *command* through the appropriate shell."""
    env = os.environ if environ is None else environ
    if (os_name or current_os()) == "windows":
        if env.get("PSModulePath"):
            return ["powershell", "-Command", command]
        return ["cmd", "/C", command]
    return [env.get("SHELL") or "/bin/sh", "-c", command]


def execute_command(command: str) -> int:
    """Execute *command* and return the child's exit code.

    Raises ``OSError`` if the shell itself cannot be started.
    """
    completed = subprocess.run(shell_argv(command))
    return completed.returncode


__all__ = ["execute_command", "shell_argv"]
