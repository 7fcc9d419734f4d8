"""Process tools: ``ps`` and ``uptime``."""

from __future__ import annotations

import subprocess
from datetime import datetime
from typing import List, Optional

from ..environment import current_os
from ..exceptions import ToolExecutionError
from ..utils.overflow import truncate_lines

# Longest process listing returned to the model, in characters
MAX_PS_OUTPUT = 8000

_WINDOWS_PS = [
    "powershell",
    "-Command",
    "Get-Process | Select-Object Id, ProcessName, CPU, WorkingSet64 "
    "| Format-Table -AutoSize | Out-String -Width 200",
]

_WINDOWS_UPTIME = [
    "powershell",
    "-Command",
    "$os = Get-CimInstance Win32_OperatingSystem; "
    "$uptime = (Get-Date) - $os.LastBootUpTime; "
    "\"System up for $($uptime.Days) days, $($uptime.Hours) hours, $($uptime.Minutes) minutes\"",
]


def _run(command: List[str]) -> str:
    completed = subprocess.run(command, capture_output=True, text=True, check=True)
    return completed.stdout


def ps(os_name: Optional[str] = None) -> str:
    """Return the running processes, truncated at a line boundary."""
    os_name = os_name or current_os()
    command = _WINDOWS_PS if os_name == "windows" else ["ps", "aux"]
    try:
        output = _run(command)
    except subprocess.CalledProcessError as exc:
        raise ToolExecutionError(f"failed to execute ps: exit status {exc.returncode}") from exc
    except OSError as exc:
        raise ToolExecutionError(f"failed to execute ps: {exc.strerror or exc}") from exc
    return truncate_lines(output, MAX_PS_OUTPUT).strip()


def uptime(os_name: Optional[str] = None) -> str:
    """Return system uptime, or the current time when ``uptime`` is unavailable."""
    os_name = os_name or current_os()
    command = _WINDOWS_UPTIME if os_name == "windows" else ["uptime"]
    try:
        output = _run(command)
    except (OSError, subprocess.CalledProcessError):
        now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        return f"Current time: {now} (uptime command unavailable)"
    return output.strip()


__all__ = ["ps", "uptime", "MAX_PS_OUTPUT"]
