"""Shell and platform detection.

The detected shell drives the comment syntax and line continuation rules
in the system instruction, so the precedence in :func:`detect_shell`
matters: a PowerShell session on Windows still carries ``ComSpec``
pointing at ``cmd.exe``, hence ``PSModulePath`` is checked first.
"""

from __future__ import annotations

import logging
import os
import platform as _platform
import subprocess
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

# platform.machine() values mapped to the short architecture names used in
# the instruction text
_ARCH_ALIASES = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "i386": "386",
    "i686": "386",
    "x86": "386",
    "armv7l": "arm",
    "armv6l": "arm",
}


@dataclass(frozen=True)
class GenerationContext:
    """Per-invocation facts shared by the instruction builder and the engine."""
    shell: str
    platform: str
    os: str
    verbose: bool = False
    tools_enabled: bool = True


def current_os() -> str:
    """Return the normalised OS identifier (``linux``, ``darwin``, ``windows``...)."""
    return _platform.system().lower() or "unknown"


def current_arch() -> str:
    machine = _platform.machine().lower()
    return _ARCH_ALIASES.get(machine, machine or "unknown")


def is_windows(os_name: Optional[str] = None) -> bool:
    return (os_name or current_os()) == "windows"


def detect_shell(environ: Optional[Mapping[str, str]] = None, os_name: Optional[str] = None) -> str:
    """Return the name of the shell the operator is running.

    Precedence: ``SHELL`` basename, then ``PSModulePath`` (PowerShell),
    then a ``ComSpec`` pointing at ``cmd.exe``, then the OS default.
    """
    env = os.environ if environ is None else environ

    shell = env.get("SHELL")
    if shell:
        return shell.replace("\\", "/").rstrip("/").split("/")[-1]

    if env.get("PSModulePath"):
        return "powershell"

    comspec = env.get("ComSpec") or env.get("COMSPEC")
    if comspec and "cmd.exe" in comspec.lower():
        return "cmd"

    if is_windows(os_name):
        return "powershell"
    return "bash"


def _kernel_release() -> Optional[str]:
    try:
        completed = subprocess.run(["uname", "-r"], capture_output=True, text=True, check=True)
    except (OSError, subprocess.CalledProcessError) as exc:
        logger.debug("uname probe failed: %s", exc)
        return None
    return completed.stdout


def detect_platform(
    os_name: Optional[str] = None,
    arch: Optional[str] = None,
    kernel_release: Optional[str] = None,
) -> str:
    """Return ``"<os>/<arch>"``, or ``"wsl2/<arch>"`` inside WSL.

    *kernel_release* overrides the ``uname -r`` probe; it is only consulted
    on linux.
    """
    os_name = os_name or current_os()
    arch = arch or current_arch()

    if os_name == "linux":
        release = kernel_release if kernel_release is not None else _kernel_release()
        if release:
            lowered = release.lower()
            if "microsoft" in lowered or "wsl" in lowered:
                return f"wsl2/{arch}"

    return f"{os_name}/{arch}"


def build_context(
    verbose: bool = False,
    tools_enabled: bool = True,
    environ: Optional[Mapping[str, str]] = None,
) -> GenerationContext:
    """Detect shell and platform once and freeze them with the run flags."""
    os_name = current_os()
    return GenerationContext(
        shell=detect_shell(environ, os_name),
        platform=detect_platform(os_name),
        os=os_name,
        verbose=verbose,
        tools_enabled=tools_enabled,
    )


__all__ = [
    "GenerationContext",
    "build_context",
    "current_os",
    "detect_platform",
    "detect_shell",
    "is_windows",
]
