"""System instruction construction.

:func:`build_instruction` turns a :class:`~gx.environment.GenerationContext`
and the tool catalog into the exact text sent as the system instruction.
Section order is fixed: shell warning, rules, ``CONTEXT``,
``ENVIRONMENT`` and ``AVAILABLE TOOLS``.  The last two are omitted when
they would be empty.
"""

from __future__ import annotations

import os
from typing import List, Mapping, Optional, Sequence, Tuple

from .environment import GenerationContext

REDACTED = "[REDACTED]"

# Case-insensitive name fragments that mark a variable as sensitive
SENSITIVE_PATTERNS = ("KEY", "TOKEN", "SECRET", "PASSWORD", "AUTH", "CREDENTIAL")

POWERSHELL_WARNING = "CRITICAL: For PowerShell, use # for comments. NEVER use REM (REM is only for CMD)."
CMD_WARNING = "For CMD, use REM for comments."

VERBOSE_RULE = "Include helpful comments explaining what each part of the command does."
TERSE_RULE = "Do not include comments unless absolutely necessary for understanding."

TOOLS_HINT = (
    "Use these tools to gather context about the file system and running processes "
    "when needed to provide accurate commands."
)

# (name, max length or None)
GX_VARIABLES: Sequence[Tuple[str, Optional[int]]] = (
    ("GX_MODEL", None),
    ("GX_HISTORY", None),
    ("GX_PROMPT_OUTPUT", None),
)

WINDOWS_VARIABLES: Sequence[Tuple[str, Optional[int]]] = (
    ("USERPROFILE", None),
    ("USERNAME", None),
    ("ComSpec", None),
    ("PSModulePath", 200),
    ("TEMP", None),
)

UNIX_VARIABLES: Sequence[Tuple[str, Optional[int]]] = (
    ("HOME", None),
    ("USER", None),
    ("LOGNAME", None),
    ("SHELL", None),
    ("PWD", None),
)

COMMON_VARIABLES: Sequence[Tuple[str, Optional[int]]] = (
    ("PATH", 300),
    # toolchains
    ("GOPATH", None),
    ("GOROOT", None),
    ("JAVA_HOME", None),
    ("PYTHONPATH", None),
    ("VIRTUAL_ENV", None),
    ("CONDA_DEFAULT_ENV", None),
    ("CARGO_HOME", None),
    ("NVM_DIR", None),
    # cloud CLIs
    ("AWS_PROFILE", None),
    ("AWS_REGION", None),
    ("AWS_DEFAULT_REGION", None),
    ("CLOUDSDK_CORE_PROJECT", None),
    ("GOOGLE_CLOUD_PROJECT", None),
    ("AZURE_SUBSCRIPTION_ID", None),
    ("KUBECONFIG", None),
)


def is_sensitive(name: str) -> bool:
    upper = name.upper()
    return any(pattern in upper for pattern in SENSITIVE_PATTERNS)


def _truncate(value: str, limit: Optional[int]) -> str:
    if limit is None or len(value) <= limit:
        return value
    return value[:limit] + "..."


def curated_environment(os_name: str, environ: Optional[Mapping[str, str]] = None) -> List[Tuple[str, str]]:
    """Return ``(name, value)`` pairs for the ENVIRONMENT section.

    Only set, non-empty variables are included.  Sensitive names are
    redacted regardless of which list they come from.
    """
    env = os.environ if environ is None else environ

    extra_gx = sorted(
        name for name in env
        if name.upper().startswith("GX_") and name not in {n for n, _ in GX_VARIABLES}
    )
    curated: List[Tuple[str, Optional[int]]] = list(GX_VARIABLES)
    curated.extend((name, None) for name in extra_gx)
    curated.extend(WINDOWS_VARIABLES if os_name == "windows" else UNIX_VARIABLES)
    curated.extend(COMMON_VARIABLES)

    pairs: List[Tuple[str, str]] = []
    for name, limit in curated:
        value = env.get(name)
        if not value:
            continue
        if is_sensitive(name):
            pairs.append((name, REDACTED))
        else:
            pairs.append((name, _truncate(value, limit)))
    return pairs


def shell_warning(shell: str) -> str:
    if shell in ("powershell", "pwsh"):
        return POWERSHELL_WARNING
    if shell == "cmd":
        return CMD_WARNING
    return ""


def comment_syntax(shell: str) -> str:
    return "REM" if shell == "cmd" else "#"


def build_instruction(
    context: GenerationContext,
    catalog_summary: str = "",
    environ: Optional[Mapping[str, str]] = None,
) -> str:
    """Build the system instruction for *context*.

    Parameters
    ----------
    context : GenerationContext
        Shell, platform, OS and run flags for this invocation.
    catalog_summary : str
        One line per available tool.  Ignored when ``context.tools_enabled``
        is false.
    environ : Mapping[str, str], optional
        Environment used for the ENVIRONMENT section.  Defaults to
        ``os.environ``.
    """
    warning = shell_warning(context.shell)
    warning_section = f"{warning}\n\n" if warning else ""
    verbosity = VERBOSE_RULE if context.verbose else TERSE_RULE

    instruction = (
        "You are a shell command generator. Your task is to convert natural language "
        "requests into executable shell commands.\n\n"
        f"{warning_section}"
        "CRITICAL RULES:\n"
        "1. Return ONLY the shell command(s) - no explanations, no markdown, no backticks.\n"
        "2. Do not wrap output in code blocks or use markdown formatting.\n"
        f"3. If you need to add comments, use the appropriate syntax for the shell: {comment_syntax(context.shell)}\n"
        f"4. {verbosity}\n"
        "5. The command must be directly executable - copy-paste ready.\n"
        "6. For multi-line commands, use appropriate line continuation for the shell.\n"
        "7. If a task cannot be accomplished with a shell command, explain briefly using shell comments.\n\n"
        "CONTEXT:\n"
        f"- Shell: {context.shell}\n"
        f"- Platform: {context.platform}\n"
        f"- Operating System: {context.os}"
    )

    variables = curated_environment(context.os, environ)
    if variables:
        lines = "\n".join(f"- {name}={value}" for name, value in variables)
        instruction += f"\n\nENVIRONMENT:\n{lines}"

    if context.tools_enabled and catalog_summary:
        instruction += f"\n\nAVAILABLE TOOLS:\n{catalog_summary}\n\n{TOOLS_HINT}"

    return instruction


__all__ = [
    "REDACTED",
    "SENSITIVE_PATTERNS",
    "build_instruction",
    "curated_environment",
    "is_sensitive",
    "shell_warning",
]
