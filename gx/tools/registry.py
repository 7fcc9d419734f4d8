"""Tool catalog and dispatch.

The model selects tools by name at runtime.  :class:`ToolRegistry` holds
a closed table mapping each name to a handler that coerces the model's
untyped arguments and calls the matching operation in
:mod:`gx.tools.files` or :mod:`gx.tools.process`.

Dispatch never raises for tool-level problems.  Missing arguments,
unknown names and OS failures all come back as a :class:`ToolResult`
carrying an error, which the engine forwards to the model.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import ToolArgumentError, ToolError, UnknownToolError
from . import files, process

DISABLED_ERROR = "tools are disabled"


class ToolParameter(BaseModel):
    """One named parameter of a tool."""
    model_config = ConfigDict(frozen=True)

    name: str
    type: Literal["string", "boolean", "number", "object"]
    description: str = ""
    required: bool = False


class ToolDefinition(BaseModel):
    """Name, description and parameter schema of a tool."""
    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    parameters: List[ToolParameter] = Field(default_factory=list)

    def to_function(self) -> Dict[str, Any]:
        """Render the definition as an OpenAI-style function tool."""
        properties = {
            param.name: {"type": param.type, "description": param.description}
            for param in self.parameters
        }
        schema: Dict[str, Any] = {"type": "object", "properties": properties}
        required = [param.name for param in self.parameters if param.required]
        if required:
            schema["required"] = required
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": schema,
            },
        }


@dataclass(frozen=True)
class ToolResult:
    """Outcome of one tool call: either ``result`` or ``error`` is set."""
    result: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def text(self) -> str:
        return self.result if self.ok else self.error  # type: ignore[return-value]

    def to_payload(self) -> Dict[str, str]:
        if self.ok:
            return {"result": self.result or ""}
        return {"error": self.error or ""}

    def to_json(self) -> str:
        return json.dumps(self.to_payload(), ensure_ascii=False)

    @classmethod
    def success(cls, text: str) -> "ToolResult":
        return cls(result=text)

    @classmethod
    def failure(cls, message: str) -> "ToolResult":
        return cls(error=message)


TOOL_DEFINITIONS: List[ToolDefinition] = [
    ToolDefinition(name="pwd", description="Get the current working directory"),
    ToolDefinition(
        name="ls",
        description="List files and directories in a path",
        parameters=[
            ToolParameter(
                name="path",
                type="string",
                description="The directory path to list (defaults to current directory)",
            ),
            ToolParameter(
                name="recursive",
                type="boolean",
                description="If true, list recursively (like ls -R)",
            ),
        ],
    ),
    ToolDefinition(
        name="stat",
        description="Get detailed file or directory information",
        parameters=[
            ToolParameter(
                name="path",
                type="string",
                description="The file or directory path to stat",
                required=True,
            ),
        ],
    ),
    ToolDefinition(
        name="cat",
        description="Read and return the contents of a file",
        parameters=[
            ToolParameter(name="path", type="string", description="The file path to read", required=True),
        ],
    ),
    ToolDefinition(name="ps", description="List running processes with details"),
    ToolDefinition(name="uptime", description="Get system uptime information"),
]


def _optional_str(args: Mapping[str, Any], key: str, default: str) -> str:
    value = args.get(key)
    if isinstance(value, str) and value:
        return value
    return default


def _optional_bool(args: Mapping[str, Any], key: str, default: bool) -> bool:
    value = args.get(key)
    if isinstance(value, bool):
        return value
    return default


def _required_str(tool: str, args: Mapping[str, Any], key: str) -> str:
    value = args.get(key)
    if not isinstance(value, str) or not value:
        raise ToolArgumentError(f"{tool} requires a {key} argument")
    return value


def _run_pwd(args: Mapping[str, Any]) -> str:
    return files.pwd()


def _run_ls(args: Mapping[str, Any]) -> str:
    return files.ls(_optional_str(args, "path", "."), _optional_bool(args, "recursive", False))


def _run_stat(args: Mapping[str, Any]) -> str:
    return files.stat(_required_str("stat", args, "path"))


def _run_cat(args: Mapping[str, Any]) -> str:
    return files.cat(_required_str("cat", args, "path"))


def _run_ps(args: Mapping[str, Any]) -> str:
    return process.ps()


def _run_uptime(args: Mapping[str, Any]) -> str:
    return process.uptime()


Handler = Callable[[Mapping[str, Any]], str]

# Closed dispatch table, one handler per catalog entry
HANDLERS: Dict[str, Handler] = {
    "pwd": _run_pwd,
    "ls": _run_ls,
    "stat": _run_stat,
    "cat": _run_cat,
    "ps": _run_ps,
    "uptime": _run_uptime,
}


class ToolRegistry:
    """The set of introspection tools the model may call."""

    def __init__(self, enabled: bool = True, handlers: Optional[Mapping[str, Handler]] = None) -> None:
        self.enabled = enabled
        self._handlers: Dict[str, Handler] = dict(HANDLERS if handlers is None else handlers)
        self._definitions = [d for d in TOOL_DEFINITIONS if d.name in self._handlers]

    def is_enabled(self) -> bool:
        return self.enabled

    def list_definitions(self) -> List[ToolDefinition]:
        """Return the tool catalog, or an empty list when tools are disabled."""
        if not self.enabled:
            return []
        return list(self._definitions)

    def function_tools(self) -> List[Dict[str, Any]]:
        """Return the catalog in the provider's function tool format."""
        return [definition.to_function() for definition in self.list_definitions()]

    def catalog_summary(self) -> str:
        """One ``- name: description`` line per exposed tool."""
        return "\n".join(f"- {d.name}: {d.description}" for d in self.list_definitions())

    def execute(self, name: str, arguments: Mapping[str, Any]) -> str:
        """Run tool *name*, raising :class:`ToolError` on failure."""
        if not self.enabled:
            raise ToolError(DISABLED_ERROR)
        handler = self._handlers.get(name)
        if handler is None:
            raise UnknownToolError(name)
        return handler(arguments or {})

    def dispatch(self, name: str, arguments: Mapping[str, Any]) -> ToolResult:
        """Run tool *name* and wrap the outcome in a :class:`ToolResult`."""
        try:
            return ToolResult.success(self.execute(name, arguments))
        except (ToolError, ValueError) as exc:
            return ToolResult.failure(str(exc))


__all__ = [
    "DISABLED_ERROR",
    "HANDLERS",
    "TOOL_DEFINITIONS",
    "ToolDefinition",
    "ToolParameter",
    "ToolRegistry",
    "ToolResult",
]
