"""Read-only introspection tools exposed to the model.

``files`` and ``process`` hold one function per tool.  The
:class:`~gx.tools.registry.ToolRegistry` declares the catalog and is the
only entry point the engine uses; call it rather than the operation
modules directly.
"""

from .registry import (
    DISABLED_ERROR,
    TOOL_DEFINITIONS,
    ToolDefinition,
    ToolParameter,
    ToolRegistry,
    ToolResult,
)

__all__ = [
    "DISABLED_ERROR",
    "TOOL_DEFINITIONS",
    "ToolDefinition",
    "ToolParameter",
    "ToolRegistry",
    "ToolResult",
]
