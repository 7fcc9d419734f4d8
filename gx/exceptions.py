"""Exception hierarchy for gx.

Fatal errors (configuration, transport, protocol) propagate to the CLI,
which prints a single ``Error: ...`` line and exits non-zero.  Tool
errors are local to one function call: the registry converts them into
an ``{"error": ...}`` result for the model and never lets them escape.
"""


class GxError(Exception):
    """Base exception for gx."""
    pass


class ConfigurationError(GxError):
    """Raised when no usable credential, provider or model can be resolved."""

    def __init__(self, message: str, missing_key: str = ""):
        super().__init__(message)
        self.missing_key = missing_key


class TransportError(GxError):
    """Raised when the model endpoint is unreachable or rejects a request."""
    pass


class ProtocolError(GxError):
    """Raised when the model returns a malformed response."""
    pass


class HistoryError(GxError):
    """Raised when the staged command or history cannot be read or written."""
    pass


class ToolError(GxError):
    """Base class for errors reported back to the model as a call result."""
    pass


class ToolArgumentError(ToolError):
    """Raised when a required tool argument is missing or mistyped."""
    pass


class ToolExecutionError(ToolError):
    """Raised when the OS operation behind a tool fails."""
    pass


class UnknownToolError(ToolError):
    """Raised when the model asks for a tool that is not in the catalog."""

    def __init__(self, name: str):
        super().__init__(f"unknown tool: {name}")
        self.name = name
