"""gx - convert natural language into shell commands.

The generation loop lives in :mod:`gx.engine`; the CLI in :mod:`gx.cli`.
"""

__version__ = "0.1.0"

from .engine import ConversationEngine
from .environment import GenerationContext, build_context, detect_platform, detect_shell
from .history import HistoryEntry, HistoryManager
from .instruction import build_instruction
from .providers import GeminiClient, LLMClient, OpenAIClient
from .tools import ToolRegistry, ToolResult
from .transcript import Transcript

__all__ = [
    "ConversationEngine",
    "GenerationContext",
    "GeminiClient",
    "HistoryEntry",
    "HistoryManager",
    "LLMClient",
    "OpenAIClient",
    "ToolRegistry",
    "ToolResult",
    "Transcript",
    "build_context",
    "build_instruction",
    "detect_platform",
    "detect_shell",
]
