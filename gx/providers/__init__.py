"""Provider registry.

This subpackage contains one module per supported provider.  The
``DEFAULT_CLIENTS`` mapping associates short provider names (e.g.
``"gemini"``) with the corresponding client class.  External consumers
should use :func:`gx.api_registry.get_client` rather than importing
classes directly from this module.
"""

from .gemini_client import GeminiClient
from .llm_client import LLMClient
from .openai_client import OpenAIClient

# Map short provider names to their client classes.
DEFAULT_CLIENTS = {
    "gemini": GeminiClient,
    "openai": OpenAIClient,
}

__all__ = ["DEFAULT_CLIENTS", "GeminiClient", "LLMClient", "OpenAIClient"]
