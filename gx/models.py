"""Model names and sampling defaults.

Other modules import this to obtain a provider's default model and the
fixed sampling parameters used for command generation.
"""

# Map provider class names to their default model identifiers
DEFAULT_MODEL = {
    "GeminiClient": "gemini-2.5-flash-lite",
    "OpenAIClient": "gpt-4.1-mini",
}

DEFAULT_PROVIDER = "gemini"

# Sampling parameters sent with every generation request.
TEMPERATURE = 0.1
TOP_P = 0.95

__all__ = ["DEFAULT_MODEL", "DEFAULT_PROVIDER", "TEMPERATURE", "TOP_P"]
