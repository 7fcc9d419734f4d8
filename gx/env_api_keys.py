"""Environment key helpers.

Providers need an API key to reach the hosted model.  This module maps
each provider to the environment variables that may hold its key and
resolves the first one that is set.  A missing key is a configuration
error: nothing is sent to the model without one.
"""

import os
from typing import Mapping, Optional

from .exceptions import ConfigurationError

# Mapping from provider identifier to the environment variables used,
# in lookup order
REQUIRED_KEYS = {
    "gemini": ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
    "openai": ("OPENAI_API_KEY",),
}


def has_api_key(provider: str, environ: Optional[Mapping[str, str]] = None) -> bool:
    """Return True if an API key for *provider* is set."""
    env = os.environ if environ is None else environ
    env_vars = REQUIRED_KEYS.get(provider)
    if not env_vars:
        return True
    return any(env.get(name) for name in env_vars)


def get_api_key(provider: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """Return the API key for *provider* or raise :class:`ConfigurationError`."""
    env = os.environ if environ is None else environ
    env_vars = REQUIRED_KEYS.get(provider, ())
    for name in env_vars:
        value = env.get(name)
        if value:
            return value
    wanted = " or ".join(env_vars) or "an API key"
    raise ConfigurationError(
        f"no API key found for provider {provider!r} (set {wanted})",
        missing_key=env_vars[0] if env_vars else "",
    )


__all__ = ["REQUIRED_KEYS", "has_api_key", "get_api_key"]
