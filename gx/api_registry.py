"""Provider registry helpers.

* :func:`list_providers` - return the registered provider identifiers.
* :func:`list_default_model` - map provider identifiers to their default model.
* :func:`get_client` - instantiate a client for a provider identifier.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from .exceptions import ConfigurationError
from .models import DEFAULT_MODEL
from .providers import DEFAULT_CLIENTS
from .providers.llm_client import LLMClient


def list_providers() -> List[str]:
    """Return the list of registered provider identifiers."""
    return list(DEFAULT_CLIENTS.keys())


def list_default_model() -> Dict[str, str]:
    """Return a mapping of provider identifiers to default model names."""
    models: Dict[str, str] = {}
    for name, cls in DEFAULT_CLIENTS.items():
        model_name = DEFAULT_MODEL.get(cls.__name__)
        if model_name:
            models[name] = model_name
    return models


def get_client(provider_name: str, model_name: Optional[str] = None) -> LLMClient:
    """Instantiate and return an LLM client for the given provider.

    Parameters
    ----------
    provider_name : str
        The provider identifier (e.g. ``"gemini"``).
    model_name : str, optional
        The model name.  Defaults to the provider's default model.

    Raises
    ------
    ConfigurationError
        If the provider is unknown or its API key is not set.
    """
    cls = DEFAULT_CLIENTS.get(provider_name)
    if cls is None:
        known = ", ".join(list_providers())
        raise ConfigurationError(f"unknown provider {provider_name!r} (known: {known})")
    return cls(model=model_name)


__all__ = ["list_providers", "list_default_model", "get_client"]
