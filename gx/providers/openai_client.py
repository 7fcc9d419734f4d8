"""OpenAI client implementation.

Selected with ``GX_PROVIDER=openai``.  The API key is pulled from
``OPENAI_API_KEY``.
"""

from typing import Any, Dict, List, Optional

from openai import OpenAI, OpenAIError

from ..env_api_keys import get_api_key
from ..exceptions import TransportError
from ..models import DEFAULT_MODEL, TEMPERATURE
from .llm_client import LLMClient, build_request_payload


class OpenAIClient(LLMClient):
    """Client for the OpenAI Chat Completions API."""

    def __init__(self, model: Optional[str] = None, api_key: Optional[str] = None) -> None:
        self.client = OpenAI(api_key=api_key or get_api_key("openai"))
        self.model_name = model or DEFAULT_MODEL["OpenAIClient"]

    def chat_completion(
        self,
        messages: List[Dict[str, Any]],
        model: Optional[str] = None,
        temperature: float = TEMPERATURE,
        **kwargs: Any,
    ) -> Any:
        request_payload = build_request_payload(
            messages, model or self.model_name, temperature, **kwargs
        )
        try:
            return self.client.chat.completions.create(**request_payload)
        except OpenAIError as exc:
            raise TransportError(f"OpenAI chat_completion error: {exc}") from exc


__all__ = ["OpenAIClient"]
