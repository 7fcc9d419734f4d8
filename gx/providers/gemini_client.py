"""Gemini API client implementation.

This module provides a :class:`LLMClient` implementation for Google
Gemini models using the OpenAI SDK compatibility endpoint.  It sends
OpenAI-style chat completion requests, including function tools, to the
Gemini API by configuring ``base_url`` on the OpenAI client.

Set ``GEMINI_API_KEY`` (or ``GOOGLE_API_KEY``) in your environment
before using this client.
"""

from typing import Any, Dict, List, Optional

from openai import OpenAI, OpenAIError

from ..env_api_keys import get_api_key
from ..exceptions import TransportError
from ..models import DEFAULT_MODEL, TEMPERATURE
from .llm_client import LLMClient, build_request_payload

GEMINI_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"


class GeminiClient(LLMClient):
    """Client for Google's Gemini models via OpenAI compatibility."""

    def __init__(
        self,
        model: Optional[str] = None,
        base_url: str = GEMINI_OPENAI_BASE_URL,
        api_key: Optional[str] = None,
    ) -> None:
        self.client = OpenAI(api_key=api_key or get_api_key("gemini"), base_url=base_url)
        self.model_name = model or DEFAULT_MODEL["GeminiClient"]

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
            raise TransportError(f"Gemini chat_completion error: {exc}") from exc


__all__ = ["GeminiClient", "GEMINI_OPENAI_BASE_URL"]
