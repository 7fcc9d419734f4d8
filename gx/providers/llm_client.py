"""Abstract interface for LLM clients.

This module defines the :class:`LLMClient` abstract base class used by
provider implementations.  Each provider must implement a
``chat_completion`` method that accepts a list of message dictionaries,
a ``model`` name, a ``temperature`` and any additional keyword
arguments, and returns an object shaped like an OpenAI chat completion:
``choices[0].message.content`` holds the text and
``choices[0].message.tool_calls`` the function calls, if any.

Providers raise :class:`~gx.exceptions.TransportError` when the endpoint
cannot be reached or rejects the request.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..models import TEMPERATURE

# Message keys forwarded to the provider verbatim
_MESSAGE_KEYS = ("tool_calls", "tool_call_id", "name")


class LLMClient(ABC):
    """Abstract base class for LLM clients."""

    model_name: str = ""

    @abstractmethod
    def chat_completion(
        self,
        messages: List[Dict[str, Any]],
        model: Optional[str] = None,
        temperature: float = TEMPERATURE,
        **kwargs: Any,
    ) -> Any:
        """Generate a chat completion.

        Parameters
        ----------
        messages : list of dict
            Messages in the conversation.  Each dict has a ``role``
            (``"system"``, ``"user"``, ``"assistant"`` or ``"tool"``) and
            ``content``.  Assistant messages may carry ``tool_calls``; tool
            messages carry ``tool_call_id`` and ``name``.
        model : str, optional
            Identifier for the model variant.  Defaults to the client's
            ``model_name``.
        temperature : float, optional
            Sampling temperature.
        **kwargs : Any
            ``top_p``, ``tools`` and ``tool_choice``.

        Returns
        -------
        Any
            An OpenAI-shaped chat completion response.
        """
        raise NotImplementedError


def build_request_payload(
    messages: List[Dict[str, Any]],
    model: str,
    temperature: float,
    **kwargs: Any,
) -> Dict[str, Any]:
    """Build an OpenAI chat completion request from gx messages."""
    request_payload: Dict[str, Any] = {
        "model": model,
        "messages": [],
        "temperature": temperature,
    }

    for msg in messages:
        payload_msg: Dict[str, Any] = {
            "role": msg.get("role", "user"),
            "content": msg.get("content", ""),
        }
        for key in _MESSAGE_KEYS:
            if msg.get(key):
                payload_msg[key] = msg[key]
        request_payload["messages"].append(payload_msg)

    top_p = kwargs.pop("top_p", None)
    if top_p is not None:
        request_payload["top_p"] = top_p

    # Tools are only sent when there is a catalog; an empty list is
    # rejected by the endpoint.
    tools = kwargs.pop("tools", None)
    if tools:
        request_payload["tools"] = tools
        request_payload["tool_choice"] = kwargs.pop("tool_choice", None) or "auto"
    else:
        kwargs.pop("tool_choice", None)

    kwargs.pop("model", None)
    kwargs.pop("messages", None)
    kwargs.pop("temperature", None)
    if kwargs:
        request_payload.update(kwargs)
    return request_payload


__all__ = ["LLMClient", "build_request_payload"]
