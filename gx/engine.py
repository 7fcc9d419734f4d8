"""Tool-calling generation loop.

:class:`ConversationEngine` drives one exchange with the hosted model:

1. Seed the conversation with the system instruction and prior history
   (one user and one assistant message per entry, oldest first).
2. Send the user prompt.
3. Inspect the first choice.  If it carries function calls, resolve all
   of them through the :class:`~gx.tools.ToolRegistry`, send every result
   back in a single follow-up request and repeat.  Otherwise the joined,
   trimmed text is the generated command.

Every step is appended to a :class:`~gx.transcript.Transcript`, which is
flushed to disk whether generation succeeds or fails.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, TextIO

from .environment import GenerationContext
from .exceptions import ConfigurationError, ProtocolError
from .history import HistoryEntry
from .instruction import build_instruction
from .models import TEMPERATURE, TOP_P
from .providers.llm_client import LLMClient
from .tools import ToolRegistry, ToolResult
from .transcript import Transcript, opening_sections
from .utils.json_parse import parse_arguments, to_json
from .utils.overflow import truncate_preview


@dataclass
class FunctionCall:
    """A function call as received from the model."""
    id: str
    name: str
    arguments: Any

    def to_message_part(self) -> Dict[str, Any]:
        arguments = self.arguments
        if not isinstance(arguments, str):
            arguments = to_json(arguments if arguments is not None else {}, indent=None)
        return {
            "id": self.id,
            "type": "function",
            "function": {"name": self.name, "arguments": arguments},
        }


def format_tool_args(args: Mapping[str, Any]) -> str:
    """Format call arguments as ``key=value`` pairs for diagnostics."""
    parts: List[str] = []
    for key, value in args.items():
        if isinstance(value, str):
            text = to_json(value, indent=None)
        elif isinstance(value, bool):
            text = "true" if value else "false"
        elif isinstance(value, float):
            text = str(int(value)) if value.is_integer() and abs(value) < 1e16 else repr(value)
        elif isinstance(value, int):
            text = str(value)
        elif value is None:
            text = "null"
        else:
            text = to_json(value, indent=None)
        parts.append(f"{key}={text}")
    return ", ".join(parts)


def format_tool_result(result: str) -> str:
    """Shorten a tool result for the diagnostic stream."""
    return truncate_preview(result)


def _field(obj: Any, name: str, default: Any = None) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(name, default)
    return getattr(obj, name, default)


def _extract_calls(message: Any) -> List[FunctionCall]:
    calls: List[FunctionCall] = []
    for index, raw in enumerate(_field(message, "tool_calls") or []):
        function = _field(raw, "function")
        calls.append(
            FunctionCall(
                id=_field(raw, "id") or f"call_{index}",
                name=_field(function, "name") or "",
                arguments=_field(function, "arguments"),
            )
        )
    return calls


def _extract_texts(message: Any) -> List[str]:
    content = _field(message, "content")
    if content is None:
        return []
    if isinstance(content, str):
        return [content]
    texts: List[str] = []
    for item in content:
        if isinstance(item, str):
            texts.append(item)
        elif _field(item, "type") == "text":
            texts.append(str(_field(item, "text") or ""))
    return texts


class ConversationEngine:
    """Generate a shell command for a prompt, resolving tool calls on the way."""

    def __init__(
        self,
        client: Optional[LLMClient],
        registry: ToolRegistry,
        context: GenerationContext,
        model: Optional[str] = None,
        transcript: Optional[Transcript] = None,
        max_turns: Optional[int] = None,
        environ: Optional[Mapping[str, str]] = None,
        stream: Optional[TextIO] = None,
    ) -> None:
        self.client = client
        self.registry = registry
        self.context = context
        self.model = model
        self.transcript = transcript if transcript is not None else Transcript(enabled=False)
        self.max_turns = max_turns or None
        self.environ = environ
        self.stream = stream
        self.instruction = build_instruction(context, registry.catalog_summary(), environ)

    # diagnostics

    def _log(self, message: str) -> None:
        if self.context.verbose:
            print(message, file=self.stream or sys.stderr)

    # prompt assembly

    def build_preview(self, prompt: str, history: Sequence[HistoryEntry]) -> str:
        """Render what :meth:`generate` would send first, without sending it."""
        return "\n\n".join(opening_sections(self.instruction, prompt, history))

    def _seed_messages(self, prompt: str, history: Sequence[HistoryEntry]) -> List[Dict[str, Any]]:
        messages: List[Dict[str, Any]] = [{"role": "system", "content": self.instruction}]
        for entry in history:
            messages.append({"role": "user", "content": entry.prompt})
            messages.append({"role": "assistant", "content": entry.response})
        messages.append({"role": "user", "content": prompt})
        return messages

    def _send(self, messages: List[Dict[str, Any]]) -> Any:
        if self.client is None:
            raise ConfigurationError("no model client configured")
        kwargs: Dict[str, Any] = {"top_p": TOP_P}
        tools = self.registry.function_tools()
        if tools:
            kwargs["tools"] = tools
            kwargs["tool_choice"] = "auto"
        return self.client.chat_completion(
            messages=list(messages),
            model=self.model,
            temperature=TEMPERATURE,
            **kwargs,
        )

    # generation loop

    def generate(self, prompt: str, history: Sequence[HistoryEntry]) -> str:
        """Return the command the model produced for *prompt*.

        Raises
        ------
        TransportError
            If the provider cannot be reached or rejects a request.
        ProtocolError
            If a response has no choices or no message, or the turn cap is hit.
        """
        self.transcript.extend(opening_sections(self.instruction, prompt, history))
        messages = self._seed_messages(prompt, history)
        try:
            response = self._send(messages)
            return self._process_response(response, messages)
        finally:
            self.transcript.flush()

    def _process_response(self, response: Any, messages: List[Dict[str, Any]]) -> str:
        turn = 1
        while True:
            choices = _field(response, "choices") or []
            if not choices:
                raise ProtocolError("no response candidates")
            message = _field(choices[0], "message")
            if message is None:
                raise ProtocolError("empty response content")

            calls = _extract_calls(message)
            texts = _extract_texts(message)

            if not calls:
                final = "\n".join(texts).strip()
                self.transcript.append(f"TURN {turn} - MODEL RESPONSE (FINAL):\n{final}")
                return final

            if self.max_turns is not None and turn > self.max_turns:
                raise ProtocolError(f"model still calling tools after {self.max_turns} turn(s)")

            self._log_calls(turn, calls, texts)
            messages.append({
                "role": "assistant",
                "content": "\n".join(texts) or None,
                "tool_calls": [call.to_message_part() for call in calls],
            })
            messages.extend(self._resolve_calls(turn, calls))

            response = self._send(messages)
            turn += 1

    def _log_calls(self, turn: int, calls: Sequence[FunctionCall], texts: Sequence[str]) -> None:
        block = f"TURN {turn} - MODEL RESPONSE (FUNCTION CALLS):\n"
        for call in calls:
            try:
                args_text = to_json(parse_arguments(call.arguments))
            except ValueError:
                args_text = str(call.arguments)
            block += f"Function: {call.name}\nArgs: {args_text}\n"
        for text in texts:
            if text.strip():
                block += f"Text: {text.strip()}\n"
        self.transcript.append(block)
        self._log(f"[tool] Received {len(calls)} function call(s)")

    def _resolve_calls(self, turn: int, calls: Sequence[FunctionCall]) -> List[Dict[str, Any]]:
        """Run every call of a turn in order and build the response batch."""
        batch: List[Dict[str, Any]] = []
        block = f"TURN {turn} - TOOL RESPONSES:\n"
        for call in calls:
            try:
                args = parse_arguments(call.arguments)
            except ValueError as exc:
                self._log(f"[tool] {call.name}() - Error parsing: {exc}")
                result = ToolResult.failure(str(exc))
            else:
                self._log(f"[tool] {call.name}({format_tool_args(args)})")
                result = self.registry.dispatch(call.name, args)
                if result.ok:
                    self._log(f"[tool] {call.name} -> {format_tool_result(result.text)}")
                else:
                    self._log(f"[tool] {call.name} -> error: {result.error}")

            if result.ok:
                block += f"Function: {call.name}\nResult: {to_json(result.result)}\n"
            else:
                block += f"Function: {call.name} - Error: {result.error}\n"
            batch.append({
                "role": "tool",
                "tool_call_id": call.id,
                "name": call.name,
                "content": result.to_json(),
            })
        self.transcript.append(block)
        return batch


__all__ = ["ConversationEngine", "FunctionCall", "format_tool_args", "format_tool_result"]
