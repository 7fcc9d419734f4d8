import copy
import json
from types import SimpleNamespace

import pytest

from gx.environment import GenerationContext
from gx.providers.llm_client import LLMClient


def _build_fake_response(content=None, tool_calls=None):
    """Build an OpenAI-shaped chat completion.

    ``tool_calls`` is a list of ``(name, arguments)`` pairs; dict arguments
    are JSON encoded the way the SDK delivers them.
    """
    calls = None
    if tool_calls:
        calls = []
        for index, (name, arguments) in enumerate(tool_calls):
            if not isinstance(arguments, str):
                arguments = json.dumps(arguments)
            function = SimpleNamespace(name=name, arguments=arguments)
            calls.append(SimpleNamespace(id=f"call_{index}", type="function", function=function))
    message = SimpleNamespace(content=content, tool_calls=calls)
    choice = SimpleNamespace(message=message)
    return SimpleNamespace(choices=[choice])


class ScriptedClient(LLMClient):
    """Returns queued responses in order and records every request."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.model_name = "dummy-model"
        self.calls = []

    def chat_completion(self, messages, model=None, temperature=0.0, **kwargs):
        self.calls.append({
            "messages": copy.deepcopy(messages),
            "model": model,
            "temperature": temperature,
            **kwargs,
        })
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def fake_response():
    return _build_fake_response


@pytest.fixture
def scripted_client():
    return ScriptedClient


@pytest.fixture
def bash_context():
    return GenerationContext(shell="bash", platform="linux/amd64", os="linux", verbose=False, tools_enabled=True)
