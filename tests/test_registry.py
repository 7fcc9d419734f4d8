import json

import pytest

from gx.exceptions import ToolExecutionError
from gx.tools import DISABLED_ERROR, TOOL_DEFINITIONS, ToolRegistry, ToolResult


def test_catalog_lists_all_tools():
    names = [d.name for d in ToolRegistry().list_definitions()]
    assert names == ["pwd", "ls", "stat", "cat", "ps", "uptime"]


def test_function_tools_schema():
    tools = {t["function"]["name"]: t for t in ToolRegistry().function_tools()}
    assert tools["cat"]["type"] == "function"
    params = tools["cat"]["function"]["parameters"]
    assert params["required"] == ["path"]
    assert params["properties"]["path"]["type"] == "string"
    ls_params = tools["ls"]["function"]["parameters"]
    assert "required" not in ls_params
    assert ls_params["properties"]["recursive"]["type"] == "boolean"
    assert tools["pwd"]["function"]["parameters"] == {"type": "object", "properties": {}}


def test_catalog_summary_lines():
    summary = ToolRegistry().catalog_summary().splitlines()
    assert summary[0] == "- pwd: Get the current working directory"
    assert len(summary) == len(TOOL_DEFINITIONS)


def test_disabled_registry_exposes_nothing():
    registry = ToolRegistry(enabled=False)
    assert registry.list_definitions() == []
    assert registry.function_tools() == []
    assert registry.catalog_summary() == ""


@pytest.mark.parametrize("name", ["pwd", "cat", "nope"])
def test_disabled_registry_rejects_dispatch(name):
    result = ToolRegistry(enabled=False).dispatch(name, {"path": "x"})
    assert result.error == DISABLED_ERROR


def test_unknown_tool():
    result = ToolRegistry().dispatch("rm", {})
    assert not result.ok
    assert result.error == "unknown tool: rm"


@pytest.mark.parametrize("args", [{}, {"path": 42}, {"path": ""}, {"path": None}])
def test_required_path_argument(args):
    assert ToolRegistry().dispatch("cat", args).error == "cat requires a path argument"
    assert ToolRegistry().dispatch("stat", args).error == "stat requires a path argument"


def test_ls_defaults():
    seen = {}

    def fake_ls(args):
        from gx.tools.registry import _optional_bool, _optional_str
        seen["path"] = _optional_str(args, "path", ".")
        seen["recursive"] = _optional_bool(args, "recursive", False)
        return "ok"

    registry = ToolRegistry(handlers={"ls": fake_ls})
    assert registry.dispatch("ls", {"recursive": "yes"}).result == "ok"
    assert seen == {"path": ".", "recursive": False}


def test_ls_coercion_reaches_operation(monkeypatch):
    from gx.tools import files

    calls = []
    monkeypatch.setattr(files, "ls", lambda path, recursive: calls.append((path, recursive)) or "listing")
    registry = ToolRegistry()
    assert registry.dispatch("ls", {}).result == "listing"
    assert registry.dispatch("ls", {"path": "/tmp", "recursive": True}).result == "listing"
    assert calls == [(".", False), ("/tmp", True)]


def test_execution_errors_become_results(monkeypatch):
    from gx.tools import files

    def fail(path):
        raise ToolExecutionError("failed to access file: No such file or directory")

    monkeypatch.setattr(files, "cat", fail)
    result = ToolRegistry().dispatch("cat", {"path": "missing.txt"})
    assert result.error == "failed to access file: No such file or directory"


def test_tool_result_payloads():
    assert json.loads(ToolResult.success("hi").to_json()) == {"result": "hi"}
    assert json.loads(ToolResult.failure("bad").to_json()) == {"error": "bad"}
    assert ToolResult.success("").ok


@pytest.mark.parametrize("name", ["ls", "stat", "cat"])
def test_nul_byte_path_becomes_result(name):
    result = ToolRegistry().dispatch(name, {"path": "a\x00b"})
    assert not result.ok
    assert "embedded null byte" in result.error
