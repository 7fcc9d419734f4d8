import subprocess

import pytest

from gx import environment
from gx.environment import build_context, detect_platform, detect_shell


def test_shell_basename_from_shell_variable():
    assert detect_shell({"SHELL": "/bin/zsh"}, os_name="linux") == "zsh"
    assert detect_shell({"SHELL": "/usr/local/bin/fish"}, os_name="darwin") == "fish"


def test_shell_variable_wins_over_windows_variables():
    env = {"SHELL": "/usr/bin/bash", "PSModulePath": "C:\\ps", "ComSpec": "C:\\Windows\\system32\\cmd.exe"}
    assert detect_shell(env, os_name="windows") == "bash"


def test_powershell_detected_before_comspec():
    env = {"PSModulePath": "C:\\Program Files\\PowerShell\\Modules", "ComSpec": "C:\\Windows\\system32\\cmd.exe"}
    assert detect_shell(env, os_name="windows") == "powershell"


def test_cmd_detected_from_comspec_case_insensitively():
    assert detect_shell({"ComSpec": "C:\\WINDOWS\\System32\\CMD.EXE"}, os_name="windows") == "cmd"


def test_comspec_without_cmd_exe_falls_through():
    assert detect_shell({"ComSpec": "C:\\tools\\tcc.exe"}, os_name="windows") == "powershell"


@pytest.mark.parametrize("os_name, expected", [("windows", "powershell"), ("linux", "bash"), ("darwin", "bash")])
def test_default_shell_per_os(os_name, expected):
    assert detect_shell({}, os_name=os_name) == expected


def test_platform_plain_form():
    assert detect_platform("darwin", "arm64") == "darwin/arm64"
    assert detect_platform("linux", "amd64", kernel_release="6.8.0-45-generic") == "linux/amd64"


@pytest.mark.parametrize("release", ["5.15.153.1-microsoft-standard-WSL2", "4.4.0-19041-Microsoft", "6.1.21-wsl"])
def test_platform_detects_wsl(release):
    assert detect_platform("linux", "amd64", kernel_release=release) == "wsl2/amd64"


def test_wsl_probe_only_on_linux():
    assert detect_platform("windows", "amd64", kernel_release="microsoft") == "windows/amd64"


def test_platform_probe_failure_is_not_fatal(monkeypatch):
    def boom(*args, **kwargs):
        raise FileNotFoundError("uname")

    monkeypatch.setattr(subprocess, "run", boom)
    assert detect_platform("linux", "arm64") == "linux/arm64"


def test_build_context_freezes_flags(monkeypatch):
    monkeypatch.setattr(environment, "current_os", lambda: "darwin")
    monkeypatch.setattr(environment, "current_arch", lambda: "arm64")
    ctx = build_context(verbose=True, tools_enabled=False, environ={"SHELL": "/bin/zsh"})
    assert ctx.shell == "zsh"
    assert ctx.platform == "darwin/arm64"
    assert ctx.os == "darwin"
    assert ctx.verbose is True
    assert ctx.tools_enabled is False
    with pytest.raises(Exception):
        ctx.shell = "bash"
