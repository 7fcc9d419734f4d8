import subprocess
from types import SimpleNamespace

import pytest

from gx.exceptions import ToolExecutionError
from gx.tools import process
from gx.utils.overflow import LINES_MARKER


def _fake_run(stdout, record=None):
    def run(command, **kwargs):
        if record is not None:
            record.append(command)
        return SimpleNamespace(stdout=stdout, returncode=0)
    return run


def test_ps_uses_ps_aux_on_unix(monkeypatch):
    seen = []
    monkeypatch.setattr(subprocess, "run", _fake_run("USER PID\nroot 1\n", seen))
    assert process.ps("linux") == "USER PID\nroot 1"
    assert seen == [["ps", "aux"]]


def test_ps_uses_powershell_on_windows(monkeypatch):
    seen = []
    monkeypatch.setattr(subprocess, "run", _fake_run("Id ProcessName\n", seen))
    process.ps("windows")
    assert seen[0][0] == "powershell"


def test_ps_truncates_at_line_boundary(monkeypatch):
    line = "x" * 99
    output = "\n".join([line] * 200)
    monkeypatch.setattr(subprocess, "run", _fake_run(output))
    result = process.ps("linux")
    assert result.endswith(LINES_MARKER)
    kept = result.splitlines()[:-1]
    assert all(row == line for row in kept)
    assert len("\n".join(kept)) <= process.MAX_PS_OUTPUT


def test_ps_failure(monkeypatch):
    def fail(*args, **kwargs):
        raise FileNotFoundError("ps")

    monkeypatch.setattr(subprocess, "run", fail)
    with pytest.raises(ToolExecutionError, match="failed to execute ps"):
        process.ps("linux")


def test_uptime(monkeypatch):
    monkeypatch.setattr(subprocess, "run", _fake_run(" 10:00 up 3 days\n"))
    assert process.uptime("linux") == "10:00 up 3 days"


def test_uptime_falls_back_to_current_time(monkeypatch):
    def fail(*args, **kwargs):
        raise subprocess.CalledProcessError(1, ["uptime"])

    monkeypatch.setattr(subprocess, "run", fail)
    result = process.uptime("linux")
    assert result.startswith("Current time: ")
    assert result.endswith("(uptime command unavailable)")


def test_ps_nonzero_exit_reports_status(monkeypatch):
    def fail(command, **kwargs):
        raise subprocess.CalledProcessError(1, command, output="", stderr="boom")

    monkeypatch.setattr(subprocess, "run", fail)
    with pytest.raises(ToolExecutionError) as info:
        process.ps("linux")
    assert str(info.value) == "failed to execute ps: exit status 1"
