import subprocess

import pytest

from pavolume import pacmd
from pavolume.errors import ExternalToolError
from pavolume.pacmd import PacmdRunner


def fake_run(returncode=0, stdout="", stderr="", calls=None):
    def run(cmd, **kwargs):
        if calls is not None:
            calls.append((cmd, kwargs))
        return subprocess.CompletedProcess(cmd, returncode, stdout, stderr)
    return run


def test_run_returns_stdout(monkeypatch):
    calls = []
    monkeypatch.setattr(pacmd.subprocess, "run", fake_run(stdout=">>> 0 sink(s) available.\n", calls=calls))
    assert PacmdRunner().run("list-sinks") == ">>> 0 sink(s) available.\n"
    cmd, kwargs = calls[0]
    assert cmd == ["pacmd", "list-sinks"]
    assert kwargs["capture_output"] is True
    assert kwargs["text"] is True


def test_run_stringifies_arguments(monkeypatch):
    calls = []
    monkeypatch.setattr(pacmd.subprocess, "run", fake_run(calls=calls))
    PacmdRunner("/usr/bin/pacmd").run("set-sink-volume", 1, 32768)
    assert calls[0][0] == ["/usr/bin/pacmd", "set-sink-volume", "1", "32768"]


def test_nonzero_exit_raises(monkeypatch):
    monkeypatch.setattr(pacmd.subprocess, "run",
                        fake_run(returncode=1, stderr="No PulseAudio daemon running\n"))
    with pytest.raises(ExternalToolError, match="No PulseAudio daemon running"):
        PacmdRunner().run("list-sinks")


def test_nonzero_exit_falls_back_to_stdout(monkeypatch):
    monkeypatch.setattr(pacmd.subprocess, "run",
                        fake_run(returncode=1, stdout="Sink 9 does not exist.\n"))
    with pytest.raises(ExternalToolError, match="does not exist"):
        PacmdRunner().run("set-sink-mute", 9, 1)


def test_missing_tool_raises(monkeypatch):
    def missing(cmd, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", cmd[0])
    monkeypatch.setattr(pacmd.subprocess, "run", missing)
    with pytest.raises(ExternalToolError, match="Could not run pacmd"):
        PacmdRunner().run("list-sinks")
