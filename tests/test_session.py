import pytest

from pavolume.backend import PacmdBackend
from pavolume.errors import NoDefaultSinkError
from pavolume.listing import AudioNode, NodeKind
from pavolume.session import InteractiveSession
from tests.samples import FakeHost, FakeRunner, NO_SINKS

KEYMAP = {"q": lambda session: session.exit()}


def make_session(runner=None):
    host = FakeHost()
    backend = PacmdBackend(runner or FakeRunner())
    return InteractiveSession(host, backend, KEYMAP), host


def test_starts_idle():
    session, _ = make_session()
    assert not session.active
    assert session.target is None


def test_enter_targets_default_sink():
    session, host = make_session()
    assert session.enter() == AudioNode(NodeKind.SINK, 1)
    assert session.active
    assert host.keymaps == [KEYMAP]


def test_enter_with_explicit_target_skips_lookup():
    runner = FakeRunner()
    session, _ = make_session(runner)
    target = AudioNode(NodeKind.SINK_INPUT, 7, "Firefox")
    assert session.enter(target) == target
    assert runner.calls == []


def test_enter_without_sinks_stays_idle():
    session, host = make_session(FakeRunner(sinks=NO_SINKS))
    with pytest.raises(NoDefaultSinkError):
        session.enter()
    assert not session.active
    assert host.keymaps == []
    assert host.restored == 1


def test_retarget_keeps_single_keymap():
    session, host = make_session()
    session.enter()
    session.enter(AudioNode(NodeKind.SINK_INPUT, 12))
    assert session.target.index == 12
    assert len(host.keymaps) == 1


def test_exit_restores_keymap():
    session, host = make_session()
    session.enter()
    assert session.exit() is True
    assert not session.active
    assert host.keymaps == []
    assert host.restored == 1


def test_exit_when_idle_is_a_warning(caplog):
    session, host = make_session()
    assert session.exit() is False
    assert host.messages == ["Not in interactive mode"]
    assert host.restored == 0
    assert "not active" in caplog.text
