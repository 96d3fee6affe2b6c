"""
Tests for keypress decisions, the cancellation signal and terminal scoping.
"""

import io
import os
import sys

import pytest

from xcmd.core.keypress import (
    CancellationSignal,
    Decision,
    KeypressDecisions,
    RawTerminal,
    supports_keypress,
)


def reader(*keys):
    pending = list(keys)
    return lambda: pending.pop(0)


class TestKeypressDecisions:

    @pytest.mark.parametrize("key", [b"\r", b"\n"])
    def test_enter_accepts(self, key):
        decisions = KeypressDecisions(CancellationSignal(), read_key=reader(key))
        assert decisions.next_decision() is Decision.ACCEPT

    def test_space_rejects(self):
        decisions = KeypressDecisions(CancellationSignal(), read_key=reader(b" "))
        assert decisions.next_decision() is Decision.REJECT

    def test_other_keys_are_ignored(self):
        decisions = KeypressDecisions(
            CancellationSignal(),
            read_key=reader(b"y", b"\x1b", b"[", b"A", b"q", b" "),
        )
        assert decisions.next_decision() is Decision.REJECT

    def test_ctrl_c_byte_interrupts(self):
        cancel = CancellationSignal()
        decisions = KeypressDecisions(cancel, read_key=reader(b"x", b"\x03"))

        assert decisions.next_decision() is Decision.INTERRUPTED
        assert cancel.is_set()
        assert cancel.reason == "ctrl-c"

    def test_keyboard_interrupt_interrupts(self):
        def raising():
            raise KeyboardInterrupt

        cancel = CancellationSignal()
        decisions = KeypressDecisions(cancel, read_key=raising)

        assert decisions.next_decision() is Decision.INTERRUPTED
        assert cancel.is_set()

    def test_eof_interrupts(self):
        cancel = CancellationSignal()
        decisions = KeypressDecisions(cancel, read_key=reader(b""))

        assert decisions.next_decision() is Decision.INTERRUPTED
        assert cancel.reason == "stdin closed"


class TestCancellationSignal:

    def test_starts_clear(self):
        assert not CancellationSignal().is_set()

    def test_first_reason_wins(self):
        cancel = CancellationSignal()
        cancel.set("ctrl-c")
        cancel.set("stdin closed")
        assert cancel.is_set()
        assert cancel.reason == "ctrl-c"


class TestTerminal:

    def test_non_tty_stream_is_not_interactive(self):
        assert supports_keypress(io.StringIO()) is False

    def test_release_without_acquire_is_a_no_op(self):
        terminal = RawTerminal(io.StringIO())
        terminal.release()
        terminal.release()
        assert terminal.active is False


@pytest.fixture
def pty_stream():
    """Slave end of a pseudo-terminal, opened as a binary stream."""
    pty = pytest.importorskip("pty")
    master, slave = pty.openpty()
    stream = open(slave, "rb", buffering=0)
    yield stream
    stream.close()
    os.close(master)


@pytest.mark.skipif(sys.platform == "win32", reason="termios required")
class TestRawTerminalOnPty:

    def test_cbreak_inside_and_restored_on_exit(self, pty_stream):
        import termios

        fd = pty_stream.fileno()
        saved = termios.tcgetattr(fd)

        with RawTerminal(pty_stream) as terminal:
            lflag = termios.tcgetattr(fd)[3]
            assert terminal.active
            assert not lflag & termios.ICANON
            assert not lflag & termios.ECHO

        assert termios.tcgetattr(fd) == saved
        assert not terminal.active

    def test_early_release_restores_once(self, pty_stream, monkeypatch):
        import termios

        fd = pty_stream.fileno()
        saved = termios.tcgetattr(fd)
        restores = []
        real_tcsetattr = termios.tcsetattr

        def counting_tcsetattr(*args):
            restores.append(args)
            return real_tcsetattr(*args)

        monkeypatch.setattr(termios, "tcsetattr", counting_tcsetattr)

        with RawTerminal(pty_stream) as terminal:
            terminal.release()
            assert termios.tcgetattr(fd) == saved

        assert len(restores) == 1
        assert termios.tcgetattr(fd) == saved
