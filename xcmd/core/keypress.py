"""
Keypress input for the accept/reject prompt.

The terminal is switched to cbreak mode for the whole interactive run: keys
arrive one at a time without echo, while Ctrl+C still raises
KeyboardInterrupt so it can interrupt a pending model request too.
"""

import os
import sys
import threading
from enum import Enum
from typing import Callable, Optional, TextIO

from loguru import logger

ENTER_KEYS = {b"\r", b"\n"}
SPACE_KEY = b" "
CTRL_C = b"\x03"


class Decision(Enum):
    """Outcome of waiting for the user's next keypress."""
    ACCEPT = "accept"
    REJECT = "reject"
    INTERRUPTED = "interrupted"


class CancellationSignal:
    """
    Set once the user asks to stop the run.

    Owned by the CLI controller and shared with the loop and the keypress
    reader, which set it; the loop checks it before each request.
    """

    def __init__(self):
        self._event = threading.Event()
        self.reason: Optional[str] = None

    def set(self, reason: str = "interrupted") -> None:
        if not self._event.is_set():
            self.reason = reason
            self._event.set()
            logger.debug(f"Cancellation requested: {reason}")

    def is_set(self) -> bool:
        return self._event.is_set()


def supports_keypress(stream: Optional[TextIO] = None) -> bool:
    """True when stream is a real terminal (stdin for cbreak mode, stdout for the live region)."""
    stream = stream or sys.stdin
    if sys.platform == "win32":
        return False
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


class RawTerminal:
    """
    Scoped cbreak mode for a terminal stream.

    release() restores the saved settings and is safe to call more than once,
    so an early release (before exiting or launching a command) and the
    context manager exit never restore twice.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdin
        self._saved_settings = None

    @property
    def active(self) -> bool:
        return self._saved_settings is not None

    def acquire(self) -> None:
        import termios
        import tty

        if self.active:
            return
        fd = self.stream.fileno()
        self._saved_settings = termios.tcgetattr(fd)
        tty.setcbreak(fd)
        logger.debug("Terminal switched to cbreak mode")

    def release(self) -> None:
        if not self.active:
            return
        import termios

        settings, self._saved_settings = self._saved_settings, None
        try:
            fd = self.stream.fileno()
            termios.tcsetattr(fd, termios.TCSADRAIN, settings)
            termios.tcflush(fd, termios.TCIFLUSH)
        except (termios.error, OSError, ValueError) as e:
            logger.warning(f"Could not restore terminal settings: {e}")
        else:
            logger.debug("Terminal settings restored")

    def __enter__(self):
        """Context manager entry."""
        self.acquire()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.release()
        return False


class KeypressDecisions:
    """
    Decision source backed by single keypresses.

    Enter accepts, Space rejects, Ctrl+C (or EOF) interrupts. Any other key
    is ignored and the wait continues.
    """

    def __init__(
        self,
        cancel: CancellationSignal,
        read_key: Optional[Callable[[], bytes]] = None,
        stream: Optional[TextIO] = None
    ):
        """
        Args:
            cancel: Signal to set when the user interrupts
            read_key: Returns the next key as bytes (defaults to one byte from stdin)
            stream: Terminal stream used by the default reader
        """
        self.cancel = cancel
        self.stream = stream or sys.stdin
        self._read_key = read_key or self._read_byte

    def _read_byte(self) -> bytes:
        return os.read(self.stream.fileno(), 1)

    def next_decision(self) -> Decision:
        """Block until the user accepts, rejects or interrupts."""
        while True:
            try:
                key = self._read_key()
            except KeyboardInterrupt:
                key = CTRL_C

            if key in ENTER_KEYS:
                return Decision.ACCEPT
            if key == SPACE_KEY:
                return Decision.REJECT
            if key == CTRL_C or key == b"":
                self.cancel.set("ctrl-c" if key else "stdin closed")
                return Decision.INTERRUPTED
