"""Signal handling for the repotree command line.

SIGINT and, where the platform has it, SIGPIPE are recorded instead of
interrupting the process mid-write, so the CLI can stop writing and exit with
the conventional status code.
"""

import atexit
import os
import signal
import sys
from threading import Event
from types import FrameType
from typing import Any, Optional

HAS_SIGPIPE = hasattr(signal, "SIGPIPE")


class SignalHandler:
    """Records interrupting signals for the CLI.

    Attributes:
        sigpipe_received: Set when the output pipe was closed by the reader.
        sigint_received: Set when the user pressed Ctrl+C.
    """

    def __init__(self) -> None:
        self.sigpipe_received = Event()
        self.sigint_received = Event()
        self.original_sigpipe_handler: Any = signal.getsignal(signal.SIGPIPE) if HAS_SIGPIPE else None
        self.original_sigint_handler: Any = signal.getsignal(signal.SIGINT)

    def handle_sigpipe(self, signum: int, frame: Optional[FrameType]) -> None:
        self.sigpipe_received.set()
        signal.signal(signal.SIGPIPE, self.original_sigpipe_handler)

    def handle_sigint(self, signum: int, frame: Optional[FrameType]) -> None:
        self.sigint_received.set()
        signal.signal(signal.SIGINT, self.original_sigint_handler)

    @property
    def interrupted(self) -> bool:
        """True once either signal has been received."""
        return self.sigpipe_received.is_set() or self.sigint_received.is_set()

    def reset(self) -> None:
        """Forget previously received signals."""
        self.sigpipe_received.clear()
        self.sigint_received.clear()


signal_handler = SignalHandler()


def setup_signal_handling() -> None:
    """Install the SIGPIPE and SIGINT handlers."""
    if HAS_SIGPIPE:
        signal.signal(signal.SIGPIPE, signal_handler.handle_sigpipe)
    signal.signal(signal.SIGINT, signal_handler.handle_sigint)


def cleanup() -> None:
    """Point stdout at the null device after an interruption.

    Keeps the interpreter from reporting a second broken pipe while flushing
    stdout at shutdown.
    """
    if signal_handler.interrupted:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())


atexit.register(cleanup)
