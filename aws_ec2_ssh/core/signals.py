"""Signal handling while interactive child processes own the terminal."""

from __future__ import annotations

import signal
import types
from collections.abc import Iterator
from contextlib import contextmanager


def _discard_signal(signum: int, frame: types.FrameType | None) -> None:
    """Swallow a terminal signal in the parent process."""


@contextmanager
def ignore_user_signals() -> Iterator[None]:
    """Discard SIGINT (and SIGTSTP where available) for the duration of the block.

    The foreground child (``ssh`` or ``session-manager-plugin``) receives the
    terminal's signals directly and decides how to react; the parent only
    waits for it and propagates its exit status. The handler is a Python
    function, not SIG_IGN, so the child starts with default dispositions.
    """
    signums = [signal.SIGINT]
    if hasattr(signal, "SIGTSTP"):
        signums.append(signal.SIGTSTP)

    previous = {signum: signal.signal(signum, _discard_signal) for signum in signums}

    try:
        yield
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)
