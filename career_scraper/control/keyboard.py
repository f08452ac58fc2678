"""Operator start/stop control.

The first line typed on stdin (Enter or ``s``) opens the start gate, the
next one requests a stop. Input that ends before the gate opens is a stop
as well. SIGINT/SIGTERM also request a stop. Both only set flags on the
``CancellationToken``; the engine polls them.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal
import sys
import threading
from typing import TextIO

from career_scraper.extraction.cancellation import CancellationToken

logger = logging.getLogger(__name__)

_QUIT_WORDS = {"q", "quit", "stop"}


class KeyboardControl:
    """Read operator commands from a text stream on a daemon thread."""

    def __init__(self, token: CancellationToken, stream: TextIO | None = None) -> None:
        self.token = token
        self.stream = stream if stream is not None else sys.stdin
        self._thread: threading.Thread | None = None

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(
            target=self._listen, name="keyboard-control", daemon=True
        )
        self._thread.start()

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    def handle(self, line: str) -> None:
        """Apply one line of operator input to the token."""
        command = line.strip().lower()
        if not self.token.started and command not in _QUIT_WORDS:
            logger.info("Starting scraper...")
            self.token.start()
        elif not self.token.stopped:
            logger.info("Stopping scraper...")
            self.token.stop()

    def _listen(self) -> None:
        try:
            for line in self.stream:
                self.handle(line)
                if self.token.stopped:
                    return
        except (OSError, ValueError) as e:
            logger.debug(f"Keyboard control stopped reading input: {e}")
        # Nothing can open the start gate any more
        if not self.token.started and not self.token.stopped:
            logger.info("Input closed before start, stopping scraper...")
            self.token.stop()


def install_signal_handlers(
    token: CancellationToken, loop: asyncio.AbstractEventLoop
) -> list[signal.Signals]:
    """Map SIGINT/SIGTERM to a stop request.

    Returns:
        The signals actually installed (none on platforms without support).
    """
    installed: list[signal.Signals] = []
    for sig in (signal.SIGINT, signal.SIGTERM):
        with contextlib.suppress(NotImplementedError, RuntimeError, ValueError):
            loop.add_signal_handler(sig, token.stop)
            installed.append(sig)
    return installed


def remove_signal_handlers(
    loop: asyncio.AbstractEventLoop, signals: list[signal.Signals]
) -> None:
    for sig in signals:
        with contextlib.suppress(Exception):
            loop.remove_signal_handler(sig)
