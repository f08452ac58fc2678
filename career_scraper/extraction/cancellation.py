"""Start gate and stop flag shared by the control layer and the engine."""

from __future__ import annotations

import asyncio
import threading


class CancellationToken:
    """One-way start and stop signals.

    Both flags are ``threading.Event`` objects so a keyboard listener thread
    or a signal handler can set them while the event loop is busy. The engine
    polls ``stopped`` between items and between profiles; it never pre-empts
    work in progress.
    """

    def __init__(self) -> None:
        self._started = threading.Event()
        self._stopped = threading.Event()

    @property
    def started(self) -> bool:
        return self._started.is_set()

    @property
    def stopped(self) -> bool:
        return self._stopped.is_set()

    def start(self) -> None:
        self._started.set()

    def stop(self) -> None:
        self._stopped.set()

    async def wait_started(self, poll_interval: float = 0.1) -> bool:
        """Wait until started or stopped.

        Returns:
            True if the start gate opened, False if stop came first.
        """
        while not self._started.is_set():
            if self._stopped.is_set():
                return False
            await asyncio.sleep(poll_interval)
        return not self._stopped.is_set()
