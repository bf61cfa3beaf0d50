"""Cancellation token observed by the execution engine.

The engine checks the token only between service steps, so a cancel
request never interrupts a job mid-service. The flag is backed by a
threading.Event, which makes it safe to set from a host UI thread.
"""

from __future__ import annotations

import logging
import threading

logger = logging.getLogger(__name__)


class CancellationToken:
    """Settable flag shared between a caller and a running engine."""

    def __init__(self) -> None:
        self._event = threading.Event()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        """Request cancellation. Takes effect at the next iteration boundary."""
        if not self._event.is_set():
            logger.debug("Cancellation requested")
        self._event.set()

    def reset(self) -> None:
        self._event.clear()

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.is_cancelled})"
