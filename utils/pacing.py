"""
Cancellable pauses for retry back-off and UI settle time.

A Pacer sleeps on a threading.Event, so another thread (a signal handler, a
dashboard stop button) can cut every pending and future pause short by
calling cancel(). The sleeping operation then gets WaitCancelled and must
abandon its remaining retries/steps instead of carrying on.
"""
from __future__ import annotations

import threading
from typing import Optional


class WaitCancelled(Exception):
    """A pause was interrupted by Pacer.cancel()."""


class Pacer:
    def __init__(self, cancel_event: Optional[threading.Event] = None) -> None:
        self._cancel_event = cancel_event or threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def pause(self, seconds: float) -> None:
        """
        Block for `seconds`.

        Raises:
            WaitCancelled: If cancel() was called before or during the pause
        """
        if self._cancel_event.wait(max(0.0, seconds)):
            raise WaitCancelled(f"Pause of {seconds:.2f}s cancelled")

    def cancel(self) -> None:
        self._cancel_event.set()

    def reset(self) -> None:
        """Re-arm after a cancellation."""
        self._cancel_event.clear()
