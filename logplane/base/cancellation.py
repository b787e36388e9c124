"""
Cooperative cancellation for polling loops.

A :class:`CancellationToken` is shared between the caller and a
long-running wait. Setting it from any thread wakes a pending
:meth:`~CancellationToken.sleep` immediately.

Usage::

    token = CancellationToken()
    worker = threading.Thread(
        target=lifecycle.create_log_group, args=("/app/web", 60.0),
        kwargs={"cancel_token": token},
    )
    worker.start()
    ...
    token.cancel()   # the wait returns None on its next check
"""

from __future__ import annotations

import threading


class CancellationToken:
    """Thread-safe, one-shot cancellation flag with an interruptible sleep."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Signal cancellation. Idempotent."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def sleep(self, seconds: float) -> bool:
        """Sleep for *seconds* unless cancelled first.

        Returns:
            ``True`` if the full interval elapsed, ``False`` if the token
            was (or already had been) cancelled.
        """
        if seconds <= 0:
            return not self.cancelled
        return not self._event.wait(seconds)
