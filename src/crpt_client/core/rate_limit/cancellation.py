"""Explicit cancellation for blocking waits."""

from __future__ import annotations

import threading
from collections.abc import Callable


class CancellationToken:
    """Thread-safe, one-shot cancellation signal.

    A token is handed to a blocking call such as RateLimiter.acquire().
    Cancelling it wakes that call, which raises Cancelled. A token only
    affects the calls it was passed to.

    Example:
        token = CancellationToken()
        worker = threading.Thread(target=limiter.acquire, args=(token,))
        worker.start()
        token.cancel()  # worker's acquire() raises Cancelled

        # Bounded wait
        limiter.acquire(CancellationToken.after(5.0))
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._cancelled = False
        self._callbacks: dict[int, Callable[[], None]] = {}
        self._next_id = 0
        self._timer: threading.Timer | None = None

    @classmethod
    def after(cls, seconds: float) -> CancellationToken:
        """Create a token that cancels itself once `seconds` have passed."""
        token = cls()
        timer = threading.Timer(seconds, token.cancel)
        timer.daemon = True
        token._timer = timer
        timer.start()
        return token

    @property
    def cancelled(self) -> bool:
        with self._lock:
            return self._cancelled

    def cancel(self) -> None:
        """Cancel the token and run wake callbacks. Idempotent."""
        with self._lock:
            if self._cancelled:
                return
            self._cancelled = True
            callbacks = list(self._callbacks.values())
            self._callbacks.clear()
            timer = self._timer

        if timer is not None:
            timer.cancel()
        # Run outside our lock: callbacks take the waiter's own lock
        for callback in callbacks:
            callback()

    def register(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register a wake callback, returning a function that unregisters it.

        If the token is already cancelled, the callback runs immediately.
        """
        with self._lock:
            if not self._cancelled:
                key = self._next_id
                self._next_id += 1
                self._callbacks[key] = callback
                return lambda: self._unregister(key)

        callback()
        return lambda: None

    def _unregister(self, key: int) -> None:
        with self._lock:
            self._callbacks.pop(key, None)
