import threading
from collections.abc import Callable

from loguru import logger


class SelfDestructCountdown:
    """
    One-shot, cancellable timer that fires when a revealed message must go.

    `on_expire` runs at most once, on the timer thread. Cancelling before
    expiry prevents it from running at all.
    """

    def __init__(self, seconds: float, on_expire: Callable[[], None] | None = None):
        self.seconds = seconds
        self._on_expire = on_expire
        self._timer: threading.Timer | None = None
        self._lock = threading.Lock()
        self._expired = threading.Event()
        self._cancelled = False
        self._fired = False

    @property
    def expired(self) -> bool:
        return self._expired.is_set()

    @property
    def running(self) -> bool:
        return self._timer is not None and not self.expired and not self._cancelled

    def start(self) -> None:
        """Start the countdown. Starting twice is an error."""
        with self._lock:
            if self._timer is not None:
                raise RuntimeError("Countdown already started")
            self._timer = threading.Timer(self.seconds, self._fire)
            self._timer.daemon = True
            self._timer.start()

    def cancel(self) -> None:
        """Stop the countdown if it has not fired yet."""
        with self._lock:
            self._cancelled = True
            if self._timer is not None:
                self._timer.cancel()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until expiry has been handled; returns whether the countdown expired."""
        return self._expired.wait(timeout)

    def _fire(self) -> None:
        with self._lock:
            if self._cancelled or self._fired:
                return
            self._fired = True

        logger.debug("Self-destruct countdown of {}s expired", self.seconds)
        try:
            if self._on_expire is not None:
                self._on_expire()
        finally:
            self._expired.set()
