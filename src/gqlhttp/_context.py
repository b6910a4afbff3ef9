import threading
import time
from typing import Callable, List, Optional

from .models.errors import DeadlineExceededError, RequestCancelledError


class CallContext:
    """Cancellation and deadline for one or more GraphQL calls.

    A context can be shared by several calls and cancelled from any thread.
    ``deadline`` is a ``time.monotonic()`` timestamp.

    Examples:
        ```python
        ctx = CallContext.with_timeout(5.0)
        data = client.send(req, Hero, context=ctx)
        ```
    """

    def __init__(self, deadline: Optional[float] = None) -> None:
        self.deadline = deadline
        self._cancelled = threading.Event()
        self._callbacks: List[Callable[[], None]] = []
        self._lock = threading.Lock()

    @classmethod
    def with_timeout(cls, seconds: float) -> "CallContext":
        return cls(deadline=time.monotonic() + seconds)

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def expired(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, ``None`` when there is no deadline."""
        if self.deadline is None:
            return None
        return max(self.deadline - time.monotonic(), 0.0)

    def cancel(self) -> None:
        with self._lock:
            if self._cancelled.is_set():
                return
            self._cancelled.set()
            callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()

    def on_cancel(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Run ``callback`` when the context is cancelled.

        The callback runs immediately if the context is already cancelled.
        Returns a function that unregisters the callback.
        """
        with self._lock:
            if not self._cancelled.is_set():
                self._callbacks.append(callback)

                def unregister() -> None:
                    with self._lock:
                        if callback in self._callbacks:
                            self._callbacks.remove(callback)

                return unregister
        callback()
        return lambda: None

    def check(self) -> None:
        if self.cancelled:
            raise RequestCancelledError()
        if self.expired:
            raise DeadlineExceededError()
