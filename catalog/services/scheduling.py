import asyncio
from typing import Any, Callable, Generic, Optional, TypeVar

from catalog.config import DEBOUNCE_MS

T = TypeVar("T")

class Debouncer(Generic[T]):
    """
    Coalesces rapid submissions: only the last value submitted within
    `delay_ms` reaches the callback. This is the only place where timing
    enters the pipeline; the filter functions it feeds stay synchronous.

    Without a running event loop there is nothing to wait on, so values are
    delivered immediately.
    """

    def __init__(
        self,
        callback: Callable[[T], Any],
        delay_ms: int = DEBOUNCE_MS,
        immediate: Optional[Callable[[T], bool]] = None,
    ):
        self.callback = callback
        self.delay = delay_ms / 1000
        self.immediate = immediate
        self._handle: Optional[asyncio.TimerHandle] = None
        self._pending_value: Optional[T] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def submit(self, value: T) -> None:
        self.cancel()
        if self.immediate is not None and self.immediate(value):
            self.callback(value)
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self.callback(value)
            return

        self._pending_value = value
        self._handle = loop.call_later(self.delay, self._fire)

    def _fire(self) -> None:
        value = self._pending_value
        self._handle = None
        self._pending_value = None
        self.callback(value)

    def flush(self) -> None:
        """Delivers a pending value now instead of waiting for the delay."""
        if self._handle is not None:
            self._handle.cancel()
            self._fire()

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._pending_value = None
