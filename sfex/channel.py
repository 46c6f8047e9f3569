"""Bounded FIFO channels for passing values between threads."""

from __future__ import annotations

import math
import threading
from collections import deque
from decimal import Decimal

from sfex.value import Maybe, SfxValueError

DEFAULT_BUFFER_SIZE = 10


class ChannelClosed(SfxValueError):
    """Raised when sending on, or receiving from, a closed channel."""


def _timeout_seconds(timeout) -> float:
    if isinstance(timeout, bool) or not isinstance(timeout, (Decimal, int, float)):
        raise SfxValueError("Timeout must be a number")
    seconds = float(timeout)
    if math.isnan(seconds) or math.isinf(seconds) or seconds < 0:
        raise SfxValueError("Invalid timeout")
    return seconds


class Channel:
    """A bounded queue: senders block while it is full, receivers while it is empty."""

    def __init__(self, buffer_size: int = DEFAULT_BUFFER_SIZE):
        if buffer_size < 1:
            raise SfxValueError("Invalid buffer size")
        self.buffer_size = buffer_size
        self._items: deque = deque()
        self._closed = False
        self._cond = threading.Condition()

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        with self._cond:
            return len(self._items)

    def send(self, value) -> bool:
        """Queue ``value``, waiting for room; raise ``ChannelClosed`` if closed."""
        with self._cond:
            self._cond.wait_for(
                lambda: self._closed or len(self._items) < self.buffer_size
            )
            if self._closed:
                raise ChannelClosed("Channel closed")
            self._items.append(value)
            self._cond.notify_all()
        return True

    def _take(self):
        item = self._items.popleft()
        self._cond.notify_all()
        return item

    def receive(self):
        """Take the oldest value, waiting for one; raise if closed and drained."""
        with self._cond:
            self._cond.wait_for(lambda: self._items or self._closed)
            if not self._items:
                raise ChannelClosed("Channel closed")
            return self._take()

    def try_receive(self, timeout) -> Maybe:
        """Wait up to ``timeout`` seconds for a value; ``Maybe()`` if none arrived."""
        seconds = _timeout_seconds(timeout)
        with self._cond:
            self._cond.wait_for(lambda: self._items or self._closed, timeout=seconds)
            if not self._items:
                return Maybe()
            return Maybe(self._take())

    def close(self) -> None:
        """Refuse further sends; queued values can still be received."""
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    def __iter__(self):
        while True:
            try:
                yield self.receive()
            except ChannelClosed:
                return

    def __enter__(self) -> Channel:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def create_channel(*args) -> Channel:
    """Create a channel; the optional first argument is its buffer size."""
    if not args:
        return Channel(DEFAULT_BUFFER_SIZE)
    size = args[0]
    if isinstance(size, bool) or not isinstance(size, (Decimal, int)):
        raise SfxValueError("Buffer size must be a number")
    size = Decimal(size)
    if size < 0:
        raise SfxValueError("Invalid buffer size")
    return Channel(int(size))