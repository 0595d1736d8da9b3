"""
channel.py

A closable, thread-safe channel of issue keys.

`search_issues` implementations stream matching keys into an
`IssueKeyChannel` and close it when done. Consumers iterate over the channel;
closure means "no more keys", never an error.
"""

import queue
import threading
from typing import Iterator, Optional

# Sentinel value marking the end of the stream
_CLOSED = None


class ChannelClosedError(Exception):
    """Raised when sending on a channel that has already been closed."""

    pass


class IssueKeyChannel:
    """
    Single-use channel carrying issue keys from a producer to one or more
    consumers.

    Args:
        maxsize: Buffer size. 0 means unbounded; otherwise `send` blocks
                 while the buffer is full.
    """

    def __init__(self, maxsize: int = 0):
        self._queue: "queue.Queue[Optional[str]]" = queue.Queue(maxsize=maxsize)
        self._closed = False
        self._drained = False
        self._lock = threading.Lock()

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, issue_key: str) -> None:
        if issue_key is None:
            raise ValueError("issue_key must not be None")
        # Checked and enqueued under one lock so no key can follow the end marker
        with self._lock:
            if self._closed:
                raise ChannelClosedError("send on closed channel")
            self._queue.put(issue_key)

    def close(self) -> None:
        """Closes the channel. Calling it more than once is a no-op."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._queue.put(_CLOSED)

    def receive(self, timeout: Optional[float] = None) -> Optional[str]:
        """
        Returns the next key, or None once the channel is closed and drained.

        Every reader sees the close: the end marker is put back for the next
        reader blocked on the channel.

        Raises:
            queue.Empty: If `timeout` elapses before a key or the close arrives.
        """
        if self._drained:
            return None
        item = self._queue.get(timeout=timeout)
        if item is _CLOSED:
            self._drained = True
            # The end marker is always last, so the queue is empty here
            self._queue.put_nowait(_CLOSED)
        return item

    def __iter__(self) -> Iterator[str]:
        while True:
            item = self.receive()
            if item is None:
                return
            yield item
