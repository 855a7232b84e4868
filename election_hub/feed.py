"""
Server-sent event feeds.

Each connected client gets its own ``LiveFeed``: a generator that sends a
snapshot as soon as it is opened and then a fresh one every ``interval``
seconds until the client goes away or the server shuts down. Nothing is
buffered between ticks; every tick recomputes the snapshot from scratch.
"""

import atexit
import json
import logging
import threading
import weakref

log = logging.getLogger(__name__)

# every registry of the process, closed once at interpreter exit
_registries = weakref.WeakSet()

STATE_CONNECTED = "connected"
STATE_STREAMING = "streaming"
STATE_CLOSED = "closed"

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "X-Accel-Buffering": "no",
}


def format_event(event, data, retry_ms=None):
    lines = []
    if retry_ms is not None:
        lines.append(f"retry: {int(retry_ms)}")
    lines.append(f"event: {event}")
    for line in json.dumps(data, default=str).splitlines():
        lines.append(f"data: {line}")
    return "\n".join(lines) + "\n\n"


class FeedRegistry:
    """Open feeds of this process, so they can all be closed on shutdown."""

    def __init__(self):
        self._feeds = set()
        self._lock = threading.Lock()
        _registries.add(self)

    def add(self, feed):
        with self._lock:
            self._feeds.add(feed)

    def discard(self, feed):
        with self._lock:
            self._feeds.discard(feed)

    def __len__(self):
        with self._lock:
            return len(self._feeds)

    def close_all(self):
        with self._lock:
            feeds = list(self._feeds)
        for feed in feeds:
            feed.close()
        if feeds:
            log.info("Closed %d live feeds", len(feeds))


class LiveFeed:
    def __init__(
        self,
        snapshot,
        *,
        event,
        interval,
        retry_ms=None,
        registry=None,
        name=None,
    ):
        self.snapshot = snapshot
        self.event = event
        self.interval = interval
        self.retry_ms = retry_ms
        self.registry = registry
        self.name = name or event
        self.state = STATE_CONNECTED
        self._closed = threading.Event()

    @property
    def closed(self):
        return self._closed.is_set()

    def close(self):
        """Ask the loop to stop; wakes it if it is waiting for the next tick."""
        self._closed.set()

    def _finish(self):
        self._closed.set()
        self.state = STATE_CLOSED
        if self.registry is not None:
            self.registry.discard(self)

    def events(self):
        log.info("Feed %s connected", self.name)
        # paired with the discard in _finish
        if self.registry is not None:
            self.registry.add(self)
        try:
            if self.closed:
                return

            first = format_event(self.event, self.snapshot(), retry_ms=self.retry_ms)
            self.state = STATE_STREAMING
            yield first

            while not self.closed:
                # Event.wait returns True as soon as close() is called
                if self._closed.wait(self.interval):
                    break
                yield format_event(self.event, self.snapshot())
        except GeneratorExit:
            # client disconnected or the server failed writing to it
            log.info("Feed %s disconnected", self.name)
            raise
        except Exception:
            log.exception("Feed %s failed, closing", self.name)
        finally:
            self._finish()
            log.info("Feed %s closed", self.name)


@atexit.register
def close_all_feeds():
    for registry in list(_registries):
        registry.close_all()
