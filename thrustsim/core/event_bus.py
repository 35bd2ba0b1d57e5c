# thrustsim/core/event_bus.py
"""
Topic-based message transport.

Publishers may live on any thread; callbacks run on the publisher's thread,
so every subscriber must be safe to call concurrently with the simulation
tick.
"""

import logging
import re
import threading

logger = logging.getLogger(__name__)

_INVALID_TOPIC_CHARS = re.compile(r"[@~#%&*?\[\]{}<>\"'`|\\]|:=")


def as_valid_topic(topic):
    """Turn an arbitrary string into a valid topic name.

    Whitespace becomes ``_``, reserved characters are dropped, repeated
    slashes collapse and the trailing slash is removed.

    Args:
        topic (str): Candidate topic name

    Returns:
        str: Valid topic, or an empty string if nothing usable is left
    """
    valid = re.sub(r"\s+", "_", topic.strip())
    valid = _INVALID_TOPIC_CHARS.sub("", valid)
    valid = re.sub(r"/{2,}", "/", valid)
    if len(valid) > 1:
        valid = valid.rstrip("/")
    if valid in ("", "/"):
        return ""
    return valid


class EventBus:
    """Thread-safe publish/subscribe bus keyed by topic name."""

    def __init__(self):
        """Initialize an empty event bus."""
        self.subscribers = {}
        self._lock = threading.Lock()

    def subscribe(self, topic, callback):
        """Subscribe a callback to a topic.

        Returns:
            The callback, so it can be passed to ``unsubscribe`` later.
        """
        with self._lock:
            self.subscribers.setdefault(topic, []).append(callback)
        return callback

    def unsubscribe(self, topic, callback):
        """Unsubscribe a callback from a topic."""
        with self._lock:
            callbacks = self.subscribers.get(topic, [])
            if callback in callbacks:
                callbacks.remove(callback)
                return True
        return False

    def topics(self):
        """Return the topics that currently have subscribers."""
        with self._lock:
            return sorted(topic for topic, callbacks in self.subscribers.items() if callbacks)

    def publish(self, topic, data=None, source=None):
        """Publish a message to all subscribers of ``topic``.

        Args:
            topic (str): Topic name.
            data (any, optional): Message payload.
            source (str, optional): Publisher name.

        Returns:
            int: Number of subscribers that handled the message.
        """
        event_data = {"type": topic, "data": data, "source": source}

        # Deliver outside the lock so a callback may (un)subscribe
        with self._lock:
            callbacks = list(self.subscribers.get(topic, []))

        count = 0
        for callback in callbacks:
            try:
                callback(event_data)
                count += 1
            except Exception as e:
                logger.error(f"Error in handler for {topic}: {e}")
        return count

    def clear(self):
        """Remove all subscriptions."""
        with self._lock:
            self.subscribers = {}
