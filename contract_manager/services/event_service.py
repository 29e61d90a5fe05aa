"""
Event Service

In-process publish/subscribe for change notifications. Services publish
only after their transaction has committed.
"""

import logging
import threading
from collections.abc import Callable, Iterable

from contract_manager.schemas.events import ContractEvent


logger = logging.getLogger(__name__)

Subscriber = Callable[[ContractEvent], None]


class EventBus:
    """Fan-out of committed events to subscribers, in emission order"""

    def __init__(self):
        self._lock = threading.Lock()
        self._subscribers: list[Subscriber] = []

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a subscriber

        Args:
            callback: Called once per published event

        Returns:
            Function that removes the subscription
        """
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, events: Iterable[ContractEvent]) -> None:
        """
        Deliver events to every subscriber

        A subscriber that raises is logged and skipped; the change it was
        notified about is already committed.

        Args:
            events: Events in emission order
        """
        with self._lock:
            subscribers = list(self._subscribers)

        for event in events:
            logger.debug(f"Publishing {event.event}: {event.model_dump()}")
            for callback in subscribers:
                try:
                    callback(event)
                except Exception:
                    logger.exception(f"Subscriber {callback!r} failed on {event.event}")
