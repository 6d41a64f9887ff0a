"""Session change notifications.

Observers (navigation, session bookkeeping) subscribe to successful
submissions instead of watching shared state. Only SUCCESS decisions are
published.
"""

import asyncio

from app.auth.decisions import Decision, DecisionKind
from app.core.logging import get_logger

logger = get_logger(__name__)


class SessionEvents:
    """Fan-out of SUCCESS decisions to subscriber queues."""

    def __init__(self, maxsize: int = 100) -> None:
        self._maxsize = maxsize
        self._subscribers: list[asyncio.Queue[Decision]] = []

    def subscribe(self) -> asyncio.Queue[Decision]:
        queue: asyncio.Queue[Decision] = asyncio.Queue(maxsize=self._maxsize)
        self._subscribers.append(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue[Decision]) -> None:
        if queue in self._subscribers:
            self._subscribers.remove(queue)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def publish(self, decision: Decision) -> int:
        """
        Deliver a decision to every subscriber.

        Returns:
            Number of subscribers that received it. Non-success decisions
            and full queues are skipped.
        """
        if decision.kind != DecisionKind.SUCCESS:
            return 0

        delivered = 0
        for queue in list(self._subscribers):
            try:
                queue.put_nowait(decision)
                delivered += 1
            except asyncio.QueueFull:
                logger.bind(maxsize=self._maxsize).warning("session_event_dropped")
        return delivered


_events_instance: SessionEvents | None = None


def get_session_events() -> SessionEvents:
    """Get the process-wide SessionEvents instance."""
    global _events_instance
    if _events_instance is None:
        _events_instance = SessionEvents()
    return _events_instance


def reset_session_events() -> None:
    """Reset the events instance. Useful for testing."""
    global _events_instance
    _events_instance = None
