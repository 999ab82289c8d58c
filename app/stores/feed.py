import itertools
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Literal

logger = logging.getLogger(__name__)

Event = Literal["insert", "update", "delete"]


@dataclass(frozen=True)
class Change:
    table: str
    event: Event
    record: Any


@dataclass(eq=False)
class Subscription:
    table: str
    filters: Dict[str, Any]
    callback: Callable[[Change], None]
    id: int = 0
    active: bool = field(default=True)

    def matches(self, change: Change) -> bool:
        return all(getattr(change.record, key, None) == value for key, value in self.filters.items())


class ChangeFeed:
    """
    Change notification per (table, filter).

    Every repository publishes here after a committed mutation. Callbacks run
    synchronously in the writer's task, so they must be quick and must not
    await.
    """

    def __init__(self):
        self._subscriptions: Dict[str, List[Subscription]] = defaultdict(list)
        self._ids = itertools.count(1)

    def subscribe(self, table: str, filters: Dict[str, Any] | None, callback: Callable[[Change], None]) -> Subscription:
        subscription = Subscription(table=table, filters=dict(filters or {}), callback=callback, id=next(self._ids))
        self._subscriptions[table].append(subscription)
        logger.debug("Subscribed #%s to %s %s", subscription.id, table, subscription.filters)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        subscription.active = False
        subscribers = self._subscriptions.get(subscription.table, [])
        if subscription in subscribers:
            subscribers.remove(subscription)
            logger.debug("Unsubscribed #%s from %s", subscription.id, subscription.table)

    def subscriber_count(self, table: str) -> int:
        return len(self._subscriptions.get(table, []))

    def publish(self, change: Change) -> None:
        for subscription in list(self._subscriptions.get(change.table, [])):
            if not subscription.active or not subscription.matches(change):
                continue
            try:
                subscription.callback(change)
            except Exception:
                # A broken subscriber must not fail the write that already committed.
                logger.exception("Change subscriber #%s failed on %s %s", subscription.id, change.event, change.table)
