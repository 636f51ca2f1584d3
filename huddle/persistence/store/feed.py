"""Change feed delivering live snapshots to store subscriptions."""

import asyncio
import sys
from collections import defaultdict
from typing import Any, Awaitable, Callable
from uuid import uuid4

import logfire

from huddle.domain.repository.subscription import SnapshotObserver, Subscription


class StoreSubscription(Subscription):
    """Subscription re-reading its snapshot on every change notification.

    Deliveries are serialized per subscription and the snapshot is read
    while holding the delivery lock, so observers see snapshots in commit
    order.
    """

    def __init__(
        self,
        feed: "ChangeFeed",
        collection: str,
        fetch: Callable[[], Awaitable[Any]],
        on_change: SnapshotObserver,
    ) -> None:
        self.id = uuid4().hex
        self.collection = collection
        self._feed = feed
        self._fetch = fetch
        self._on_change = on_change
        self._lock = asyncio.Lock()
        self._cancelled = False

    @property
    def active(self) -> bool:
        return not self._cancelled

    async def refresh(self) -> None:
        """Read the current snapshot and hand it to the observer."""
        if self._cancelled:
            return
        async with self._lock:
            if self._cancelled:
                return
            snapshot = await self._fetch()
            if self._cancelled:
                return
            try:
                await self._on_change(snapshot)
            except Exception as e:
                # Observers never fail the write that triggered them
                logfire.error(
                    "Subscription observer failed",
                    subscription_id=self.id,
                    collection=self.collection,
                    error=str(e),
                    _exc_info=sys.exc_info(),
                )

    def cancel(self) -> bool:
        if self._cancelled:
            logfire.warn(
                "Subscription already cancelled",
                subscription_id=self.id,
                collection=self.collection,
            )
            return False
        self._cancelled = True
        self._feed.unregister(self)
        logfire.debug(
            "Subscription cancelled",
            subscription_id=self.id,
            collection=self.collection,
        )
        return True


class ChangeFeed:
    """Registry of open subscriptions, notified per collection."""

    def __init__(self) -> None:
        self._subscriptions: dict[str, list[StoreSubscription]] = defaultdict(list)

    async def open(
        self,
        collection: str,
        fetch: Callable[[], Awaitable[Any]],
        on_change: SnapshotObserver,
    ) -> StoreSubscription:
        """Register a subscription and deliver its initial snapshot."""
        subscription = StoreSubscription(self, collection, fetch, on_change)
        self._subscriptions[collection].append(subscription)
        logfire.debug(
            "Subscription opened",
            subscription_id=subscription.id,
            collection=collection,
        )
        await subscription.refresh()
        return subscription

    def unregister(self, subscription: StoreSubscription) -> None:
        subscriptions = self._subscriptions.get(subscription.collection, [])
        if subscription in subscriptions:
            subscriptions.remove(subscription)

    def open_count(self, collection: str | None = None) -> int:
        """Number of open subscriptions, optionally for one collection."""
        if collection is not None:
            return len(self._subscriptions.get(collection, []))
        return sum(len(subs) for subs in self._subscriptions.values())

    async def publish(self, collection: str) -> None:
        """Notify every subscription on a collection that it changed."""
        for subscription in list(self._subscriptions.get(collection, [])):
            await subscription.refresh()
