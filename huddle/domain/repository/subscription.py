"""Live subscription handle."""

from abc import ABC, abstractmethod
from typing import Awaitable, Callable, TypeVar

T = TypeVar("T")

# Observer invoked with the full current snapshot after every change
SnapshotObserver = Callable[[T], Awaitable[None]]


class Subscription(ABC):
    """Cancelable live subscription.

    The store delivers the current snapshot when the subscription opens and
    again after every change, in order. Once cancelled nothing more is
    delivered.
    """

    @property
    @abstractmethod
    def active(self) -> bool:
        """Whether the subscription still receives snapshots."""
        pass

    @abstractmethod
    def cancel(self) -> bool:
        """Release the subscription.

        Returns:
            True if this call released it, False if it was already released
        """
        pass


class SubscriptionGroup(Subscription):
    """Set of subscriptions released together.

    Used by views that hold several live queries at once, and by derived
    subscriptions built from more than one store subscription. Works as an
    async context manager that cancels everything on exit.
    """

    def __init__(self, subscriptions: list[Subscription] | None = None) -> None:
        self._subscriptions: list[Subscription] = list(subscriptions or [])
        self._cancelled = False

    def add(self, subscription: Subscription) -> Subscription:
        """Track a subscription; it is cancelled at once if the group is closed."""
        if self._cancelled:
            subscription.cancel()
        else:
            self._subscriptions.append(subscription)
        return subscription

    @property
    def active(self) -> bool:
        return not self._cancelled

    def __len__(self) -> int:
        return len(self._subscriptions)

    def cancel(self) -> bool:
        if self._cancelled:
            return False
        self._cancelled = True
        for subscription in self._subscriptions:
            if subscription.active:
                subscription.cancel()
        return True

    async def __aenter__(self) -> "SubscriptionGroup":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.cancel()
