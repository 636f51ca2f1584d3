"""Entity store implementations."""

from huddle.persistence.store.base import Collection, Document, EntityStore, Where
from huddle.persistence.store.feed import ChangeFeed, StoreSubscription
from huddle.persistence.store.inmemory import InMemoryEntityStore
from huddle.persistence.store.postgres import PostgresEntityStore

__all__ = [
    "ChangeFeed",
    "Collection",
    "Document",
    "EntityStore",
    "InMemoryEntityStore",
    "PostgresEntityStore",
    "StoreSubscription",
    "Where",
]
