"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire

from huddle.config import Settings
from huddle.domain.repository import (
    ActivityRepository,
    ChatRepository,
    JoinRequestRepository,
    MessageRepository,
    ProfileRepository,
)
from huddle.persistence.database import create_engine, create_session_factory
from huddle.persistence.repository import (
    StoreActivityRepository,
    StoreChatRepository,
    StoreJoinRequestRepository,
    StoreMessageRepository,
    StoreProfileRepository,
)
from huddle.persistence.store import (
    EntityStore,
    InMemoryEntityStore,
    PostgresEntityStore,
)
from huddle.util.di.base import ProviderBase
from huddle.util.observability import instrument_sqlalchemy


class RepositoryProvider(ProviderBase):
    """Store-backed repositories - concrete, no mocks needed.

    Repositories are REQUEST-scoped wrappers around the entity store
    provided by the persistence component.
    """

    @provide(scope=Scope.REQUEST)
    def get_activity_repository(self, store: EntityStore) -> ActivityRepository:
        """Provide Activity repository."""
        return StoreActivityRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_join_request_repository(
        self, store: EntityStore
    ) -> JoinRequestRepository:
        """Provide JoinRequest repository."""
        return StoreJoinRequestRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_chat_repository(self, store: EntityStore) -> ChatRepository:
        """Provide Chat repository."""
        return StoreChatRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_message_repository(self, store: EntityStore) -> MessageRepository:
        """Provide Message repository."""
        return StoreMessageRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_profile_repository(self, store: EntityStore) -> ProfileRepository:
        """Provide Profile repository."""
        return StoreProfileRepository(store)


class PersistenceProvider(ProviderBase):
    """Persistence component base. Implementations provide the entity store."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider.

    Uses PostgreSQL unless ``STORE__BACKEND=memory`` selects the in-memory
    store for local development.
    """

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_store(self, settings: Settings) -> AsyncIterator[EntityStore]:
        """Provide the entity store for the lifetime of the app."""
        if settings.store.backend == "memory":
            logfire.warn("Using in-memory entity store; data is not persisted")
            yield InMemoryEntityStore()
            return

        engine = create_engine(settings)
        # Instrument SQLAlchemy for observability
        instrument_sqlalchemy(engine)
        try:
            yield PostgresEntityStore(create_session_factory(engine))
        finally:
            await engine.dispose()
            logfire.info("Database engine disposed")
