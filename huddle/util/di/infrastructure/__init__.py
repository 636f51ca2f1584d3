"""Infrastructure providers: entity store and repositories."""

from .persistence import (
    PersistenceProvider,
    ProdPersistenceProvider,
    RepositoryProvider,
)

__all__ = [
    "PersistenceProvider",
    "ProdPersistenceProvider",
    "RepositoryProvider",
]
