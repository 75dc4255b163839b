"""Entity store backends."""

from beartype import beartype

from ..core.config import Settings
from ..core.database import Database
from .base import (
    KIND_SPECS,
    DuplicateKeyError,
    EntityKind,
    EntityStore,
    KindSpec,
    StoreError,
)
from .memory import InMemoryEntityStore
from .postgres import PostgresEntityStore


@beartype
def create_store(settings: Settings, db: Database | None = None) -> EntityStore:
    """Build the store selected by ``settings.store_backend``."""
    if settings.store_backend == "postgres":
        return PostgresEntityStore(db or Database(settings))
    return InMemoryEntityStore()


__all__ = [
    "KIND_SPECS",
    "DuplicateKeyError",
    "EntityKind",
    "EntityStore",
    "InMemoryEntityStore",
    "KindSpec",
    "PostgresEntityStore",
    "StoreError",
    "create_store",
]
