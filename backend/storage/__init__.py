from storage.base import Storage  # noqa: F401
from storage.memory import MemoryStorage  # noqa: F401
from storage.sql import SqlStorage  # noqa: F401


def build_storage(backend: str, database_url: str) -> Storage:
    """Instantiate the configured backend and seed default data."""
    if backend == "memory":
        store: Storage = MemoryStorage()
    elif backend == "sql":
        store = SqlStorage(database_url)
    else:
        raise ValueError(f"Unknown storage backend '{backend}'")
    store.seed_defaults()
    return store
