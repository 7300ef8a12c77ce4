"""
Fixture store access for the API.

Provides a get_store() dependency returning the process-wide FixtureStore.
The store is loaded lazily on first use and memoized; every request shares
the same read-only instance.  The fixture directory is resolved once at
import from APP_FIXTURES_DIR (default: the repository's data/ directory) and
can be overridden with set_fixtures_dir() (used by create_app and tests).
"""

import threading
from pathlib import Path

from fastapi import HTTPException

from utils.config import AppConfig
from utils.fixtures import FixtureError, FixtureStore, load_fixture_store

_FIXTURES_DIR: Path = AppConfig.from_env().fixtures_dir
_store: FixtureStore | None = None
_store_lock = threading.Lock()


def get_fixtures_dir() -> Path:
    """Return the configured fixture directory."""
    return _FIXTURES_DIR


def set_fixtures_dir(path: Path) -> None:
    """Point the API at another fixture directory and drop the loaded store."""
    global _FIXTURES_DIR, _store
    with _store_lock:
        _FIXTURES_DIR = Path(path)
        _store = None


def load_store() -> FixtureStore:
    """Return the memoized store, loading it on first call.

    Raises:
        FixtureError: If the fixtures cannot be loaded.
    """
    global _store
    if _store is None:
        with _store_lock:
            if _store is None:
                _store = load_fixture_store(_FIXTURES_DIR)
    return _store


def get_store() -> FixtureStore:
    """FastAPI dependency: return the shared FixtureStore.

    Raises HTTP 503 with a readable message when the fixtures are missing or
    broken, instead of surfacing a loader traceback.

    Usage in a route::

        from api.fixtures import get_store
        from fastapi import Depends

        @router.get("/example")
        def example(store=Depends(get_store)):
            ...
    """
    try:
        return load_store()
    except FixtureError as e:
        raise HTTPException(status_code=503, detail=f"Fixture data unavailable: {e}")
