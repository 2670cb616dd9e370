"""Read-side query results grouped by logical path.

Entries live in the application's Flask-Caching backend next to a
generation token per path.  Invalidating a path replaces its token, so every
process sharing the backend stops reading the older entries at once.
"""

from __future__ import annotations

import uuid
from typing import Any, Callable, Hashable

from flask import current_app
from flask_caching import Cache

from dashboard import query_cache


class PathCache:
    """Values computed on demand and keyed by ``(path, key)``.

    ``None`` is never stored, so a factory returning it runs on every call.
    """

    def __init__(self, backend: Cache) -> None:
        self.backend = backend

    @staticmethod
    def _generation_key(path: str) -> str:
        return f"path-generation:{path}"

    # ------------------------------------------------------------------
    def generation(self, path: str) -> str:
        """Return the current token for ``path``, creating one if needed."""
        key = self._generation_key(path)
        token = self.backend.get(key)
        if token is None:
            # add() keeps a token another worker created first.
            self.backend.add(key, uuid.uuid4().hex, timeout=0)
            token = self.backend.get(key)
        return token

    # ------------------------------------------------------------------
    def get_or_set(self, path: str, key: Hashable, factory: Callable[[], Any]) -> Any:
        generation = self.generation(path)
        entry_key = f"path:{path}:{generation}:{key!r}"
        value = self.backend.get(entry_key)
        if value is not None:
            return value
        value = factory()
        # Skip the store when the path was invalidated while computing.
        if value is not None and self.generation(path) == generation:
            self.backend.set(entry_key, value)
        return value

    # ------------------------------------------------------------------
    def invalidate(self, path: str) -> None:
        """Make every entry stored under ``path`` unreachable."""
        self.backend.set(self._generation_key(path), uuid.uuid4().hex, timeout=0)


# ----------------------------------------------------------------------
def get_path_cache() -> PathCache:
    return PathCache(query_cache)


def revalidate_path(path: str) -> None:
    """Mark the view served under ``path`` as stale."""
    get_path_cache().invalidate(path)
    current_app.logger.debug("Revalidated %s", path)
