import logging
import threading
import time
from abc import ABC, abstractmethod
from collections.abc import Callable

logger = logging.getLogger(__name__)


class CacheInvalidator(ABC):
    @abstractmethod
    def invalidate(self, path: str) -> None:
        raise NotImplementedError


class PageCache(CacheInvalidator):
    """Rendered pages keyed by path and a normalized variant of that path.

    Every invalidation bumps the path's generation; a render that started
    under an older generation is not stored.
    """

    def __init__(
        self,
        ttl_seconds: float = 300,
        max_entries: int = 256,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._pages: dict[tuple[str, str], tuple[str, float]] = {}
        self._generations: dict[str, int] = {}
        self._ttl_seconds = ttl_seconds
        self._max_entries = max_entries
        self._clock = clock
        self._lock = threading.Lock()

    def generation(self, path: str) -> int:
        with self._lock:
            return self._generations.get(path, 0)

    def get(self, path: str, variant: str = "") -> str | None:
        with self._lock:
            entry = self._pages.get((path, variant))
            if entry is None:
                return None
            body, expires_at = entry
            if self._clock() >= expires_at:
                del self._pages[(path, variant)]
                return None
            return body

    def put(self, path: str, variant: str, body: str, generation: int) -> bool:
        with self._lock:
            if self._generations.get(path, 0) != generation:
                return False
            now = self._clock()
            key = (path, variant)
            self._pages.pop(key, None)
            if len(self._pages) >= self._max_entries:
                self._evict(now)
            self._pages[key] = (body, now + self._ttl_seconds)
            return True

    def invalidate(self, path: str) -> None:
        with self._lock:
            self._generations[path] = self._generations.get(path, 0) + 1
            stale = [key for key in self._pages if key[0] == path]
            for key in stale:
                del self._pages[key]
        logger.debug("Invalidated %d cached page(s) for %s", len(stale), path)

    def _evict(self, now: float) -> None:
        expired = [key for key, (_, expires) in self._pages.items() if expires <= now]
        for key in expired:
            del self._pages[key]
        # Oldest insertions go first.
        while self._pages and len(self._pages) >= self._max_entries:
            del self._pages[next(iter(self._pages))]

    def __len__(self) -> int:
        with self._lock:
            return len(self._pages)
