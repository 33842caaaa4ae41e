import logging
import threading
from typing import Optional

from historyaddress.core.cache import TTLCache

logger = logging.getLogger(__name__)


class CacheJanitor:
    """
    background thread that trims the cache every `interval` seconds

    expired entries are dropped; if the cache is still at its size limit it is
    cleared outright. never touches in-flight requests.
    """

    def __init__(self, cache: TTLCache, interval: float = 60.0):
        self.cache = cache
        self.interval = interval
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def run_once(self) -> dict:
        pruned = self.cache.prune()
        cleared = False
        if len(self.cache) >= self.cache.max_size:
            self.cache.clear()
            cleared = True
            logger.info("cache at size limit after prune, cleared")
        if pruned:
            logger.debug(f"pruned {pruned} expired cache entries")
        return {"pruned": pruned, "cleared": cleared}

    def _loop(self) -> None:
        while not self._stop.wait(self.interval):
            try:
                self.run_once()
            except Exception as e:
                logger.error(f"cache janitor pass failed: {e}", exc_info=True)

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._loop, name="cache-janitor", daemon=True)
        self._thread.start()
        logger.info(f"cache janitor started (every {self.interval}s)")

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=5)
            self._thread = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()
