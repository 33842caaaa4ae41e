import logging
import os
import sys
from datetime import datetime

from historyaddress.core.config import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _handlers() -> list:
    handlers = [logging.StreamHandler(sys.stdout)]
    if settings.LOG_DIR:
        # create logs directory before attaching the file handler
        os.makedirs(settings.LOG_DIR, exist_ok=True)
        log_file = os.path.join(settings.LOG_DIR, f'historyaddress_{datetime.now().strftime("%Y%m%d")}.log')
        handlers.append(logging.FileHandler(log_file, mode='a'))
    return handlers


# configure structured logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format=LOG_FORMAT,
    handlers=_handlers()
)


STATIC_PREFIXES = ('/assets/', '/favicon')
STATIC_SUFFIXES = ('.css', '.js', '.png', '.jpg', '.jpeg', '.webp', '.ico', '.svg')


class VisitThrottle:
    """
    decides whether a request gets an access log line

    static files are never logged and each client ip is logged at most once
    per `window` seconds. the ip map is pruned once it grows past `max_ips`.
    """

    def __init__(self, window: float = 10.0, max_ips: int = 100, forget_after: float = 60.0):
        self.window = window
        self.max_ips = max_ips
        self.forget_after = forget_after
        self._last_seen: dict[str, float] = {}

    def should_log(self, path: str, ip: str, now: float) -> bool:
        if path.startswith(STATIC_PREFIXES) or path.lower().endswith(STATIC_SUFFIXES):
            return False

        last = self._last_seen.get(ip)
        log_it = last is None or (now - last) > self.window
        if log_it:
            self._last_seen[ip] = now

        if len(self._last_seen) > self.max_ips:
            cutoff = now - self.forget_after
            for key, seen in list(self._last_seen.items()):
                if seen < cutoff:
                    del self._last_seen[key]
        return log_it

    def clear(self) -> None:
        self._last_seen.clear()
