"""Request tokens giving last-request-wins semantics.

Each fetch of a resource takes a monotonically increasing token; its result
is applied only if no newer fetch of the same resource was issued meanwhile.
"""

import itertools
import logging
from threading import Lock
from typing import Callable, Dict, TypeVar


logger = logging.getLogger(__name__)

T = TypeVar("T")


class RequestSequencer:
    """Issues tokens per resource and tells whether a token is still current."""

    def __init__(self):
        self._counter = itertools.count(1)
        self._latest: Dict[str, int] = {}
        self._lock = Lock()

    def issue(self, resource: str) -> int:
        with self._lock:
            token = next(self._counter)
            self._latest[resource] = token
            return token

    def is_latest(self, resource: str, token: int) -> bool:
        with self._lock:
            return self._latest.get(resource) == token

    def run(self, resource: str, fetch: Callable[[], T], apply: Callable[[T], None]) -> bool:
        """Fetch and apply the result unless a newer request superseded it.

        Returns:
            True if the result was applied, False if it was discarded.
        """
        token = self.issue(resource)
        result = fetch()
        if not self.is_latest(resource, token):
            logger.debug("Discarding stale response for %s (token %d)", resource, token)
            return False
        apply(result)
        return True
