import logging
from typing import Callable, List, Optional

from userdir.schemas.sche_user import UserItemResponse

logger = logging.getLogger(__name__)


class UserCollectionCache:
    """
    Last fetched snapshot of the user collection.

    ``get`` fetches once and reuses the snapshot until ``invalidate`` is called,
    which every successful mutation does.
    """

    def __init__(self, fetch: Callable[[], List[UserItemResponse]]):
        self._fetch = fetch
        self._snapshot: Optional[List[UserItemResponse]] = None

    @property
    def is_stale(self) -> bool:
        return self._snapshot is None

    def get(self) -> List[UserItemResponse]:
        if self._snapshot is None:
            self._snapshot = list(self._fetch())
            logger.debug(f"Fetched {len(self._snapshot)} users")
        return self._snapshot

    def invalidate(self):
        self._snapshot = None
