"""
Per-table change notifications.

Services publish the table name after each committed write; subscribers (the
``/changes`` WebSocket) forward it so clients reload that table in full. There is
no diffing and no ordering guarantee beyond "the last reload wins".
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Dict, Iterable, Optional, Set

from charter.core.config import settings

logger = logging.getLogger(__name__)

TABLES = (
    "yachts",
    "yacht_options",
    "bookings",
    "promotions",
    "water_sports",
    "food_items",
    "additional_services",
    "service_cart_items",
    "site_settings",
)


@dataclass(frozen=True)
class ChangeEvent:
    table: str
    event: str  # INSERT, UPDATE or DELETE


class ChangeFeed:
    def __init__(self, queue_size: Optional[int] = None):
        self.queue_size = queue_size or settings.CHANGE_FEED_QUEUE_SIZE
        self._subscribers: Dict[str, Set[asyncio.Queue]] = {}

    def subscriber_count(self, table: str) -> int:
        return len(self._subscribers.get(table, ()))

    def publish(self, table: str, event: str) -> None:
        change = ChangeEvent(table, event)
        for queue in list(self._subscribers.get(table, ())):
            if queue.full():
                # Any event means "reload", so the oldest one can go
                queue.get_nowait()
            queue.put_nowait(change)
        logger.debug("Published %s on %s", event, table)

    @asynccontextmanager
    async def subscribe(self, tables: Iterable[str]) -> AsyncIterator[asyncio.Queue]:
        tables = set(tables)
        unknown = tables.difference(TABLES)
        if unknown:
            raise ValueError(f"Unknown tables: {', '.join(sorted(unknown))}")

        queue: asyncio.Queue = asyncio.Queue(maxsize=self.queue_size)
        for table in tables:
            self._subscribers.setdefault(table, set()).add(queue)
        try:
            yield queue
        finally:
            for table in tables:
                subscribers = self._subscribers.get(table)
                if subscribers is not None:
                    subscribers.discard(queue)
                    if not subscribers:
                        del self._subscribers[table]


change_feed = ChangeFeed()
