"""
Change notifications over a WebSocket.

Clients connect to ``/changes?tables=yachts,promotions`` and receive
``{"table": ..., "event": ...}`` after every committed write to those tables.
The message carries no row data: the client reloads the table.
"""

import asyncio
import logging

from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect, status

from charter.core.change_feed import TABLES, change_feed

logger = logging.getLogger(__name__)

router = APIRouter()


async def forward_changes(websocket: WebSocket, queue: asyncio.Queue) -> None:
    while True:
        change = await queue.get()
        await websocket.send_json({"table": change.table, "event": change.event})


async def wait_for_disconnect(websocket: WebSocket) -> None:
    """Drain client frames until the client goes away; the feed is one-way."""
    while True:
        frame = await websocket.receive()
        if frame["type"] == "websocket.disconnect":
            return


@router.websocket("/changes")
async def changes(
    websocket: WebSocket,
    tables: str = Query(..., description="Comma-separated table names"),
):
    requested = {name.strip() for name in tables.split(",") if name.strip()}
    unknown = requested.difference(TABLES)
    if not requested or unknown:
        logger.info("Rejected change feed subscription for %s", tables)
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()
    async with change_feed.subscribe(requested) as queue:
        # Whichever side ends first closes the subscription
        tasks = {
            asyncio.create_task(forward_changes(websocket, queue)),
            asyncio.create_task(wait_for_disconnect(websocket)),
        }
        done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        try:
            for task in done:
                task.result()
        except WebSocketDisconnect:
            logger.debug("Change feed client for %s left during a send", sorted(requested))
    logger.debug("Change feed subscriber for %s disconnected", sorted(requested))
