"""Websocket connection to the Shio feed: bids go out, auction items come in."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

import websockets
from websockets.exceptions import ConnectionClosed

from .types import parse_shio_item

RETRY_DELAY_SECONDS = 5.0

_log = logging.getLogger(__name__)
_TASK_NAME = "shio-conn"
_background: set[asyncio.Task] = set()


class _UnexpectedMessage(RuntimeError):
    """The server sent a frame the feed protocol does not allow."""


def _encode_bid(bid: Any) -> str:
    return json.dumps(bid, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


async def _pump_bids(ws: Any, bids: asyncio.Queue) -> None:
    while True:
        bid = await bids.get()
        try:
            await ws.send(_encode_bid(bid))
        except (ConnectionClosed, OSError) as exc:
            _log.error("fail to send message to ws server: %s", exc)
            return


async def _pump_items(ws: Any, items: asyncio.Queue) -> None:
    while True:
        try:
            message = await ws.recv()
        except ConnectionClosed as exc:
            if exc.rcvd is not None:
                raise _UnexpectedMessage(f"unexpected websocket message: close {exc.rcvd}") from exc
            _log.error("error receiving websocket message: %s", exc)
            return
        except OSError as exc:
            _log.error("error receiving websocket message: %s", exc)
            return

        if isinstance(message, (bytes, bytearray)):
            raise _UnexpectedMessage(f"unexpected websocket message: binary ({len(message)} bytes)")
        try:
            value = json.loads(message)
        except json.JSONDecodeError as exc:
            _log.error("error parsing json: %s", exc)
            continue
        items.put_nowait(parse_shio_item(value))


async def _serve_connection(ws: Any, bids: asyncio.Queue, items: asyncio.Queue) -> None:
    pumps = [
        asyncio.create_task(_pump_bids(ws, bids)),
        asyncio.create_task(_pump_items(ws, items)),
    ]
    try:
        done, _ = await asyncio.wait(pumps, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for pump in pumps:
            pump.cancel()
        await asyncio.gather(*pumps, return_exceptions=True)
    for pump in done:
        error = pump.exception()
        if error is not None:
            raise error


async def _connect_forever(url: str, num_retries: int, bids: asyncio.Queue, items: asyncio.Queue) -> None:
    retry_count = 0
    while True:
        try:
            ws = await websockets.connect(url)
        except Exception as exc:
            _log.error("fail to connect to ws server: %s", exc)
            if retry_count == num_retries:
                raise ConnectionError(f"fail to connect to ws server after {num_retries} retries") from exc
            await asyncio.sleep(RETRY_DELAY_SECONDS)
            retry_count += 1
            continue

        retry_count = 0
        try:
            await _serve_connection(ws, bids, items)
        finally:
            try:
                await ws.close()
            except Exception:
                pass


async def _run(url: str, num_retries: int, bids: asyncio.Queue, items: asyncio.Queue) -> None:
    try:
        await _connect_forever(url, num_retries, bids, items)
    except Exception as exc:
        _log.error("shio feed connection stopped: %s", exc)
        items.put_nowait(exc)


async def new_shio_conn(wss_url: str, num_retries: int) -> tuple[asyncio.Queue, asyncio.Queue]:
    """Start the feed connection in the background.

    Returns a queue for outgoing bids (JSON-serialisable values) and a queue of
    incoming ShioItems. If the connection stops for good, the exception that
    stopped it is put on the item queue.
    """
    bids: asyncio.Queue = asyncio.Queue()
    items: asyncio.Queue = asyncio.Queue()
    task = asyncio.create_task(_run(wss_url, num_retries, bids, items), name=_TASK_NAME)
    _background.add(task)
    task.add_done_callback(_background.discard)
    return bids, items