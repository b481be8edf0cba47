import asyncio
import contextlib
import json
import socket

import pytest
import websockets

from suiarb.shio_conn import new_shio_conn
from suiarb.types import ShioItemKind

TIMEOUT = 5


async def _stop_conn_tasks():
    tasks = [t for t in asyncio.all_tasks() if t.get_name() == "shio-conn"]
    for task in tasks:
        task.cancel()
    await asyncio.gather(*tasks, return_exceptions=True)


@contextlib.asynccontextmanager
async def _feed_server(outgoing=(), handler=None):
    received = asyncio.Queue()

    async def default_handler(ws):
        for message in outgoing:
            await ws.send(message)
        async for message in ws:
            await received.put(message)

    async with websockets.serve(handler or default_handler, "127.0.0.1", 0) as server:
        port = server.sockets[0].getsockname()[1]
        try:
            yield f"ws://127.0.0.1:{port}", received
        finally:
            await _stop_conn_tasks()


def _closed_port_url():
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"ws://127.0.0.1:{port}"


def _auction_ended(digest, amount):
    return json.dumps({"auctionEnded": {"txDigest": digest, "winningBidAmount": amount}})


@pytest.mark.asyncio
async def test_text_messages_become_items():
    async with _feed_server([_auction_ended("digestA", 42)]) as (url, _):
        _, items = await new_shio_conn(url, 0)
        item = await asyncio.wait_for(items.get(), TIMEOUT)
        assert item.kind is ShioItemKind.AUCTION_ENDED
        assert item.tx_digest == "digestA"
        assert item.winning_bid_amount == 42


@pytest.mark.asyncio
async def test_invalid_json_is_skipped():
    async with _feed_server(["not json", _auction_ended("digestB", 1)]) as (url, _):
        _, items = await new_shio_conn(url, 0)
        item = await asyncio.wait_for(items.get(), TIMEOUT)
        assert item.tx_digest == "digestB"
        assert items.empty()


@pytest.mark.asyncio
async def test_unknown_message_becomes_dummy():
    async with _feed_server([json.dumps({"hello": 1})]) as (url, _):
        _, items = await new_shio_conn(url, 0)
        item = await asyncio.wait_for(items.get(), TIMEOUT)
        assert item.kind is ShioItemKind.DUMMY
        assert item.raw == {"hello": 1}


@pytest.mark.asyncio
async def test_bids_are_sent_as_compact_sorted_json():
    async with _feed_server() as (url, received):
        bids, items = await new_shio_conn(url, 0)
        await bids.put({"b": "x", "a": 1})
        message = await asyncio.wait_for(received.get(), TIMEOUT)
        assert message == '{"a":1,"b":"x"}'
        assert bids.qsize() == 0
        assert items.qsize() == 0


@pytest.mark.asyncio
async def test_connection_failure_after_retries():
    _, items = await new_shio_conn(_closed_port_url(), 0)
    error = await asyncio.wait_for(items.get(), TIMEOUT)
    assert isinstance(error, ConnectionError)
    assert "after 0 retries" in str(error)


@pytest.mark.asyncio
async def test_binary_message_stops_connection():
    async with _feed_server([b"\x01\x02"]) as (url, _):
        _, items = await new_shio_conn(url, 0)
        error = await asyncio.wait_for(items.get(), TIMEOUT)
        assert isinstance(error, RuntimeError)
        assert "unexpected websocket message" in str(error)


@pytest.mark.asyncio
async def test_server_close_stops_connection():
    async def closing_handler(ws):
        await ws.close()

    async with _feed_server(handler=closing_handler) as (url, _):
        _, items = await new_shio_conn(url, 0)
        error = await asyncio.wait_for(items.get(), TIMEOUT)
        assert isinstance(error, RuntimeError)
        assert "close" in str(error)