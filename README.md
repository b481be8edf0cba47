# suiarb

Asyncio building blocks for arbitrage bots on the Sui network.

## What is in the package

- `suiarb.shio_conn` – `new_shio_conn(wss_url, num_retries)` starts a
  background task that keeps a websocket connection to the Shio feed open.
  It returns two `asyncio.Queue`s: one for outgoing bids (any JSON-serialisable
  value) and one of incoming `ShioItem`s. Failed connection attempts are
  retried every 5 seconds; after `num_retries` failures in a row, or when the
  server sends a close or binary frame, the connection stops and the
  exception is put on the item queue.
- `suiarb.shio_collector` – `ShioCollector` wraps the item queue as an async
  stream (`get_event_stream()`), raising `RuntimeError` if the feed stops.
  `ShioCollector.new_without_executor(url, num_retries)` opens a read-only
  connection.
- `suiarb.shio_executor` – `ShioExecutor` signs a transaction and puts the
  bid on the feed's bid queue; `ShioRPCExecutor` posts it as a
  `shio_submitBid` JSON-RPC call and logs the response.
  `new_shio_collector_and_executor(keypair, feed_url, num_retries)` creates
  both halves over one connection. The module also holds `SHIO_FEED_URL`,
  `SHIO_JSON_RPC_URL` and `SHIO_GLOBAL_STATES`.
- `suiarb.signing` – `SuiKeyPair` (Ed25519 from a 32-byte seed) whose
  `sign()` returns base64 of flag, signature and public key;
  `intent_message_digest`, `sign_transaction` and `base58_encode`.
  Transactions are passed as already BCS-encoded bytes.
- `suiarb.types` – `parse_shio_item` turns a decoded JSON message into a
  `ShioItem` of kind `auctionStarted`, `auctionEnded`, or `dummy` for
  anything that does not match; with `ShioEvent`, `ShioObject`,
  `SideEffects` and friends.
- `suiarb.simulation` – `SimEpoch`, `SimulateCtx`, `SimulateResult` and the
  abstract `Simulator` base class.
- `suiarb.coin` – `CoinApi` reads coins with `suix_getCoins`;
  `get_coins`, `get_coin`, `get_gas_coin_refs`, `is_native_coin` and
  `format_sui_with_symbol`.
- `suiarb.move_value` – `MoveValue`, `MoveStruct` and typed extractors
  (`extract_u64`, `extract_struct`, `extract_u128_vec`, …) that raise
  `MoveValueError`; `shared_obj_arg` builds a `SharedObjectArg`.
- `suiarb.link` – Markdown explorer links: `tx_link`, `object_link`,
  `account_link`, `coin_link`, `checkpoint_link`.
- `suiarb.version` – `build_version()` reads branch, commit, date and dirty
  state from `git`.
- `suiarb.runtime` – `set_panic_hook(notifier)` reports uncaught exceptions
  (in any thread) to the log and to an optional `notifier(cmdline, message)`
  callable, with long command-line arguments redacted; `current_time_ms()`;
  `start_heartbeat(service_id, interval)`.

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Example: watching auctions and bidding

```python
import asyncio

from suiarb.shio_executor import new_shio_collector_and_executor
from suiarb.signing import SuiKeyPair


async def main():
    keypair = SuiKeyPair(bytes(32))  # use your own 32-byte seed
    collector, executor = await new_shio_collector_and_executor(keypair, None, None)

    async for item in collector.get_event_stream():
        if item.type_name() == "auctionStarted":
            print(item.digest(), item.effective_gas_price(), item.deadline())
            # build and BCS-encode a transaction, then:
            # await executor.execute((tx_bytes, bid_amount, item.digest()))


asyncio.run(main())
```

`ShioItem.created_mutated_objects()` returns the objects the opportunity
transaction creates or mutates, and `ShioItem.events()` its events.

## Example: coin and link helpers

```python
from suiarb.coin import format_sui_with_symbol, is_native_coin
from suiarb.link import coin_link

print(format_sui_with_symbol(1_500_000_000))   # 1.5 SUI
print(is_native_coin("0x2::sui::SUI"))          # True
print(coin_link("0x2::sui::SUI", None))
```

## Reading Move structs

```python
from suiarb.move_value import MoveKind, MoveStruct, MoveValue, extract_u64

pool = MoveStruct("Pool", (("fee_rate", MoveValue(MoveKind.U64, 3000)),))
fee = extract_u64(pool, "fee_rate")   # 3000
```

The extractors raise `MoveValueError` when the field is missing or holds a
different kind of value.

## What the package does not do

- There is no concrete simulator: `Simulator` is only an abstract interface,
  and nothing here executes transactions against chain state.
- It does not build or BCS-encode transactions; executors take the encoded
  bytes.
- There is no command-line program and no bot loop; the pieces are meant to be
  wired together by your own code.
- `set_panic_hook` sends nowhere by itself; pass a `notifier` to deliver
  reports. The heartbeat worker only logs that it started.