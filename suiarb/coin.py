"""Coin lookups over the JSON-RPC coin API."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

import httpx

SUI_COIN_TYPE = "0x2::sui::SUI"
MIST_PER_SUI = 1_000_000_000


@dataclass(frozen=True)
class Coin:
    coin_type: str
    coin_object_id: str
    version: int
    digest: str
    balance: int
    previous_transaction: str = ""

    @classmethod
    def _from_json(cls, data: dict[str, Any]) -> Coin:
        return cls(
            coin_type=data["coinType"],
            coin_object_id=data["coinObjectId"],
            version=int(data["version"]),
            digest=data["digest"],
            balance=int(data["balance"]),
            previous_transaction=data.get("previousTransaction", ""),
        )

    def object_ref(self) -> tuple[str, int, str]:
        return (self.coin_object_id, self.version, self.digest)


class CoinApi:
    """Reads coins owned by an address from a full node."""

    def __init__(self, rpc_url: str, client: httpx.Client | None = None) -> None:
        self.rpc_url = rpc_url
        self._client = client if client is not None else httpx.Client()

    def fetch_coins(self, owner: str, coin_type: str | None = None) -> list[Coin]:
        """Return the first page of coins of ``coin_type`` (SUI when omitted) owned by ``owner``."""
        payload = {
            "jsonrpc": "2.0",
            "id": 1,
            "method": "suix_getCoins",
            "params": [owner, coin_type, None, None],
        }
        response = self._client.post(self.rpc_url, json=payload)
        response.raise_for_status()
        body = response.json()
        if "error" in body:
            raise RuntimeError(f"suix_getCoins failed: {body['error']}")
        return [Coin._from_json(entry) for entry in body["result"]["data"]]


def get_gas_coin_refs(api: CoinApi, owner: str, exclude: str | None = None) -> list[tuple[str, int, str]]:
    return [coin.object_ref() for coin in api.fetch_coins(owner) if coin.coin_object_id != exclude]


def get_coins(api: CoinApi, owner: str, coin_type: str, min_balance: int = 0) -> list[Coin]:
    return [coin for coin in api.fetch_coins(owner, coin_type) if coin.balance >= min_balance]


def get_coin(api: CoinApi, owner: str, coin_type: str, min_balance: int = 0) -> Coin:
    coins = get_coins(api, owner, coin_type, min_balance)
    if not coins:
        raise LookupError(f"No coins with balance >= {min_balance}")
    return coins[0]


def is_native_coin(coin_type: str) -> bool:
    return coin_type == SUI_COIN_TYPE


def format_sui_with_symbol(value: int) -> str:
    amount = value / MIST_PER_SUI
    text = format(Decimal(repr(amount)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"{text} SUI"