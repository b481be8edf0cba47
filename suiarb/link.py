"""Markdown links to the block explorer."""

from __future__ import annotations

SCAN_URL = "https://suiscan.xyz/mainnet"


def tx_link(digest: str, tag: str | None = None) -> str:
    return f"[{tag if tag is not None else digest}]({SCAN_URL}/tx/{digest})"


def object_link(object_id: str, tag: str | None = None) -> str:
    return f"[{tag if tag is not None else object_id}]({SCAN_URL}/object/{object_id})"


def account_link(address: str, tag: str | None = None) -> str:
    return f"[{tag if tag is not None else address}]({SCAN_URL}/account/{address}/portfolio)"


def coin_link(coin_type: str, tag: str | None = None) -> str:
    return f"[{tag if tag is not None else coin_type}]({SCAN_URL}/coin/{coin_type}/txs)"


def checkpoint_link(digest: str, number: int) -> str:
    return f"[{number}]({SCAN_URL}/checkpoint/{digest})"