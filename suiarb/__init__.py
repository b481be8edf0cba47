"""Asyncio building blocks for Sui arbitrage: Shio feed and bids, signing, simulation interfaces and utilities."""

__version__ = "0.1.0"