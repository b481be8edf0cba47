"""Simulation context, results and the simulator interface."""

from __future__ import annotations

import abc
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, ClassVar


@dataclass
class SimEpoch:
    epoch_id: int = 0
    epoch_start_timestamp: int = 0
    epoch_duration_ms: int = 0
    gas_price: int = 0

    @classmethod
    def from_system_state(cls, summary: Mapping[str, Any]) -> SimEpoch:
        """Build from a system state summary as returned by the JSON-RPC API."""
        return cls(
            epoch_id=int(summary["epoch"]),
            epoch_start_timestamp=int(summary["epochStartTimestampMs"]),
            epoch_duration_ms=int(summary["epochDurationMs"]),
            gas_price=int(summary["referenceGasPrice"]),
        )

    def is_stale(self) -> bool:
        now_ms = time.time_ns() // 1_000_000
        return now_ms < self.epoch_start_timestamp + self.epoch_duration_ms


@dataclass
class SimulateCtx:
    epoch: SimEpoch = field(default_factory=SimEpoch)
    override_objects: list[Any] = field(default_factory=list)
    # (coin, amount) assumed to be held, e.g. flash-loaned, during execution
    borrowed_coin: tuple[Any, int] | None = None

    def with_borrowed_coin(self, borrowed_coin: tuple[Any, int]) -> None:
        self.borrowed_coin = borrowed_coin

    def with_gas_price(self, gas_price: int) -> None:
        self.epoch.gas_price = gas_price


@dataclass
class SimulateResult:
    effects: Any
    events: Any
    object_changes: list[Any] = field(default_factory=list)
    balance_changes: list[Any] = field(default_factory=list)
    cache_misses: int = 0


class Simulator(abc.ABC):
    """Executes transactions against some view of chain state."""

    # Known struct layouts by object id; subclasses that can resolve layouts
    # provide their own mapping or override get_object_layout.
    object_layouts: ClassVar[Mapping[str, Any]] = MappingProxyType({})

    @abc.abstractmethod
    async def simulate(self, tx: Any, ctx: SimulateCtx) -> SimulateResult:
        ...

    @abc.abstractmethod
    async def get_object(self, obj_id: str) -> Any | None:
        ...

    @abc.abstractmethod
    def name(self) -> str:
        ...

    def get_object_layout(self, obj_id: str) -> Any | None:
        """Return the struct layout of an object, or None if it is not known."""
        return self.object_layouts.get(obj_id)