import time

import pytest

from suiarb.simulation import SimEpoch, SimulateCtx, SimulateResult, Simulator


class _EchoSimulator(Simulator):
    def __init__(self):
        self.objects = {"0x1": {"balance": 5}}

    async def simulate(self, tx, ctx):
        return SimulateResult(effects={"tx": tx}, events=[], balance_changes=[ctx.epoch.gas_price])

    async def get_object(self, obj_id):
        return self.objects.get(obj_id)

    def name(self):
        return "EchoSimulator"


def test_default_ctx():
    ctx = SimulateCtx()
    assert ctx.epoch == SimEpoch()
    assert ctx.override_objects == []
    assert ctx.borrowed_coin is None


def test_with_gas_price_and_borrowed_coin():
    ctx = SimulateCtx(SimEpoch(epoch_id=3, gas_price=750), ["obj"])
    ctx.with_gas_price(1000)
    ctx.with_borrowed_coin(("coin", 42))
    assert ctx.epoch.gas_price == 1000
    assert ctx.epoch.epoch_id == 3
    assert ctx.borrowed_coin == ("coin", 42)
    assert ctx.override_objects == ["obj"]


def test_default_ctx_epochs_are_independent():
    a, b = SimulateCtx(), SimulateCtx()
    a.with_gas_price(9)
    assert b.epoch.gas_price == SimEpoch().gas_price


def test_from_system_state():
    summary = {
        "epoch": "500",
        "epochStartTimestampMs": "1700000000000",
        "epochDurationMs": "86400000",
        "referenceGasPrice": "750",
    }
    epoch = SimEpoch.from_system_state(summary)
    assert epoch == SimEpoch(500, 1700000000000, 86400000, 750)


def test_is_stale_compares_with_epoch_end():
    now_ms = int(time.time() * 1000)
    assert SimEpoch(epoch_start_timestamp=now_ms, epoch_duration_ms=3_600_000).is_stale()
    assert not SimEpoch(epoch_start_timestamp=now_ms - 7_200_000, epoch_duration_ms=3_600_000).is_stale()


def test_simulator_is_abstract():
    with pytest.raises(TypeError):
        Simulator()


@pytest.mark.asyncio
async def test_simulator_subclass():
    sim = _EchoSimulator()
    ctx = SimulateCtx(SimEpoch(gas_price=750))
    result = await sim.simulate("tx-bytes", ctx)
    assert result.effects == {"tx": "tx-bytes"}
    assert result.balance_changes == [750]
    assert result.cache_misses == 0
    assert await sim.get_object("0x1") == {"balance": 5}
    assert sim.name() == "EchoSimulator"
    assert sim.get_object_layout("0x1") is None