"""
End-to-end packaging cycles on the real asyncio clock with shortened timings,
plus the command line launcher.

Run with: pytest tests/integration -v
"""
import asyncio
import logging
from datetime import datetime, timedelta

import pytest

import main as cli
from vacpack import (
    OutcomeStatus,
    PackagingMachine,
    PackagingMaterial,
    PackagingSettings,
    Product,
    VacuumLevel,
)
from vacpack.abstractions.interfaces import AsyncioClock
from vacpack.process_flow.observers import LoggingStageObserver
from vacpack.step_flow.stages import StageTimings
from tests.fixtures.machine_fixtures import RecordingObserver

QUICK_TIMINGS = StageTimings(preheat_ms=5, vacuum_ms=5, nitrogen_flush_ms=5, cooldown_ms=5)


@pytest.fixture
def frozen_fish():
    now = datetime.now()
    return Product(
        name="Frozen fish fillet",
        weight=500,
        moisture=75,
        requires_refrigeration=True,
        packaging_date=now,
        expiry_date=now + timedelta(days=90),
    )


def _settings(material: PackagingMaterial) -> PackagingSettings:
    return PackagingSettings(
        material=material,
        vacuum_level=VacuumLevel.HIGH,
        sealing_temperature=150,
        sealing_time_ms=10,
        use_nitrogen_flushing=True,
    )


@pytest.mark.asyncio
async def test_high_barrier_cycle_succeeds(frozen_fish):
    observer = RecordingObserver()
    machine = PackagingMachine(clock=AsyncioClock(), timings=QUICK_TIMINGS, observers=[observer])

    outcome = await machine.start_packaging(frozen_fish, _settings(PackagingMaterial.HIGH_BARRIER))

    assert outcome.status is OutcomeStatus.SUCCESS
    assert outcome.completed_stages == ("preheat", "vacuum", "nitrogen_flush", "seal", "cooldown")
    assert machine.is_running is False
    assert observer.names[0] == "PackagingStartedEvent"
    assert observer.names[-1] == "PackagingFinishedEvent"


@pytest.mark.asyncio
async def test_pa_pe_cycle_rejected_before_any_stage(frozen_fish):
    observer = RecordingObserver()
    machine = PackagingMachine(clock=AsyncioClock(), timings=QUICK_TIMINGS, observers=[observer])

    outcome = await machine.start_packaging(frozen_fish, _settings(PackagingMaterial.PA_PE))

    assert outcome.status is OutcomeStatus.CONFIGURATION_REJECTED
    assert outcome.completed_stages == ()
    assert observer.names == ["PackagingRejectedEvent"]
    assert machine.is_running is False


@pytest.mark.asyncio
async def test_two_machines_run_independently(frozen_fish):
    settings = _settings(PackagingMaterial.AL_PE)
    first = PackagingMachine(machine_id="line-a", clock=AsyncioClock(), timings=QUICK_TIMINGS)
    second = PackagingMachine(machine_id="line-b", clock=AsyncioClock(), timings=QUICK_TIMINGS)

    outcomes = await asyncio.gather(
        first.start_packaging(frozen_fish, settings),
        second.start_packaging(frozen_fish, settings),
    )

    assert [o.status for o in outcomes] == [OutcomeStatus.SUCCESS, OutcomeStatus.SUCCESS]


@pytest.mark.asyncio
async def test_logging_observer_reports_each_stage(frozen_fish, caplog):
    test_logger = logging.getLogger("vacpack.test_observer")
    machine = PackagingMachine(
        clock=AsyncioClock(),
        timings=QUICK_TIMINGS,
        observers=[LoggingStageObserver(test_logger)],
    )

    with caplog.at_level(logging.INFO, logger="vacpack.test_observer"):
        await machine.start_packaging(frozen_fish, _settings(PackagingMaterial.HIGH_BARRIER))

    messages = [r.getMessage() for r in caplog.records if r.name == "vacpack.test_observer"]
    assert any("preheat started" in m and "temperature=150" in m for m in messages)
    assert any("cooldown done" in m for m in messages)
    assert "Packaging finished: success" in messages[-1]


class TestCommandLine:

    def test_default_demo_run_succeeds(self):
        assert cli.main(["--fast", "--sealing-time", "10"]) == 0

    def test_non_barrier_film_for_chilled_product_rejected(self):
        assert cli.main(["--fast", "--material", "PA_PE", "--refrigerated"]) == 2

    def test_ultra_vacuum_on_wet_product_rejected(self):
        assert cli.main(["--fast", "--vacuum", "ULTRA", "--moisture", "85"]) == 2

    def test_zero_sealing_time_rejected(self):
        assert cli.main(["--fast", "--sealing-time", "0"]) == 2

    def test_invalid_product_input_rejected(self):
        assert cli.main(["--fast", "--weight", "0"]) == 2

    def test_ambient_product_with_plain_film(self):
        assert cli.main(["--fast", "--ambient", "--material", "PET_PE", "--no-nitrogen",
                         "--sealing-time", "10"]) == 0
