import asyncio

import pytest

from relay.repositories import RoomRegistry
from relay.services.angle_aggregator import AngleAggregator

CODE = 424242424


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def registry(scheduler):
    return RoomRegistry(scheduler=scheduler)


@pytest.fixture
def aggregator(registry, clock):
    return AngleAggregator(registry, clock=clock, interval_ms=150, valid_ms=500)


def test_defaults_come_from_environment(monkeypatch, registry):
    monkeypatch.setenv("ANGLE_INTERVAL_MS", "40")
    monkeypatch.setenv("ANGLE_VALID_MS", "250")

    aggregator = AngleAggregator(registry)

    assert aggregator.interval_ms == 40.0
    assert aggregator.window == 0.25


def test_explicit_zero_is_not_replaced_by_environment(monkeypatch, registry):
    monkeypatch.setenv("ANGLE_INTERVAL_MS", "40")
    monkeypatch.setenv("ANGLE_VALID_MS", "250")

    aggregator = AngleAggregator(registry, interval_ms=150, valid_ms=0)

    assert aggregator.interval_ms == 150
    assert aggregator.valid_ms == 0
    assert aggregator.window == 0.0


def test_tick_averages_fresh_samples(registry, aggregator, clock, connection):
    presenter = connection("presenter")
    registry.create_room(CODE, presenter)
    registry.record_angle(CODE, connection("a"), 10.0, now=0.0)
    registry.record_angle(CODE, connection("b"), 30.0, now=0.0)

    clock.now = 0.1
    assert aggregator.tick(CODE) == pytest.approx(20.0)
    assert presenter.sent == [{"source": "server", "event": "motion", "angle": 20.0}]


def test_tick_sends_nothing_once_samples_are_stale(registry, aggregator, clock, connection):
    presenter = connection("presenter")
    registry.create_room(CODE, presenter)
    registry.record_angle(CODE, connection("a"), 10.0, now=0.0)
    registry.record_angle(CODE, connection("b"), 30.0, now=0.0)

    clock.now = 0.6
    assert aggregator.tick(CODE) is None
    assert presenter.sent == []


def test_tick_is_noop_for_vanished_room(registry, aggregator, connection):
    presenter = connection("presenter")
    registry.create_room(CODE, presenter)
    registry.record_angle(CODE, connection("a"), 10.0, now=0.0)
    registry.remove_connection(presenter)

    assert aggregator.tick(CODE) is None
    assert presenter.sent == []


def test_tick_tolerates_closed_presenter(registry, aggregator, connection):
    presenter = connection("presenter", closed=True)
    registry.create_room(CODE, presenter)
    registry.record_angle(CODE, connection("a"), 10.0, now=0.0)

    assert aggregator.tick(CODE) == pytest.approx(10.0)


@pytest.mark.asyncio
async def test_start_runs_until_stopped(connection):
    registry = RoomRegistry()
    aggregator = AngleAggregator(registry, interval_ms=10, valid_ms=10_000)
    registry.set_scheduler(aggregator.start)
    presenter = connection("presenter")
    registry.create_room(CODE, presenter)
    registry.record_angle(CODE, connection("a"), 5.0, now=aggregator.clock())

    await asyncio.sleep(0.1)
    assert presenter.sent
    assert all(m == {"source": "server", "event": "motion", "angle": 5.0} for m in presenter.sent)

    ticker = registry.get(CODE).ticker
    registry.remove_connection(presenter)
    assert not ticker.is_running()
    count = len(presenter.sent)
    await asyncio.sleep(0.05)
    assert len(presenter.sent) == count
