"""Missions driven by the real DroneScheduler thread instead of hand-called ticks."""
import random
import time

import pytest

from config import SimulationSettings
from drone_management import ORDER_DELIVERED, PHASE_IDLE, AIRCRAFT_IDLE
from drone_scheduler import DroneScheduler
from mission_control import MissionEngine
from order_registry import OrderRegistry
from path_planning import RoutePlanner

TICKS_TO_COMPLETE = 67


def wait_for(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


def delivered(engine, order_id):
    return engine.get_order(order_id).status == ORDER_DELIVERED


@pytest.fixture
def threaded_engine(directions):
    engine = MissionEngine(
        registry=OrderRegistry(),
        route_planner=RoutePlanner(directions),
        rng=random.Random(3),
        settings=SimulationSettings(tick_interval_s=0.005),
    )
    yield engine
    engine.shutdown()


def start(engine, order_id):
    engine.approve_order(order_id)
    return engine.start_mission(order_id)


def test_two_missions_back_to_back(threaded_engine):
    engine = threaded_engine

    assert start(engine, "ORD-4821") is True
    assert wait_for(lambda: delivered(engine, "ORD-4821"))
    assert wait_for(lambda: not engine._scheduler.running)
    assert engine.phase == PHASE_IDLE
    assert engine.active_order_id is None
    assert engine.mission().elapsed == TICKS_TO_COMPLETE

    time.sleep(0.05)
    assert engine.mission().elapsed == TICKS_TO_COMPLETE

    assert start(engine, "ORD-4822") is True
    assert wait_for(lambda: delivered(engine, "ORD-4822"))
    assert wait_for(lambda: not engine._scheduler.running)
    assert engine.mission().elapsed == TICKS_TO_COMPLETE
    assert engine.mission().progress == 100
    assert engine.aircraft().status == AIRCRAFT_IDLE
    assert [o.id for o in engine.orders() if o.status == "InFlight"] == []


def test_mission_started_right_after_completion_keeps_ticking(threaded_engine):
    """A start landing on the loop thread the moment the gate reopens still gets a tick loop."""
    engine = threaded_engine
    holder = {"second": None}

    def tick_then_start_next():
        keep_going = engine.tick()
        if not keep_going and holder["second"] is None:
            holder["second"] = start(engine, "ORD-4822")
        return keep_going

    engine._scheduler = DroneScheduler(tick_then_start_next, interval=0.005)

    assert start(engine, "ORD-4821") is True
    assert wait_for(lambda: delivered(engine, "ORD-4821"))
    assert wait_for(lambda: holder["second"] is not None)
    assert holder["second"] is True

    assert wait_for(lambda: delivered(engine, "ORD-4822"))
    assert engine.mission().progress == 100
    assert engine.phase == PHASE_IDLE
    assert engine.active_order_id is None
    assert wait_for(lambda: not engine._scheduler.running)
