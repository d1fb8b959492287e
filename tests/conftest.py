import random

import pytest

from mapbox_helper import RouteProviderError
from mission_control import MissionEngine
from order_registry import OrderRegistry
from path_planning import RoutePlanner


class ManualScheduler:
    """Stands in for DroneScheduler; tests call engine.tick() themselves."""
    def __init__(self):
        self.start_calls = 0
        self.stop_calls = 0
        self.running = False

    def start(self):
        self.start_calls += 1
        self.running = True

    def stop(self, wait=True):
        self.stop_calls += 1
        self.running = False


class StubDirections:
    """Route provider returning a canned route, or raising when `error` is set."""
    def __init__(self, coords=None, distance_m=8000.0, error=None):
        self.coords = coords or [
            (-122.4194, 37.7749),
            (-122.4170, 37.7770),
            (-122.4150, 37.7800),
            (-122.4120, 37.7830),
            (-122.4094, 37.7849),
        ]
        self.distance_m = distance_m
        self.error = error
        self.calls = []

    def get_route(self, start, end):
        self.calls.append((start, end))
        if self.error is not None:
            raise self.error
        return list(self.coords), self.distance_m


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def directions():
    return StubDirections()


@pytest.fixture
def failing_directions():
    return StubDirections(error=RouteProviderError("network error"))


@pytest.fixture
def make_engine(scheduler):
    """Builds an engine with a seeded RNG and the manual scheduler."""
    def _make(maps_helper=None, orders=None, seed=7):
        return MissionEngine(
            registry=OrderRegistry(orders),
            route_planner=RoutePlanner(maps_helper),
            rng=random.Random(seed),
            scheduler=scheduler,
        )
    return _make


@pytest.fixture
def engine(make_engine, directions):
    return make_engine(maps_helper=directions)
