import pytest

from path_planning import RoutePlanner, position_on_route

PICKUP = (-122.4194, 37.7749)
DELIVERY = (-122.4094, 37.7849)


def test_position_on_empty_route():
    assert position_on_route([], 0.5) == (0.0, 0.0)


def test_position_on_single_point_route():
    assert position_on_route([(1.5, 2.5)], 0.7) == (1.5, 2.5)


@pytest.mark.parametrize("route", [
    [PICKUP, DELIVERY],
    [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (3.0, 2.0), (4.0, 4.0)],
    [(-122.4194, 37.7749), (-122.41, 37.78), (-122.4094, 37.7849)],
])
def test_position_endpoints_are_exact(route):
    assert position_on_route(route, 0.0) == route[0]
    assert position_on_route(route, 1.0) == route[-1]


def test_segments_share_progress_equally():
    """A short and a long segment each get half of the progress range."""
    route = [(0.0, 0.0), (1.0, 0.0), (11.0, 0.0)]
    assert position_on_route(route, 0.5) == (1.0, 0.0)
    assert position_on_route(route, 0.25) == pytest.approx((0.5, 0.0))
    assert position_on_route(route, 0.75) == pytest.approx((6.0, 0.0))


def test_position_clamps_out_of_range_progress():
    route = [(0.0, 0.0), (2.0, 2.0)]
    assert position_on_route(route, -0.5) == (0.0, 0.0)
    assert position_on_route(route, 1.5) == (2.0, 2.0)


def test_plan_route_uses_provider(directions):
    planner = RoutePlanner(directions)
    planned = planner.plan_route(PICKUP, DELIVERY)
    assert planned.fallback is False
    assert planned.distance_km == pytest.approx(8.0)
    assert len(planned.coordinates) == 5
    assert directions.calls == [(PICKUP, DELIVERY)]


def test_plan_route_falls_back_on_provider_error(failing_directions):
    planned = RoutePlanner(failing_directions).plan_route(PICKUP, DELIVERY)
    assert planned.fallback is True
    assert planned.coordinates == [PICKUP, DELIVERY]
    assert planned.distance_km == 10


def test_plan_route_falls_back_on_unexpected_error():
    class Exploding:
        def get_route(self, start, end):
            raise KeyError("routes")

    planned = RoutePlanner(Exploding()).plan_route(PICKUP, DELIVERY)
    assert planned.fallback is True
    assert planned.coordinates == [PICKUP, DELIVERY]


def test_plan_route_without_provider():
    planned = RoutePlanner(None, fallback_distance_km=4).plan_route(PICKUP, DELIVERY)
    assert planned.fallback is True
    assert planned.distance_km == 4
