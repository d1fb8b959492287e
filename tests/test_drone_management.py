import pytest

from drone_management import AircraftState, MissionState, Order, parse_weight


@pytest.mark.parametrize("text, expected", [
    ("2.4 kg", 2.4),
    ("0.5 kg", 0.5),
    ("4", 4.0),
    ("  3.1kg", 3.1),
    (".75 kg", 0.75),
    ("1e1 kg", 10.0),
    (1.2, 1.2),
])
def test_parse_weight_reads_leading_number(text, expected):
    assert parse_weight(text) == pytest.approx(expected)


@pytest.mark.parametrize("text", [
    "heavy", "", "kg 2.4", "0 kg", "-1 kg", None, [], "1e999 kg", True,
])
def test_parse_weight_defaults(text):
    assert parse_weight(text) == 2.0


def test_parse_weight_custom_default():
    assert parse_weight("n/a", default=1.0) == 1.0


def test_order_to_dict():
    order = Order("ORD-1", "Documents", "0.5 kg", "HQ Tower", "Branch Office F")
    assert order.to_dict() == {
        "id": "ORD-1",
        "packageType": "Documents",
        "weight": "0.5 kg",
        "pickup": "HQ Tower",
        "delivery": "Branch Office F",
        "status": "Pending",
    }


def test_initial_aircraft_state():
    craft = AircraftState()
    assert craft.to_dict() == {
        "battery": 87.0,
        "payloadWeight": 0.0,
        "maxPayload": 5.0,
        "status": "Idle",
        "mode": "Semi-Auto",
        "signal": 98.0,
        "satellites": 12,
        "cameraActive": True,
        "speed": 0.0,
    }


def test_initial_mission_state():
    mission = MissionState()
    assert mission.to_dict() == {
        "progress": 0.0,
        "elapsed": 0,
        "eta": 0.0,
        "distance": 0.0,
        "altitude": 150.0,
        "speed": 0.0,
        "routeProgress": 0.0,
        "route": [],
    }


def test_mission_copy_is_independent():
    mission = MissionState(route=[(1.0, 2.0)])
    clone = mission.copy()
    clone.route.append((3.0, 4.0))
    clone.progress = 50
    assert mission.route == [(1.0, 2.0)]
    assert mission.progress == 0
