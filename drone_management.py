import logging
import math
import re
from dataclasses import dataclass, field, replace

from config import DEFAULT_PAYLOAD_KG

logger = logging.getLogger(__name__)

ORDER_PENDING = "Pending"
ORDER_APPROVED = "Approved"
ORDER_IN_FLIGHT = "InFlight"
ORDER_DELIVERED = "Delivered"
ORDER_STATUSES = (ORDER_PENDING, ORDER_APPROVED, ORDER_IN_FLIGHT, ORDER_DELIVERED)

AIRCRAFT_IDLE = "Idle"
AIRCRAFT_IN_FLIGHT = "InFlight"
AIRCRAFT_LANDING = "Landing"
AIRCRAFT_CHARGING = "Charging"

MODE_MANUAL = "Manual"
MODE_SEMI_AUTO = "Semi-Auto"
MODE_AUTO = "Auto"

PHASE_IDLE = "Idle"
PHASE_ACQUIRING = "Acquiring"
PHASE_RUNNING = "Running"
PHASE_COMPLETED = "Completed"

_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


@dataclass
class Order:
    """A delivery request: package, weight text, pickup -> delivery, lifecycle status."""
    id: str
    package_type: str
    weight: str
    pickup: str
    delivery: str
    status: str = ORDER_PENDING

    def copy(self):
        return replace(self)

    def to_dict(self):
        return {
            "id": self.id,
            "packageType": self.package_type,
            "weight": self.weight,
            "pickup": self.pickup,
            "delivery": self.delivery,
            "status": self.status,
        }


@dataclass
class AircraftState:
    """The one physical drone: power, payload, status and radio telemetry."""
    battery: float = 87.0
    payload_weight: float = 0.0
    max_payload: float = 5.0
    status: str = AIRCRAFT_IDLE
    mode: str = MODE_SEMI_AUTO
    signal: float = 98.0
    satellites: int = 12
    camera_active: bool = True
    speed: float = 0.0

    def copy(self):
        return replace(self)

    def to_dict(self):
        return {
            "battery": self.battery,
            "payloadWeight": self.payload_weight,
            "maxPayload": self.max_payload,
            "status": self.status,
            "mode": self.mode,
            "signal": self.signal,
            "satellites": self.satellites,
            "cameraActive": self.camera_active,
            "speed": self.speed,
        }


@dataclass
class MissionState:
    """Current or most recent mission run. Route points are (lng, lat)."""
    progress: float = 0.0
    elapsed: int = 0
    eta: float = 0.0
    distance: float = 0.0
    altitude: float = 150.0
    speed: float = 0.0
    route_progress: float = 0.0
    route: list = field(default_factory=list)

    def copy(self):
        return replace(self, route=[tuple(p) for p in self.route])

    def to_dict(self):
        return {
            "progress": self.progress,
            "elapsed": self.elapsed,
            "eta": self.eta,
            "distance": self.distance,
            "altitude": self.altitude,
            "speed": self.speed,
            "routeProgress": self.route_progress,
            "route": [list(p) for p in self.route],
        }


def parse_weight(weight_text, default=DEFAULT_PAYLOAD_KG):
    """
    Reads the leading number out of a weight label such as "2.4 kg".
    Anything unreadable, zero, negative or non-finite yields `default`. Never raises.
    """
    if isinstance(weight_text, (int, float)) and not isinstance(weight_text, bool):
        value = float(weight_text)
    elif isinstance(weight_text, str):
        match = _LEADING_NUMBER.match(weight_text)
        if not match:
            logger.debug("[parse_weight] unreadable weight %r, using %.1f kg", weight_text, default)
            return default
        value = float(match.group(1))
    else:
        return default

    if not math.isfinite(value) or value <= 0:
        return default
    return value
