"""
Mission engine: order registry, the one drone, and the mission tick loop behind a single lock.

Lifecycle of a mission attempt: Idle -> Acquiring (route fetch) -> Running (ticking)
-> Completed, which collapses straight back to Idle. Only one order can hold the
active-mission slot at a time; every precondition failure is a silent no-op.
"""
import logging
import math
import random
import threading
from dataclasses import dataclass

from config import SimulationSettings
from drone_management import (
    AircraftState, MissionState, parse_weight,
    ORDER_APPROVED, ORDER_IN_FLIGHT, ORDER_DELIVERED,
    AIRCRAFT_IDLE, AIRCRAFT_IN_FLIGHT,
    PHASE_IDLE, PHASE_ACQUIRING, PHASE_RUNNING, PHASE_COMPLETED,
)
from drone_scheduler import DroneScheduler
from locations import resolve_location
from order_registry import OrderRegistry
from path_planning import RoutePlanner, position_on_route
from telemetry import TelemetrySimulator

logger = logging.getLogger(__name__)


@dataclass
class TickOutcome:
    mission: MissionState
    aircraft: AircraftState
    completed: bool


def round_half_up(value):
    """Rounds .5 upwards (2.5 -> 3, -2.5 -> -2) instead of to the even neighbour."""
    return math.floor(value + 0.5)


def estimate_eta_seconds(distance_km, cruise_speed_kmh):
    """Whole minutes at cruise speed, expressed in seconds."""
    return round_half_up(distance_km / cruise_speed_kmh * 60) * 60


def advance_mission(mission, aircraft, telemetry, rng, settings):
    """
    One tick of a running mission. Pure with respect to its inputs: returns new states.
    Progress moves a fixed step per tick regardless of distance; the eta uses the
    configured cruise speed, never the jittered display speed.
    """
    nxt = mission.copy()
    nxt.progress = min(mission.progress + settings.progress_step, 100.0)
    nxt.route_progress = nxt.progress / 100
    nxt.elapsed = mission.elapsed + 1

    total_time = mission.distance / (settings.cruise_speed_kmh / 3600)
    nxt.eta = max(0.0, total_time * (1 - nxt.route_progress))
    nxt.altitude = round_half_up(
        settings.cruise_altitude_m + settings.altitude_amplitude_m * math.sin(nxt.elapsed * 0.3)
    )
    nxt.speed = round_half_up(40 + rng.random() * 6)

    craft = telemetry.advance(aircraft)

    completed = nxt.progress >= 100
    if completed:
        nxt.progress = 100.0
        nxt.route_progress = 1.0
        nxt.eta = 0.0
        nxt.speed = 0
        craft.status = AIRCRAFT_IDLE
        craft.payload_weight = 0.0
        craft.speed = 0.0
    return TickOutcome(mission=nxt, aircraft=craft, completed=completed)


class MissionEngine:
    """Owns all simulation state; presentation code holds a reference to one engine."""
    def __init__(
        self,
        registry=None,
        route_planner=None,
        telemetry=None,
        rng=None,
        settings=None,
        scheduler=None,
    ):
        self.settings = settings or SimulationSettings()
        self._rng = rng or random.Random()
        self._registry = registry if registry is not None else OrderRegistry()
        self._route_planner = route_planner or RoutePlanner(
            fallback_distance_km=self.settings.fallback_distance_km
        )
        self._telemetry = telemetry or TelemetrySimulator(rng=self._rng)
        self._scheduler = scheduler or DroneScheduler(self.tick, self.settings.tick_interval_s)

        self._aircraft = AircraftState()
        self._mission = MissionState(altitude=self.settings.cruise_altitude_m)
        self._active_order_id = None
        self._reserved_order_id = None
        self._phase = PHASE_IDLE
        self._lock = threading.RLock()

    # -- order registry -------------------------------------------------

    def approve_order(self, order_id):
        with self._lock:
            return self._registry.approve(order_id)

    def reject_order(self, order_id):
        with self._lock:
            if order_id == self._active_order_id:
                logger.warning("[reject_order] %s is the active mission's order", order_id)
            return self._registry.reject(order_id)

    def add_order(self, order):
        with self._lock:
            return self._registry.add(order)

    # -- mission control ------------------------------------------------

    def start_mission(self, order_id):
        """
        Starts flying an Approved order. Returns False without touching any state when
        the order is unknown, not Approved, has unknown locations, or another mission
        is active or being acquired.
        """
        with self._lock:
            order = self._registry.get(order_id)
            if order is None or order.status != ORDER_APPROVED:
                logger.info("[start_mission] %s is not an approved order", order_id)
                return False
            if self._active_order_id is not None or self._phase != PHASE_IDLE:
                logger.info("[start_mission] busy with %s, ignoring %s",
                            self._active_order_id or self._reserved_order_id, order_id)
                return False
            pickup = resolve_location(order.pickup)
            delivery = resolve_location(order.delivery)
            if pickup is None or delivery is None:
                logger.info("[start_mission] %s has an unknown location (%s -> %s)",
                            order_id, order.pickup, order.delivery)
                return False
            self._phase = PHASE_ACQUIRING
            self._reserved_order_id = order_id
            reserved_legs = (order.pickup, order.delivery)

        try:
            planned = self._route_planner.plan_route(pickup, delivery)
        except BaseException:
            with self._lock:
                self._reserved_order_id = None
                self._phase = PHASE_IDLE
            raise

        with self._lock:
            self._reserved_order_id = None
            order = self._registry.get(order_id)
            if (order is None or order.status != ORDER_APPROVED
                    or (order.pickup, order.delivery) != reserved_legs):
                # rejected, or replaced under the same id, while the route was being fetched
                self._phase = PHASE_IDLE
                return False

            cruise = self.settings.cruise_speed_kmh
            distance = planned.distance_km
            eta = estimate_eta_seconds(distance, cruise)

            self._active_order_id = order_id
            self._registry.set_status(order_id, ORDER_IN_FLIGHT)
            self._aircraft.status = AIRCRAFT_IN_FLIGHT
            self._aircraft.payload_weight = parse_weight(order.weight, self.settings.default_payload_kg)
            self._aircraft.speed = cruise
            self._mission = MissionState(
                progress=0.0,
                elapsed=0,
                eta=eta,
                distance=distance,
                altitude=self.settings.cruise_altitude_m,
                speed=cruise,
                route_progress=0.0,
                route=[tuple(p) for p in planned.coordinates],
            )
            self._phase = PHASE_RUNNING

        logger.info("[start_mission] %s airborne: %.2f km, eta %ds%s",
                    order_id, distance, eta, " (straight-line fallback)" if planned.fallback else "")
        self._scheduler.start()
        return True

    def tick(self):
        """Applies one tick. Returns True while the mission keeps running."""
        with self._lock:
            if self._phase != PHASE_RUNNING or self._active_order_id is None:
                return False
            outcome = advance_mission(
                self._mission, self._aircraft, self._telemetry, self._rng, self.settings
            )
            self._mission = outcome.mission
            self._aircraft = outcome.aircraft
            if not outcome.completed:
                return True

            order_id = self._active_order_id
            self._registry.set_status(order_id, ORDER_DELIVERED)
            self._active_order_id = None
            self._phase = PHASE_COMPLETED
            logger.info("[tick] %s delivered after %d ticks, battery %.1f%%",
                        order_id, self._mission.elapsed, self._aircraft.battery)
            # stop the loop before the gate reopens so the next start_mission gets a fresh one
            self._scheduler.stop(wait=False)
            self._phase = PHASE_IDLE
        return False

    def shutdown(self):
        self._scheduler.stop()

    # -- read surface ---------------------------------------------------

    @property
    def phase(self):
        with self._lock:
            return self._phase

    @property
    def active_order_id(self):
        with self._lock:
            return self._active_order_id

    def orders(self):
        with self._lock:
            return self._registry.list()

    def get_order(self, order_id):
        with self._lock:
            return self._registry.get(order_id)

    def aircraft(self):
        with self._lock:
            return self._aircraft.copy()

    def mission(self):
        with self._lock:
            return self._mission.copy()

    def current_position(self):
        """(lng, lat) of the drone along the current route, or None without a route."""
        with self._lock:
            if not self._mission.route:
                return None
            return position_on_route(self._mission.route, self._mission.route_progress)

    def snapshot(self):
        with self._lock:
            return {
                "orders": [o.to_dict() for o in self._registry.list()],
                "aircraft": self._aircraft.to_dict(),
                "mission": self._mission.to_dict(),
                "activeMissionOrderId": self._active_order_id,
                "phase": self._phase,
            }
