import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from pydantic import BaseModel

from config import (
    MAPBOX_ACCESS_TOKEN, OPENROUTER_API_KEY, OPENROUTER_MODEL,
    ROUTE_REQUEST_TIMEOUT, LOG_LEVEL, API_HOST, API_PORT,
    SimulationSettings,
)
from drone_management import Order
from locations import LOCATION_COORDINATES
from mapbox_helper import MapboxDirectionsHelper
from mission_control import MissionEngine
from order_generation import OrderGenerator
from path_planning import RoutePlanner

logger = logging.getLogger(__name__)


class OrderCreateRequest(BaseModel):
    id: str
    packageType: str
    weight: str
    pickup: str
    delivery: str


def build_engine(settings=None):
    """Engine wired to Mapbox when a token is configured, straight-line routes otherwise."""
    settings = settings or SimulationSettings()
    maps_helper = None
    if MAPBOX_ACCESS_TOKEN:
        maps_helper = MapboxDirectionsHelper(MAPBOX_ACCESS_TOKEN, timeout=ROUTE_REQUEST_TIMEOUT)
    else:
        logger.warning("MAPBOX_ACCESS_TOKEN not set; missions will fly straight-line routes.")
    planner = RoutePlanner(maps_helper, fallback_distance_km=settings.fallback_distance_km)
    return MissionEngine(route_planner=planner, settings=settings)


def create_app(engine=None, generator=None):
    engine = engine or build_engine()
    generator = generator or OrderGenerator(api_key=OPENROUTER_API_KEY, model=OPENROUTER_MODEL)

    @asynccontextmanager
    async def lifespan(_app):
        yield
        engine.shutdown()

    app = FastAPI(title="Drone Delivery Mission Simulator", version="1.0.0", lifespan=lifespan)
    app.state.engine = engine
    app.state.generator = generator

    @app.get("/")
    def index():
        return {
            "msg": "Single drone delivery mission simulator",
            "tick_interval": engine.settings.tick_interval_s,
            "cruise_speed_kmh": engine.settings.cruise_speed_kmh,
        }

    @app.get("/state")
    def get_state():
        return engine.snapshot()

    @app.get("/orders")
    def list_orders():
        return [o.to_dict() for o in engine.orders()]

    @app.post("/orders")
    def add_order(req: OrderCreateRequest):
        order = Order(
            id=req.id,
            package_type=req.packageType,
            weight=req.weight,
            pickup=req.pickup,
            delivery=req.delivery,
        )
        accepted = engine.add_order(order)
        return {"accepted": accepted, "order_id": req.id}

    @app.post("/orders/generate")
    def generate_order(synthetic: bool = False):
        if synthetic or not generator.api_key:
            order = generator.generate_synthetic()
        else:
            order = generator.generate()
        if order is None:
            return {"accepted": False, "order": None}
        accepted = engine.add_order(order)
        return {"accepted": accepted, "order": order.to_dict()}

    @app.post("/orders/{order_id}/approve")
    def approve_order(order_id: str):
        return {"accepted": engine.approve_order(order_id), "order_id": order_id}

    @app.post("/orders/{order_id}/reject")
    def reject_order(order_id: str):
        return {"accepted": engine.reject_order(order_id), "order_id": order_id}

    @app.post("/missions/{order_id}/start")
    def start_mission(order_id: str):
        accepted = engine.start_mission(order_id)
        return {"accepted": accepted, "order_id": order_id, "mission": engine.mission().to_dict()}

    @app.get("/aircraft")
    def get_aircraft():
        return engine.aircraft().to_dict()

    @app.get("/mission")
    def get_mission():
        return engine.mission().to_dict()

    @app.get("/mission/position")
    def get_position():
        pos = engine.current_position()
        if pos is None:
            return {"position": None, "routeProgress": 0.0}
        return {"position": list(pos), "routeProgress": engine.mission().route_progress}

    @app.get("/locations")
    def list_locations():
        return {name: list(coords) for name, coords in LOCATION_COORDINATES.items()}

    return app


app = create_app()


if __name__ == "__main__":
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host=API_HOST, port=API_PORT)
