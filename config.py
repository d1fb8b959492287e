# config.py
import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()  # Reads from .env

MAPBOX_ACCESS_TOKEN = os.getenv("MAPBOX_ACCESS_TOKEN")
OPENROUTER_API_KEY = os.getenv("OPENROUTER_API_KEY")
OPENROUTER_MODEL = os.getenv("OPENROUTER_MODEL", "anthropic/claude-3-haiku")

ROUTE_REQUEST_TIMEOUT = float(os.getenv("ROUTE_REQUEST_TIMEOUT", "10"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
API_HOST = os.getenv("API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("API_PORT", "8000"))

SIMULATION_UPDATE_INTERVAL = 0.6  # seconds between ticks
DRONE_CRUISE_SPEED_KMH = 42
PROGRESS_STEP = 1.5               # percentage points per tick
FALLBACK_DISTANCE_KM = 10
DEFAULT_PAYLOAD_KG = 2.0
CRUISE_ALTITUDE_M = 150
ALTITUDE_AMPLITUDE_M = 8


@dataclass(frozen=True)
class SimulationSettings:
    """Constants driving a mission run; override in tests."""
    tick_interval_s: float = SIMULATION_UPDATE_INTERVAL
    cruise_speed_kmh: float = DRONE_CRUISE_SPEED_KMH
    progress_step: float = PROGRESS_STEP
    fallback_distance_km: float = FALLBACK_DISTANCE_KM
    default_payload_kg: float = DEFAULT_PAYLOAD_KG
    cruise_altitude_m: float = CRUISE_ALTITUDE_M
    altitude_amplitude_m: float = ALTITUDE_AMPLITUDE_M
