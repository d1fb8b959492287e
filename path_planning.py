# path_planning.py
import logging
import math
from dataclasses import dataclass, field

from config import FALLBACK_DISTANCE_KM
from mapbox_helper import RouteProviderError

logger = logging.getLogger(__name__)


@dataclass
class PlannedRoute:
    coordinates: list = field(default_factory=list)  # [(lng, lat), ...]
    distance_km: float = 0.0
    fallback: bool = False


class RoutePlanner:
    """Asks the directions provider for a route; degrades to a straight line on any failure."""
    def __init__(self, maps_helper=None, fallback_distance_km=FALLBACK_DISTANCE_KM):
        self.maps_helper = maps_helper
        self.fallback_distance_km = fallback_distance_km

    def plan_route(self, pickup, delivery):
        if self.maps_helper is None:
            return self._straight_line(pickup, delivery, "no directions provider")
        try:
            coords, distance_m = self.maps_helper.get_route(pickup, delivery)
        except RouteProviderError as exc:
            return self._straight_line(pickup, delivery, exc)
        except Exception as exc:
            logger.exception("[plan_route] unexpected provider error")
            return self._straight_line(pickup, delivery, exc)
        return PlannedRoute(coordinates=list(coords), distance_km=distance_m / 1000)

    def _straight_line(self, pickup, delivery, reason):
        logger.warning(
            "[plan_route] falling back to straight line (%.1f km): %s",
            self.fallback_distance_km, reason,
        )
        return PlannedRoute(
            coordinates=[tuple(pickup), tuple(delivery)],
            distance_km=self.fallback_distance_km,
            fallback=True,
        )


def position_on_route(route, progress):
    """
    Point at `progress` (0-1) along a polyline.
    Every segment spans an equal share of progress, whatever its real length.
    Empty route -> (0.0, 0.0); single point -> that point.
    """
    n = len(route)
    if n == 0:
        return (0.0, 0.0)
    if n == 1:
        return (float(route[0][0]), float(route[0][1]))

    progress = min(1.0, max(0.0, float(progress)))
    scaled = progress * (n - 1)
    idx = math.floor(scaled)
    frac = scaled % 1

    a = route[min(idx, n - 1)]
    b = route[min(idx + 1, n - 1)]
    x = a[0] + (b[0] - a[0]) * frac
    y = a[1] + (b[1] - a[1]) * frac
    return (float(x), float(y))
