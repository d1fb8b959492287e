import logging

import requests

logger = logging.getLogger(__name__)

DIRECTIONS_URL = "https://api.mapbox.com/directions/v5/mapbox/{profile}/{start};{end}"


class RouteProviderError(Exception):
    """Raised when the directions service cannot produce a usable route."""


class MapboxDirectionsHelper:
    """Fetches road routes from the Mapbox Directions API."""
    def __init__(self, access_token, profile="driving", timeout=10):
        self.access_token = access_token
        self.profile = profile
        self.timeout = timeout

    def get_route(self, start, end):
        """
        start/end are (lng, lat).
        Returns (coordinates, distance_m) where coordinates is a list of (lng, lat).
        """
        if not self.access_token:
            raise RouteProviderError("No Mapbox access token configured")

        url = DIRECTIONS_URL.format(
            profile=self.profile,
            start=f"{start[0]},{start[1]}",
            end=f"{end[0]},{end[1]}",
        )
        params = {"geometries": "geojson", "access_token": self.access_token}
        try:
            resp = requests.get(url, params=params, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as exc:
            raise RouteProviderError(f"Directions request failed: {exc}") from exc

        try:
            route = data["routes"][0]
            coords = [(float(pt[0]), float(pt[1])) for pt in route["geometry"]["coordinates"]]
            distance_m = float(route["distance"])
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            raise RouteProviderError(f"Malformed directions response: {exc}") from exc

        if not coords:
            raise RouteProviderError("Directions response has an empty geometry")

        logger.debug("[get_route] %d points, %.0f m", len(coords), distance_m)
        return coords, distance_m
