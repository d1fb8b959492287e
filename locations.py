# locations.py
"""Named pickup/delivery points around San Francisco, stored as (lng, lat)."""

LOCATION_COORDINATES = {
    "Warehouse A": (-122.4194, 37.7749),
    "Hospital B": (-122.4094, 37.7849),
    "Depot C": (-122.4294, 37.7649),
    "Office Park D": (-122.3994, 37.7949),
    "Kitchen Hub": (-122.4394, 37.7549),
    "Residential Zone E": (-122.3894, 37.8049),
    "HQ Tower": (-122.4494, 37.7449),
    "Branch Office F": (-122.3794, 37.8149),
    "Lab Center G": (-122.4594, 37.7349),
    "Research Facility H": (-122.4694, 37.7249),
    "Factory I": (-122.3694, 37.8249),
    "Maintenance Bay J": (-122.3594, 37.8349),
}


def resolve_location(name):
    """Returns (lng, lat) for a known location name, else None."""
    if not isinstance(name, str):
        return None
    return LOCATION_COORDINATES.get(name)
