"""Great-circle distance and geofence decisions.

Uses the haversine formula on the mean Earth radius. Every function is pure;
callers decide what a failed check means for the user.
"""
import math

EARTH_RADIUS_M = 6_371_000


def valid_coordinates(lat, lon) -> bool:
    """True for finite latitude/longitude inside the WGS84 ranges."""
    try:
        lat = float(lat)
        lon = float(lon)
    except (TypeError, ValueError):
        return False
    if not (math.isfinite(lat) and math.isfinite(lon)):
        return False
    return -90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0


def distance_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Distance in meters between two points given in decimal degrees.

    Raises ValueError for NaN, infinite or out-of-range coordinates so an
    invalid capture can never be treated as "in range".
    """
    if not (valid_coordinates(lat1, lon1) and valid_coordinates(lat2, lon2)):
        raise ValueError("Invalid coordinates")

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)

    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def is_within_radius(distance: float, radius_meters: float) -> bool:
    return distance <= radius_meters


def format_distance(meters: float) -> str:
    """Human-friendly distance: "150m" below one kilometer, "1.5km" above."""
    if meters < 1000:
        return f"{round(meters)}m"
    return f"{meters / 1000:.1f}km"
