"""Spherical geometry and arc rasterisation.

Airspace boundaries may contain circular arcs. The containment engine only
understands straight-edged rings and circles, so arcs are approximated by
a sequence of points stepped around the arc centre.

Typical usage:
    from airspace.arc import ArcDirection, arc_to_polygon

    points = arc_to_polygon(centre, 18520.0, start, to, ArcDirection.CLOCKWISE)
"""

import math
from enum import Enum

import numpy as np

from airspace.model import Point

EARTH_RADIUS_M = 6371008.8  # Mean Earth radius
ARC_STEP_DEG = 10.0


class ArcDirection(Enum):
    """Rotational direction of an arc as seen from above.

    Attributes:
        CLOCKWISE: Bearings increase along the arc
        COUNTER_CLOCKWISE: Bearings decrease along the arc
    """

    CLOCKWISE = "cw"
    COUNTER_CLOCKWISE = "ccw"

    @property
    def sign(self) -> float:
        return 1.0 if self is ArcDirection.CLOCKWISE else -1.0

    @classmethod
    def parse(cls, value: str | None) -> "ArcDirection":
        """Parse a raw "dir" field. Anything other than "ccw" is clockwise."""
        if (value or "").strip().lower() == "ccw":
            return cls.COUNTER_CLOCKWISE
        return cls.CLOCKWISE


def initial_bearing(origin: Point, target: Point) -> float:
    """Calculate the great-circle initial bearing from origin to target.

    Args:
        origin: Start position
        target: End position

    Returns:
        Bearing in degrees from true north, in the range [0, 360)
    """
    lat1, lat2 = math.radians(origin.lat), math.radians(target.lat)
    dlon = math.radians(target.lon - origin.lon)

    y = math.sin(dlon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(dlon)

    return (math.degrees(math.atan2(y, x)) + 360.0) % 360.0


def _destinations(
    origin: Point, bearings_deg: np.ndarray, distance_m: float
) -> tuple[np.ndarray, np.ndarray]:
    """Vectorised destination point formula.

    Returns:
        Tuple of (longitudes, latitudes) in degrees
    """
    angular = distance_m / EARTH_RADIUS_M
    bearings = np.radians(bearings_deg)
    lat1 = math.radians(origin.lat)
    lon1 = math.radians(origin.lon)

    sin_lat2 = math.sin(lat1) * math.cos(angular) + math.cos(lat1) * math.sin(angular) * np.cos(
        bearings
    )
    lat2 = np.arcsin(sin_lat2)

    x = math.cos(angular) - math.sin(lat1) * sin_lat2
    y = np.sin(bearings) * math.sin(angular) * math.cos(lat1)
    lon2 = lon1 + np.arctan2(y, x)

    return np.degrees(lon2), np.degrees(lat2)


def destination_point(origin: Point, bearing_deg: float, distance_m: float) -> Point:
    """Calculate the point reached by travelling along a great circle.

    Args:
        origin: Start position
        bearing_deg: Initial bearing in degrees from true north
        distance_m: Distance travelled in metres

    Returns:
        Destination position

    Examples:
        >>> north = destination_point(Point(0.0, 51.0), 0.0, 10000.0)
    """
    lons, lats = _destinations(origin, np.array([bearing_deg]), distance_m)
    return Point(lon=float(lons[0]), lat=float(lats[0]))


def arc_to_polygon(
    centre: Point,
    radius_m: float,
    start: Point,
    to: Point,
    direction: ArcDirection,
    step_deg: float = ARC_STEP_DEG,
) -> list[Point]:
    """Approximate a circular arc by a list of points.

    The bearing is stepped from start to end in step_deg increments in the
    direction of the sweep, emitting one point per step. The exact "to"
    point is always appended last, so the final segment may be shorter.

    Args:
        centre: Arc centre
        radius_m: Arc radius in metres
        start: Position the arc starts from (not included in the output)
        to: Position the arc ends at
        direction: Sweep direction
        step_deg: Angular step in degrees

    Returns:
        Points along the arc, ending with to
    """
    if step_deg <= 0:
        raise ValueError(f"Arc step must be positive: {step_deg}")

    initial = initial_bearing(centre, start)
    final = initial_bearing(centre, to)

    if direction is ArcDirection.CLOCKWISE:
        if final < initial:
            final += 360.0
    elif final > initial:
        initial += 360.0

    bearings = np.arange(initial, final, direction.sign * step_deg)
    lons, lats = _destinations(centre, bearings, radius_m)

    points = [Point(lon=float(lon), lat=float(lat)) for lon, lat in zip(lons, lats)]
    points.append(to)
    return points
