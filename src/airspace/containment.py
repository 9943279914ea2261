"""Point containment queries against airspace volumes.

Answers "which volumes enclose this position?" by scanning every volume of
every feature. Circles are tested in a local azimuthal equidistant
projection centred on the circle, polygons with an even-odd ring test in
geographic coordinates. Both tests include points on the boundary.
Altitude is not considered.

Typical usage:
    from airspace.containment import enclosing_volumes
    from airspace.model import Point

    for volume in enclosing_volumes(Point(lon=-2.2, lat=57.2), features):
        print(volume.name, volume.lower, volume.upper)
"""

import logging
import math
from collections.abc import Callable, Iterable, Mapping
from functools import lru_cache

from pyproj import Transformer
from shapely.geometry import Point as ShapelyPoint
from shapely.geometry import Polygon as ShapelyPolygon
from shapely.prepared import prep

from airspace.arc import EARTH_RADIUS_M
from airspace.model import Feature, Point, Volume

logger = logging.getLogger(__name__)

# Same sphere as the arc rasteriser, so projected distances match arc radii.
GEOGRAPHIC_CRS = f"+proj=longlat +R={EARTH_RADIUS_M} +no_defs"


@lru_cache(maxsize=4096)
def _local_frame(centre: Point) -> Transformer:
    """Build an azimuthal equidistant projection centred on a point."""
    return Transformer.from_crs(
        GEOGRAPHIC_CRS,
        f"+proj=aeqd +lat_0={centre.lat} +lon_0={centre.lon} +R={EARTH_RADIUS_M} +units=m",
        always_xy=True,
    )


def planar_distance(centre: Point, point: Point) -> float:
    """Distance in metres between two points, in a frame centred on centre.

    Args:
        centre: Projection centre (e.g. a circle centre)
        point: Position to measure to

    Returns:
        Planar distance in metres
    """
    transformer = _local_frame(centre)
    cx, cy = transformer.transform(centre.lon, centre.lat)
    px, py = transformer.transform(point.lon, point.lat)
    return math.hypot(px - cx, py - cy)


def _shape_test(volume: Volume) -> Callable[[Point], bool]:
    """Build the containment test for one volume's horizontal shape.

    A circle with a non-zero radius takes precedence; otherwise the polygon
    is prepared once. Polygons with fewer than three points enclose nothing.
    """
    if not volume.circle.is_empty():
        circle = volume.circle
        return lambda point: planar_distance(circle.centre, point) <= circle.radius

    if len(volume.polygon) >= 3:
        ring = prep(ShapelyPolygon([(p.lon, p.lat) for p in volume.polygon]))
        return lambda point: ring.covers(ShapelyPoint(point.lon, point.lat))

    if volume.polygon:
        logger.debug("Ignoring degenerate polygon for volume %s", volume.id)
    return lambda point: False


class PreparedVolumes:
    """Every volume of a dataset with its shape ready for repeated queries.

    Shapes are built once, when the dataset is prepared, and are released
    with it. Queries still scan every volume in source order.

    Examples:
        >>> prepared = PreparedVolumes(features)
        >>> prepared.enclosing(Point(lon=-2.2, lat=57.2))
    """

    def __init__(self, features: Iterable[Feature] | Mapping[str, Feature] = ()) -> None:
        if isinstance(features, Mapping):
            features = features.values()

        self._entries: tuple[tuple[Volume, Callable[[Point], bool]], ...] = tuple(
            (volume, _shape_test(volume)) for feature in features for volume in feature.geometry
        )

    def __len__(self) -> int:
        return len(self._entries)

    def enclosing(self, point: Point) -> list[Volume]:
        """Return the volumes whose shape encloses a point."""
        return [volume for volume, encloses in self._entries if encloses(point)]


def is_enclosed_by(point: Point, volume: Volume) -> bool:
    """Check whether a volume's horizontal shape contains a point.

    A circle with a non-zero radius takes precedence; otherwise the polygon
    is tested. Polygons with fewer than three points enclose nothing.

    Args:
        point: Query position
        volume: Volume to test

    Returns:
        True if the point is inside or on the boundary of the shape
    """
    return _shape_test(volume)(point)


def enclosing_volumes(
    point: Point, features: Iterable[Feature] | Mapping[str, Feature]
) -> list[Volume]:
    """Find every volume whose shape encloses a point.

    This is a full scan over all volumes; no spatial index is used. For
    repeated queries against one dataset, build a PreparedVolumes once.

    Args:
        point: Query position
        features: Features to search, as an iterable or a mapping of id to feature

    Returns:
        Matching volumes (empty if none match)

    Examples:
        >>> volumes = enclosing_volumes(Point(lon=-2.2, lat=57.2), features)
    """
    return PreparedVolumes(features).enclosing(point)
