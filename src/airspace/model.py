"""Airspace data model.

This module provides the immutable value types produced by decoding an
airspace document: points, circles, volumes and features.

Typical usage:
    from airspace.model import Point

    point = Point(lon=-2.2, lat=57.2)
    for feature in features:
        for volume in feature.geometry:
            print(volume.name, volume.lower, volume.upper)
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Point:
    """Geographic position in degrees (WGS84).

    Attributes:
        lon: Longitude in degrees, east positive
        lat: Latitude in degrees, north positive

    Examples:
        >>> aberdeen = Point(lon=-2.1977, lat=57.2019)
    """

    lon: float
    lat: float

    def __str__(self) -> str:
        return f"({self.lat:.6f}, {self.lon:.6f})"


@dataclass(frozen=True)
class Circle:
    """Circular horizontal shape.

    A radius of 0 means that no circle is present.

    Attributes:
        radius: Radius in metres
        centre: Centre of the circle
    """

    radius: float = 0.0
    centre: Point = Point(0.0, 0.0)

    def is_empty(self) -> bool:
        return self.radius == 0


@dataclass(frozen=True)
class Volume:
    """Altitude-bounded horizontal region of an airspace feature.

    A volume carries either a circle or a polygon, never both.

    Attributes:
        id: Volume identifier (the feature's when the source leaves it blank)
        name: Volume name
        type: Airspace type (e.g. "CTA", "DZ")
        cls: Airspace class (e.g. "D"); serialised as "class"
        sequence: Sequence number within the feature
        lower: Lower limit in feet
        upper: Upper limit in feet
        clearance_required: True if ATC clearance is needed to enter
        danger: True for advisory danger areas
        circle: Circular outline (radius 0 when absent)
        polygon: Ring of points (empty when the shape is a circle)
    """

    id: str
    name: str
    type: str
    cls: str
    sequence: int
    lower: float
    upper: float
    clearance_required: bool = False
    danger: bool = False
    circle: Circle = field(default_factory=Circle)
    polygon: tuple[Point, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Convert the volume to a JSON-ready dictionary.

        Returns:
            Dictionary with coordinates as [lon, lat] pairs
        """
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "class": self.cls,
            "sequence": self.sequence,
            "lower": self.lower,
            "upper": self.upper,
            "clearance_required": self.clearance_required,
            "danger": self.danger,
            "circle": {
                "radius": self.circle.radius,
                "centre": [self.circle.centre.lon, self.circle.centre.lat],
            },
            "polygon": [[p.lon, p.lat] for p in self.polygon],
        }


@dataclass(frozen=True)
class Feature:
    """Named airspace entity made of one or more volumes.

    Attributes:
        id: Stable identifier, supplied or synthesised from name and position
        name: Human-readable name (e.g. "ABERDEEN CTA")
        type: Resolved airspace type
        cls: Airspace class, may be empty
        geometry: Volumes in declaration order
    """

    id: str
    name: str
    type: str
    cls: str = ""
    geometry: tuple[Volume, ...] = ()

    def __str__(self) -> str:
        if self.cls:
            return f"{self.name} ({self.type}, class {self.cls})"
        return f"{self.name} ({self.type})"

    def to_dict(self) -> dict[str, Any]:
        """Convert the feature and its volumes to a JSON-ready dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "class": self.cls,
            "geometry": [volume.to_dict() for volume in self.geometry],
        }
