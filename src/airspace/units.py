"""Decoders for aviation coordinate, height and distance notation.

Positions are written as degrees, minutes and seconds with hemisphere
letters ("572153N 0015835W"), heights as flight levels or feet
("FL115", "1500 ft", "SFC") and distances in nautical miles ("10 nm").

Height and distance decoding is permissive: a malformed number decodes to
zero and the returned Measurement carries a warning instead of raising.

Typical usage:
    from airspace.units import decode_height, decode_position

    point = decode_position("572153N 0015835W")
    upper = decode_height("FL115").value  # 11500.0
"""

from typing import NamedTuple

from airspace.errors import FormatError
from airspace.model import Point

METRES_PER_NAUTICAL_MILE = 1852.0
NAUTICAL_MILES_PER_DEGREE_OF_LATITUDE = 60.0
FEET_PER_FLIGHT_LEVEL = 100.0

POSITION_LENGTH = 16
POSITION_EXAMPLE = "502257N 0033739W"


class Measurement(NamedTuple):
    """Decoded numeric value with an optional data-quality warning.

    Attributes:
        value: Decoded value (0.0 when the literal was malformed)
        warning: Description of the problem, None if decoding was clean
    """

    value: float
    warning: str | None = None

    @property
    def ok(self) -> bool:
        return self.warning is None


def _parse_unsigned(digits: str) -> int:
    if not digits.isdigit() or not digits.isascii():
        raise ValueError(digits)
    return int(digits)


def decode_position(text: str) -> Point:
    """Decode a position in "DDMMSSH DDDMMSSH" notation.

    Args:
        text: 16 character position, e.g. "572153N 0015835W"

    Returns:
        Point with longitude and latitude in decimal degrees

    Raises:
        FormatError: If the text is not in the expected notation

    Examples:
        >>> decode_position("510000N 0013000W")
        Point(lon=-1.5, lat=51.0)
    """
    error = FormatError(
        f"bad point: {text!r}, must be in format {POSITION_EXAMPLE!r} (degrees, minutes, seconds)"
    )

    if not isinstance(text, str) or len(text) != POSITION_LENGTH or text[7] != " ":
        raise error

    try:
        lat = (
            _parse_unsigned(text[0:2])
            + _parse_unsigned(text[2:4]) / 60.0
            + _parse_unsigned(text[4:6]) / 3600.0
        )
        lon = (
            _parse_unsigned(text[8:11])
            + _parse_unsigned(text[11:13]) / 60.0
            + _parse_unsigned(text[13:15]) / 3600.0
        )
    except ValueError:
        raise error from None

    if text[6] == "S":
        lat = -lat
    elif text[6] != "N":
        raise error

    if text[15] == "W":
        lon = -lon
    elif text[15] != "E":
        raise error

    return Point(lon=lon, lat=lat)


def encode_position(point: Point) -> str:
    """Format a point in "DDMMSSH DDDMMSSH" notation, rounded to whole seconds.

    Args:
        point: Position to format

    Returns:
        16 character position string
    """
    lat_hemisphere = "S" if point.lat < 0 else "N"
    lon_hemisphere = "W" if point.lon < 0 else "E"

    lat_seconds = round(abs(point.lat) * 3600)
    lon_seconds = round(abs(point.lon) * 3600)

    lat_deg, lat_rem = divmod(lat_seconds, 3600)
    lon_deg, lon_rem = divmod(lon_seconds, 3600)

    return (
        f"{lat_deg:02d}{lat_rem // 60:02d}{lat_rem % 60:02d}{lat_hemisphere} "
        f"{lon_deg:03d}{lon_rem // 60:02d}{lon_rem % 60:02d}{lon_hemisphere}"
    )


def decode_height(text: str | None) -> Measurement:
    """Decode an altitude literal into feet.

    Rules, in order: empty or "SFC" is 0; "FL<n>" is n * 100; otherwise an
    optional trailing "FT" is stripped and the rest parsed as feet.

    Args:
        text: Altitude literal, case-insensitive

    Returns:
        Measurement in feet (0.0 with a warning if the number is malformed)

    Examples:
        >>> decode_height("FL115").value
        11500.0
        >>> decode_height("1500 ft").value
        1500.0
    """
    height = (text or "").strip().upper()
    if height in ("", "SFC"):
        return Measurement(0.0)

    if height.startswith("FL"):
        try:
            return Measurement(float(height[2:]) * FEET_PER_FLIGHT_LEVEL)
        except ValueError:
            return Measurement(0.0, f"could not parse flight level {height!r}")

    if height.endswith("FT"):
        height = height[: -len("FT")].strip()

    try:
        return Measurement(float(height))
    except ValueError:
        return Measurement(0.0, f"could not parse height {height!r}")


def decode_distance(text: str | None) -> Measurement:
    """Decode a "<number> nm" literal into metres.

    Args:
        text: Distance literal, e.g. "10 nm"

    Returns:
        Measurement in metres (0.0 with a warning if the number is malformed)

    Examples:
        >>> decode_distance("10 nm").value
        18520.0
    """
    distance = (text or "").strip()
    if distance.endswith("nm"):
        distance = distance[: -len("nm")].strip()

    try:
        return Measurement(nautical_miles_to_metres(float(distance)))
    except ValueError:
        return Measurement(0.0, f"invalid distance {text!r}")


def nautical_miles_to_metres(nm: float) -> float:
    return nm * METRES_PER_NAUTICAL_MILE


def metres_to_degrees_of_latitude(metres: float) -> float:
    return metres / METRES_PER_NAUTICAL_MILE / NAUTICAL_MILES_PER_DEGREE_OF_LATITUDE


def degrees_of_latitude_to_metres(degrees: float) -> float:
    return degrees * METRES_PER_NAUTICAL_MILE * NAUTICAL_MILES_PER_DEGREE_OF_LATITUDE
