"""Tests for spherical geometry and arc rasterisation."""

import pytest

from airspace.arc import (
    ArcDirection,
    arc_to_polygon,
    destination_point,
    initial_bearing,
)
from airspace.model import Point

CENTRE = Point(lon=0.0, lat=51.0)
RADIUS_M = 10000.0


def _on_circle(bearing: float) -> Point:
    return destination_point(CENTRE, bearing, RADIUS_M)


class TestArcDirection:
    """Test ArcDirection enum."""

    def test_parse(self):
        """Test parsing raw direction fields."""
        assert ArcDirection.parse("cw") is ArcDirection.CLOCKWISE
        assert ArcDirection.parse("ccw") is ArcDirection.COUNTER_CLOCKWISE
        assert ArcDirection.parse("CCW") is ArcDirection.COUNTER_CLOCKWISE

    def test_unknown_direction_is_clockwise(self):
        """Test anything other than ccw is treated as clockwise."""
        assert ArcDirection.parse("") is ArcDirection.CLOCKWISE
        assert ArcDirection.parse(None) is ArcDirection.CLOCKWISE

    def test_sign(self):
        """Test sweep sign."""
        assert ArcDirection.CLOCKWISE.sign == 1.0
        assert ArcDirection.COUNTER_CLOCKWISE.sign == -1.0


class TestBearingAndDestination:
    """Test bearing and destination point formulas."""

    @pytest.mark.parametrize("bearing", [0.0, 45.0, 90.0, 180.0, 270.0, 359.0])
    def test_bearing_of_destination(self, bearing):
        """Test the bearing to a destination matches the bearing used to reach it."""
        assert initial_bearing(CENTRE, _on_circle(bearing)) == pytest.approx(bearing, abs=1e-6)

    def test_bearing_range(self):
        """Test bearings are normalised to [0, 360)."""
        west = Point(lon=-1.0, lat=51.0)
        bearing = initial_bearing(CENTRE, west)

        assert 0.0 <= bearing < 360.0
        assert bearing == pytest.approx(270.0, abs=0.5)

    def test_destination_north(self):
        """Test travelling north only changes latitude."""
        north = destination_point(CENTRE, 0.0, RADIUS_M)

        assert north.lon == pytest.approx(0.0, abs=1e-9)
        assert north.lat == pytest.approx(51.0 + 0.0899, abs=1e-3)

    def test_zero_distance(self):
        """Test zero distance returns the origin."""
        point = destination_point(CENTRE, 123.0, 0.0)

        assert point.lat == pytest.approx(CENTRE.lat)
        assert point.lon == pytest.approx(CENTRE.lon)


class TestArcToPolygon:
    """Test arc_to_polygon function."""

    def test_clockwise_quarter(self):
        """Test a 90 degree clockwise arc from north to east."""
        start, to = _on_circle(0), _on_circle(90)
        result = arc_to_polygon(CENTRE, RADIUS_M, start, to, ArcDirection.CLOCKWISE)

        assert 9 <= len(result) <= 11
        assert result[-1] == to
        assert result[0].lat == pytest.approx(start.lat, abs=0.01)
        assert result[0].lon == pytest.approx(start.lon, abs=0.01)

    def test_clockwise_bearings_increase(self):
        """Test clockwise arcs step through increasing bearings."""
        result = arc_to_polygon(
            CENTRE, RADIUS_M, _on_circle(5), _on_circle(95), ArcDirection.CLOCKWISE
        )
        bearings = [initial_bearing(CENTRE, p) for p in result[:-1]]

        assert bearings == sorted(bearings)
        assert all(5.0 - 1e-6 <= b <= 95.0 + 1e-6 for b in bearings)

    def test_counter_clockwise_quarter(self):
        """Test a 90 degree counter-clockwise arc from north to west."""
        to = _on_circle(270)
        result = arc_to_polygon(
            CENTRE, RADIUS_M, _on_circle(0), to, ArcDirection.COUNTER_CLOCKWISE
        )

        assert 9 <= len(result) <= 11
        assert result[-1] == to
        # Stepping goes through north-west, not east
        assert all(p.lon <= 1e-9 for p in result)

    def test_clockwise_across_north(self):
        """Test a clockwise arc that crosses the 0/360 degree boundary."""
        to = _on_circle(30)
        result = arc_to_polygon(CENTRE, RADIUS_M, _on_circle(325), to, ArcDirection.CLOCKWISE)

        assert len(result) == 8
        assert result[-1] == to

    def test_counter_clockwise_across_north(self):
        """Test a counter-clockwise arc that crosses the 0/360 degree boundary."""
        to = _on_circle(330)
        result = arc_to_polygon(
            CENTRE, RADIUS_M, _on_circle(35), to, ArcDirection.COUNTER_CLOCKWISE
        )

        assert len(result) == 8
        assert result[-1] == to

    def test_points_lie_on_radius(self):
        """Test intermediate points are at the arc radius."""
        result = arc_to_polygon(
            CENTRE, RADIUS_M, _on_circle(10), _on_circle(170), ArcDirection.CLOCKWISE
        )
        start_bearing = initial_bearing(CENTRE, _on_circle(10))

        for i, point in enumerate(result[:-1]):
            expected = destination_point(CENTRE, start_bearing + 10 * i, RADIUS_M)
            assert point.lat == pytest.approx(expected.lat, abs=1e-9)
            assert point.lon == pytest.approx(expected.lon, abs=1e-9)

    def test_nearly_full_circle(self):
        """Test an arc of nearly 360 degrees yields a long point list."""
        to = _on_circle(356)
        result = arc_to_polygon(CENTRE, RADIUS_M, _on_circle(5), to, ArcDirection.CLOCKWISE)

        assert len(result) == 37
        assert result[-1] == to

    def test_start_equals_end(self):
        """Test a zero-length arc yields just the end point."""
        point = _on_circle(45)
        result = arc_to_polygon(CENTRE, RADIUS_M, point, point, ArcDirection.CLOCKWISE)

        assert result == [point]

    @pytest.mark.parametrize("direction", list(ArcDirection))
    @pytest.mark.parametrize("start,end", [(0, 90), (90, 0), (350, 10), (10, 350), (1, 359)])
    def test_always_ends_with_to(self, direction, start, end):
        """Test the declared end point is always the last point."""
        to = _on_circle(end)
        result = arc_to_polygon(CENTRE, RADIUS_M, _on_circle(start), to, direction)

        assert result[-1] is to

    def test_custom_step(self):
        """Test a coarser step produces fewer points."""
        start, to = _on_circle(0), _on_circle(100)
        result = arc_to_polygon(CENTRE, RADIUS_M, start, to, ArcDirection.CLOCKWISE, step_deg=30)

        assert len(result) == 5

    def test_invalid_step(self):
        """Test a non-positive step is rejected."""
        with pytest.raises(ValueError, match="Arc step"):
            arc_to_polygon(
                CENTRE, RADIUS_M, _on_circle(0), _on_circle(90), ArcDirection.CLOCKWISE, 0
            )
