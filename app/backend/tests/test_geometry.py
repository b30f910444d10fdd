"""
Unit tests for point / polygon conversions
"""

import pytest

from geometry import (
    GeometryError,
    LatLon,
    is_polygon_text,
    parse_point,
    parse_polygon,
    point_text,
    polygon_text,
)


class TestParsePoint:
    """Stored (lon, lat) -> display (lat, lon)"""

    def test_point_text_is_swapped(self):
        assert parse_point("(30.5,-1.25)") == LatLon(lat=-1.25, lon=30.5)

    def test_point_text_with_spaces_and_exponent(self):
        point = parse_point("( 1e-3 , -2 )")
        assert point.lon == pytest.approx(0.001)
        assert point.lat == -2

    def test_lon_lat_pair(self):
        assert parse_point([30, -1]) == LatLon(lat=-1.0, lon=30.0)

    @pytest.mark.parametrize("value", [
        {"lat": -1, "lon": 30},
        {"lat": -1, "lng": 30},
        {"y": -1, "x": 30},
    ])
    def test_mappings(self, value):
        assert parse_point(value) == LatLon(lat=-1.0, lon=30.0)

    def test_lat_lon_is_returned_unchanged(self):
        point = LatLon(lat=-1.0, lon=30.0)
        assert parse_point(point) == point

    @pytest.mark.parametrize("value", [None, "", "nowhere", "(abc,1)", [1], {"lat": 1}, {"lat": "x", "lon": 2}])
    def test_unparseable_returns_none(self, value):
        assert parse_point(value) is None


class TestParsePolygon:
    """Polygon text and WKT -> open ring of map vertices"""

    def test_polygon_text_drops_closing_vertex(self):
        points = parse_polygon("((30,-1),(31,-1),(31,-2),(30,-1))")
        assert points == [
            LatLon(lat=-1.0, lon=30.0),
            LatLon(lat=-1.0, lon=31.0),
            LatLon(lat=-2.0, lon=31.0),
        ]

    def test_open_ring_is_kept(self):
        assert len(parse_polygon("((30,-1),(31,-1),(31,-2))")) == 3

    def test_wkt_polygon(self):
        points = parse_polygon("POLYGON((30 -1, 31 -1, 31 -2, 30 -1))")
        assert points[0] == LatLon(lat=-1.0, lon=30.0)
        assert len(points) == 3

    def test_wkt_is_case_insensitive(self):
        assert len(parse_polygon("polygon ((0 0, 1 0, 1 1))")) == 3

    def test_list_of_vertices_skips_bad_entries(self):
        points = parse_polygon([[30, -1], "junk", {"lat": -2, "lon": 31}])
        assert points == [LatLon(lat=-1.0, lon=30.0), LatLon(lat=-2.0, lon=31.0)]

    def test_list_of_lat_lon_keeps_order(self):
        ring = [LatLon(lat=-1.0, lon=30.0), LatLon(lat=-1.0, lon=31.0), LatLon(lat=-2.0, lon=31.0)]
        assert parse_polygon(ring) == ring

    @pytest.mark.parametrize("value", [None, "", "not a polygon", []])
    def test_empty(self, value):
        assert parse_polygon(value) == []


class TestPolygonText:
    """Map vertices -> PostgreSQL polygon text"""

    def test_ring_is_closed_in_lon_lat_order(self):
        text = polygon_text([
            {"lat": -1, "lon": 30},
            {"lat": -1, "lon": 31},
            {"lat": -2, "lon": 31},
        ])
        assert text == "((30, -1),(31, -1),(31, -2),(30, -1))"

    def test_already_closed_ring_is_not_closed_twice(self):
        text = polygon_text([
            {"lat": -1, "lon": 30},
            {"lat": -1, "lon": 31},
            {"lat": -2, "lon": 31},
            {"lat": -1, "lon": 30},
        ])
        assert text.count("(30, -1)") == 2

    def test_fractional_coordinates(self):
        text = polygon_text([
            {"lat": -1.5, "lon": 30.25},
            {"lat": -1.5, "lon": 31},
            {"lat": -2, "lon": 31},
        ])
        assert text.startswith("((30.25, -1.5),")

    def test_non_numeric_vertices_are_dropped(self):
        with pytest.raises(GeometryError, match="at least 3 vertices"):
            polygon_text([
                {"lat": "-1", "lon": 30},
                {"lat": True, "lon": 31},
                {"lat": -2, "lon": 31},
                {"lat": -3, "lon": 32},
            ])

    def test_too_few_vertices(self):
        with pytest.raises(GeometryError):
            polygon_text([{"lat": 1, "lon": 2}, {"lat": 3, "lon": 4}])

    def test_output_round_trips_through_parser(self):
        vertices = [LatLon(-1.0, 30.0), LatLon(-1.0, 31.0), LatLon(-2.0, 31.0)]
        assert parse_polygon(polygon_text(vertices)) == vertices


def test_point_text():
    assert point_text(-1.5, 30) == "(30,-1.5)"
    assert parse_point(point_text(-1.5, 30)) == LatLon(lat=-1.5, lon=30.0)


@pytest.mark.parametrize("text,expected", [
    ("((1,2),(3,4),(5,6))", True),
    ("(1,2),(3,4)", False),
    ("((1,2),(3,4)", True),
    ("POLYGON((1 2, 3 4))", False),
    (None, False),
])
def test_is_polygon_text(text, expected):
    assert is_polygon_text(text) is expected
