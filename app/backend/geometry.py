"""
Point / polygon conversions between PostgreSQL and the map UI

PostgreSQL renders native geometric types as text:
  point    -> "(x,y)"
  polygon  -> "((x1,y1),(x2,y2),...)"

Stored order is (longitude, latitude); the map works in (latitude, longitude).
Every function here takes care of that swap so routers never do it by hand.
"""

import math
import numbers
import re
from typing import Any, Iterable, List, Mapping, NamedTuple, Optional, Sequence

_NUMBER = r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?"

POINT_PATTERN = re.compile(rf"\(\s*({_NUMBER})\s*,\s*({_NUMBER})\s*\)")
WKT_POLYGON_PATTERN = re.compile(r"^\s*polygon\s*\(\((.*)\)\)\s*$", re.IGNORECASE | re.DOTALL)

MIN_POLYGON_VERTICES = 3


class GeometryError(ValueError):
    """Raised when coordinates cannot form the requested geometry"""


class LatLon(NamedTuple):
    lat: float
    lon: float

    def as_dict(self) -> dict:
        return {"lat": self.lat, "lon": self.lon}


def _finite(value: Any) -> Optional[float]:
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _make(lon: Any, lat: Any) -> Optional[LatLon]:
    lon_f, lat_f = _finite(lon), _finite(lat)
    if lon_f is None or lat_f is None:
        return None
    return LatLon(lat=lat_f, lon=lon_f)


def _from_mapping(value: Mapping) -> Optional[LatLon]:
    lon = value.get("lon", value.get("lng", value.get("x")))
    lat = value.get("lat", value.get("y"))
    return _make(lon, lat)


def parse_point(value: Any) -> Optional[LatLon]:
    """
    Parse a point into (lat, lon).

    Accepts PostgreSQL point text "(lon,lat)", a [lon, lat] pair, or a mapping
    with lat/lon, lat/lng or x/y keys. Returns None for anything else.
    """
    if not value:
        return None
    if isinstance(value, LatLon):
        return value
    if isinstance(value, str):
        match = POINT_PATTERN.search(value)
        if not match:
            return None
        return _make(match.group(1), match.group(2))
    if isinstance(value, Mapping):
        return _from_mapping(value)
    if isinstance(value, Sequence) and len(value) == 2:
        return _make(value[0], value[1])
    return None


def _drop_closing_vertex(points: List[LatLon]) -> List[LatLon]:
    if len(points) >= 2 and points[0] == points[-1]:
        points.pop()
    return points


def parse_polygon(value: Any) -> List[LatLon]:
    """
    Parse a polygon ring into a list of (lat, lon) vertices.

    Accepts PostgreSQL polygon text, WKT POLYGON((x y, ...)), or a list of
    [lon, lat] pairs / {lat, lon} mappings. Unparseable vertices are skipped and
    an explicit closing vertex is removed, so the map gets an open ring.
    """
    if not value:
        return []

    points: List[LatLon] = []
    if isinstance(value, str):
        wkt = WKT_POLYGON_PATTERN.match(value)
        if wkt:
            for pair in wkt.group(1).split(","):
                parts = pair.split()
                if len(parts) >= 2:
                    point = _make(parts[0], parts[1])
                    if point:
                        points.append(point)
        else:
            for match in POINT_PATTERN.finditer(value):
                point = _make(match.group(1), match.group(2))
                if point:
                    points.append(point)
    elif isinstance(value, Sequence):
        for item in value:
            point = parse_point(item)
            if point:
                points.append(point)

    return _drop_closing_vertex(points)


def _format_number(value: float) -> str:
    # 12.0 -> "12", 12.5 -> "12.5"
    return repr(int(value)) if float(value).is_integer() else repr(float(value))


def point_text(lat: float, lon: float) -> str:
    """
    Render (lat, lon) as PostgreSQL point text in stored (lon, lat) order.

    Routers build points in SQL with point(:lon, :lat); this is for scripts
    and clients that hand PostgreSQL a point literal, e.g. `CAST(:p AS point)`.
    """
    return f"({_format_number(lon)},{_format_number(lat)})"


def _strict_vertex(item: Any) -> Optional[LatLon]:
    # Only real numbers count; numeric strings and booleans are rejected.
    if isinstance(item, LatLon):
        return item
    if not isinstance(item, Mapping):
        return None
    lat, lon = item.get("lat"), item.get("lon")
    for number in (lat, lon):
        if isinstance(number, bool) or not isinstance(number, numbers.Real):
            return None
        if not math.isfinite(number):
            return None
    return LatLon(lat=float(lat), lon=float(lon))


def polygon_text(points: Iterable[Any]) -> str:
    """
    Build PostgreSQL polygon text from {lat, lon} vertices.

    Vertices without numeric lat/lon are dropped. The ring is closed by
    repeating the first vertex when needed.

    Raises:
        GeometryError: fewer than 3 usable vertices
    """
    vertices = [v for v in (_strict_vertex(p) for p in points) if v is not None]
    if len(vertices) < MIN_POLYGON_VERTICES:
        raise GeometryError("points must include at least 3 vertices")

    if vertices[0] != vertices[-1]:
        vertices.append(vertices[0])

    body = ",".join(f"({_format_number(v.lon)}, {_format_number(v.lat)})" for v in vertices)
    return f"({body})"


def is_polygon_text(text: Any) -> bool:
    """Cheap shape check before handing polygon text to PostgreSQL."""
    return isinstance(text, str) and text.startswith("((") and text.endswith(")")
