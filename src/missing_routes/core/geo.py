"""Spherical geodesy helpers: haversine distance, direct problem, bounding boxes."""

import math

from ..models import BoundingBox, GeoPoint

EARTH_RADIUS_M = 6_371_000.0
# Fixed meters per degree of latitude used for every bounding box.
METERS_PER_DEGREE = 111_120.0

COMPASS_POINTS = [
    "north", "north-east", "east", "south-east",
    "south", "south-west", "west", "north-west",
]


def distance_m(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance in meters (haversine)."""
    d_lat = math.radians(b.lat - a.lat)
    d_lon = math.radians(b.lon - a.lon)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.lat)) * math.cos(math.radians(b.lat)) * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def destination(start: GeoPoint, bearing_rad: float, dist_m: float) -> GeoPoint:
    """Point reached from ``start`` after ``dist_m`` meters on ``bearing_rad``.

    Bearing 0 is north, increasing clockwise (pi/2 is east).
    """
    lat1 = math.radians(start.lat)
    lon1 = math.radians(start.lon)
    delta = dist_m / EARTH_RADIUS_M

    lat2 = math.asin(
        math.sin(lat1) * math.cos(delta) + math.cos(lat1) * math.sin(delta) * math.cos(bearing_rad)
    )
    lon2 = lon1 + math.atan2(
        math.sin(bearing_rad) * math.sin(delta) * math.cos(lat1),
        math.cos(delta) - math.sin(lat1) * math.sin(lat2),
    )
    lon_deg = (math.degrees(lon2) + 540.0) % 360.0 - 180.0
    return GeoPoint(lat=math.degrees(lat2), lon=lon_deg)


def bearing(a: GeoPoint, b: GeoPoint) -> float:
    """Initial great-circle bearing from ``a`` to ``b`` in radians, in [0, 2*pi)."""
    lat1 = math.radians(a.lat)
    lat2 = math.radians(b.lat)
    d_lon = math.radians(b.lon - a.lon)
    y = math.sin(d_lon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(d_lon)
    return math.atan2(y, x) % (2 * math.pi)


def compass_name(bearing_rad: float) -> str:
    """Nearest of the eight compass points for a bearing, e.g. 'north-east'."""
    index = int(round(math.degrees(bearing_rad) / 45.0)) % 8
    return COMPASS_POINTS[index]


def bounding_box(center: GeoPoint, radius_m: float) -> BoundingBox:
    """Rectangle of +/- ``radius_m`` around ``center``.

    Longitude degrees are scaled by 1/cos(lat). Undefined at the poles.
    """
    lat_offset = radius_m / METERS_PER_DEGREE
    lon_offset = radius_m / (METERS_PER_DEGREE * math.cos(math.radians(center.lat)))
    return BoundingBox(
        south=max(center.lat - lat_offset, -90.0),
        west=center.lon - lon_offset,
        north=min(center.lat + lat_offset, 90.0),
        east=center.lon + lon_offset,
    )


def circle_polygon(center: GeoPoint, radius_m: float, segments: int = 36) -> list[GeoPoint]:
    """Closed ring of ``segments`` points at ``radius_m`` around ``center`` (first == last)."""
    if segments < 3:
        raise ValueError(f"segments must be at least 3, got {segments}")
    points = [
        destination(center, 2 * math.pi * i / segments, radius_m)
        for i in range(segments)
    ]
    points.append(points[0])
    return points
