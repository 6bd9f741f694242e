"""Route geometry providers: OSRM foot routing, Google Directions, Bezier fallback."""

import logging
import math
import random

import httpx
import numpy as np

from ..config import Settings
from ..models import GeoPoint
from .geo import bearing, destination, distance_m
from .polyline import decode_polyline

logger = logging.getLogger(__name__)

GOOGLE_DIRECTIONS_URL = "https://maps.googleapis.com/maps/api/directions/json"

BEZIER_INTERIOR_STEPS = 10
# Sideways offset of the control point as a fraction of the route length.
CONTROL_OFFSET_RANGE = (0.1, 0.3)


async def osrm_foot_route(start: GeoPoint, end: GeoPoint, settings: Settings, client) -> list[GeoPoint] | None:
    """Pedestrian route geometry from an OSRM-compatible service, or None."""
    url = (
        f"{settings.osrm_url}/route/v1/foot/"
        f"{start.lon},{start.lat};{end.lon},{end.lat}"
    )
    try:
        response = await client.get(url, params={"overview": "full", "geometries": "geojson"})
        response.raise_for_status()
        data = response.json()
        if data.get("code") != "Ok":
            logger.warning("OSRM returned code %r", data.get("code"))
            return None
        coordinates = data["routes"][0]["geometry"]["coordinates"]
        points = [GeoPoint(lat=float(lat), lon=float(lon)) for lon, lat in coordinates]
    except httpx.TimeoutException as exc:
        logger.warning("OSRM request timed out: %s", exc)
        return None
    except httpx.HTTPStatusError as exc:
        logger.warning("OSRM returned HTTP %s", exc.response.status_code)
        return None
    except Exception as exc:
        logger.warning("OSRM request failed: %s", exc)
        return None
    return points if len(points) >= 2 else None


async def google_walking_route(start: GeoPoint, end: GeoPoint, settings: Settings, client) -> list[GeoPoint] | None:
    """Walking route from the Google Directions API; None when unavailable or failed."""
    if not settings.commercial_routing_available:
        return None
    params = {
        "origin": f"{start.lat},{start.lon}",
        "destination": f"{end.lat},{end.lon}",
        "mode": "walking",
        "key": settings.google_api_key,
    }
    try:
        response = await client.get(GOOGLE_DIRECTIONS_URL, params=params)
        response.raise_for_status()
        data = response.json()
        if data.get("status") != "OK":
            logger.warning("Directions API returned status %r", data.get("status"))
            return None
        points = decode_polyline(data["routes"][0]["overview_polyline"]["points"])
    except httpx.TimeoutException as exc:
        logger.warning("Directions API request timed out: %s", exc)
        return None
    except httpx.HTTPStatusError as exc:
        logger.warning("Directions API returned HTTP %s", exc.response.status_code)
        return None
    except Exception as exc:
        logger.warning("Directions API request failed: %s", exc)
        return None
    return points if len(points) >= 2 else None


def _unwrap_lon(lon: float, reference: float) -> float:
    if lon - reference > 180.0:
        return lon - 360.0
    if lon - reference < -180.0:
        return lon + 360.0
    return lon


def bezier_route(start: GeoPoint, end: GeoPoint, rng: random.Random) -> list[GeoPoint]:
    """Quadratic Bezier curve from start to end through a perturbed midpoint control.

    Returns both endpoints plus ten interior samples.
    """
    length = distance_m(start, end)
    heading = bearing(start, end)
    midpoint = destination(start, heading, length / 2)
    side = rng.choice((-1.0, 1.0))
    offset = length * rng.uniform(*CONTROL_OFFSET_RANGE)
    control = destination(midpoint, heading + side * math.pi / 2, offset)

    # Blend longitudes on the start side of the antimeridian.
    control_lon = _unwrap_lon(control.lon, start.lon)
    end_lon = _unwrap_lon(end.lon, start.lon)

    t = np.linspace(0.0, 1.0, BEZIER_INTERIOR_STEPS + 2)
    a = (1 - t) ** 2
    b = 2 * (1 - t) * t
    c = t ** 2
    lats = a * start.lat + b * control.lat + c * end.lat
    lons = a * start.lon + b * control_lon + c * end_lon
    lons = (lons + 540.0) % 360.0 - 180.0

    points = [GeoPoint(lat=float(lat), lon=float(lon)) for lat, lon in zip(lats[1:-1], lons[1:-1])]
    return [start, *points, end]
