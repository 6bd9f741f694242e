"""Route synthesizer: POI-anchored, road-anchored, then synthetic directional routes."""

import logging
import math
import random

from ..config import Settings
from ..models import GeoPoint, RouteCandidate
from .discovery import FeatureDiscovery
from .geo import bearing, compass_name, destination
from .overpass import make_client
from .routing import bezier_route, google_walking_route, osrm_foot_route

logger = logging.getLogger(__name__)

# Targets closer than this to the start are not worth a route.
MIN_TARGET_DISTANCE_M = 50.0
SYNTHETIC_DISTANCE_RANGE = (0.7, 1.0)


class RouteSynthesizer:
    """Proposes a bounded list of plausible routes away from a start point.

    ``rng`` drives the synthetic curves; pass a seeded ``random.Random`` for
    reproducible output.
    """

    def __init__(
        self,
        settings: Settings,
        rng: random.Random | None = None,
        discovery: FeatureDiscovery | None = None,
    ):
        self.settings = settings
        self.rng = rng if rng is not None else random.Random()
        self.discovery = discovery if discovery is not None else FeatureDiscovery(settings)

    async def route_to(self, start: GeoPoint, target: GeoPoint, client) -> tuple[list[GeoPoint], str]:
        """Waypoints from start to target and the provider that produced them."""
        providers = [("osrm", osrm_foot_route)]
        if self.settings.commercial_routing_available:
            providers.append(("google", google_walking_route))

        for source, provider in providers:
            points = await provider(start, target, self.settings, client)
            if points and len(points) >= 2:
                if points[0] != start:
                    points = [start, *points]
                return points, source
        return bezier_route(start, target, self.rng), "bezier"

    async def _poi_routes(self, start, radius_m, max_routes, routes, client) -> None:
        pois = await self.discovery.discover_pois(start, radius_m, client)
        for poi in pois:
            if len(routes) >= max_routes:
                return
            if poi.distance_m < MIN_TARGET_DISTANCE_M:
                continue
            waypoints, source = await self.route_to(start, poi.location, client)
            if len(waypoints) >= 2:
                routes.append(RouteCandidate(name=f"To {poi.name}", waypoints=waypoints, source=source))

    async def _road_routes(self, start, radius_m, max_routes, routes, client) -> None:
        points = await self.discovery.discover_road_points(start, radius_m, client)
        candidates = [
            (point, dist) for point, dist in points
            if MIN_TARGET_DISTANCE_M <= dist <= radius_m
        ]
        # Stable sort keeps discovery order among equally distant points.
        candidates.sort(key=lambda item: item[1], reverse=True)
        for point, _ in candidates[:max_routes]:
            if len(routes) >= max_routes:
                return
            waypoints, source = await self.route_to(start, point, client)
            direction = compass_name(bearing(start, point))
            routes.append(RouteCandidate(
                name=f"Route {len(routes) + 1} ({direction})",
                waypoints=waypoints,
                source=source,
            ))

    def synthetic_routes(self, start: GeoPoint, radius_m: float, count: int, max_routes: int) -> list[RouteCandidate]:
        """``count`` curved guesses on bearings spaced 360/max_routes degrees apart from north."""
        routes = []
        step = 2 * math.pi / max_routes
        for i in range(count):
            heading = i * step
            reach = radius_m * self.rng.uniform(*SYNTHETIC_DISTANCE_RANGE)
            end = destination(start, heading, reach)
            routes.append(RouteCandidate(
                name=f"Direction: {compass_name(heading)}",
                waypoints=bezier_route(start, end, self.rng),
                source="bezier",
            ))
        return routes

    async def propose_routes(self, start: GeoPoint, radius_m: float, max_routes: int = 3) -> list[RouteCandidate]:
        """Between 1 and ``max_routes`` routes; never raises for external failures."""
        if max_routes < 1:
            logger.warning("max_routes=%d is below 1; proposing a single route", max_routes)
            max_routes = 1

        routes: list[RouteCandidate] = []
        try:
            async with make_client(self.settings) as client:
                for tier in (self._poi_routes, self._road_routes):
                    if len(routes) >= max_routes:
                        break
                    try:
                        await tier(start, radius_m, max_routes, routes, client)
                    except Exception as exc:
                        logger.warning("Route tier %s failed: %s", tier.__name__.strip("_"), exc)
        except Exception as exc:
            logger.warning("Route discovery failed: %s", exc)

        if len(routes) < max_routes:
            needed = max_routes - len(routes)
            logger.info("Adding %d synthetic directional routes", needed)
            routes.extend(self.synthetic_routes(start, radius_m, needed, max_routes))

        return routes[:max_routes]
