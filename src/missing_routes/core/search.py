"""Search pipeline: profile -> area -> discovery -> filter -> zones/markers."""

import logging

from ..config import Settings
from ..models import Feature, GeoPoint
from .discovery import FeatureDiscovery
from .geo import circle_polygon
from .models import FeatureZone, SearchResult
from .orientation import basic_markers, orientation_markers
from .profile import SearchProfile
from .ranking import filter_features
from .styles import CATEGORY_STYLES

logger = logging.getLogger(__name__)

ZONE_RADIUS_M = 100.0
ZONE_SEGMENTS = 24
NO_OBJECTS_NOTICE = "No objects found in the search area; showing orientation markers only."


def build_zones(features: list[Feature]) -> list[FeatureZone]:
    """Zones in draw order: lowest priority first so the most important end up on top."""
    ordered = sorted(features, key=lambda f: (f.category.priority, f.distance_m))
    return [
        FeatureZone(
            feature=feature,
            ring=circle_polygon(feature.location, ZONE_RADIUS_M, ZONE_SEGMENTS),
            style=CATEGORY_STYLES[feature.category],
        )
        for feature in ordered
    ]


async def run_search(
    center: GeoPoint,
    profile: SearchProfile,
    settings: Settings,
    per_category_cap: int = 10,
    radius_m: int | None = None,
    discovery: FeatureDiscovery | None = None,
) -> SearchResult:
    """Run one complete search around ``center``.

    The profile radius always wins over ``radius_m``.
    """
    if radius_m is not None and radius_m != profile.radius_m:
        logger.debug("Ignoring requested radius %s m; profile radius is %s m", radius_m, profile.radius_m)
    radius = profile.radius_m
    area = profile.search_area(center)

    result = SearchResult(
        center=center,
        profile=profile.category,
        radius_m=radius,
        area_ring=area.polygon(),
        area_style=profile.area_style(),
        zoom_rect=profile.zoom_rect(center),
        recommended_zoom=profile.recommended_zoom(),
    )

    discovery = discovery if discovery is not None else FeatureDiscovery(settings)
    try:
        found = await discovery.discover(center, radius)
        kept = filter_features(found, radius, per_category_cap)
        result.features = kept
        result.zones = build_zones(kept)
        result.markers = orientation_markers(center, radius, len(kept))
    except Exception as exc:
        logger.error("Search around %.6f, %.6f failed: %s", center.lat, center.lon, exc, exc_info=True)
        result.features = []
        result.zones = []
        result.markers = basic_markers(center, radius)

    if not result.features:
        result.notice = NO_OBJECTS_NOTICE
    logger.info(
        "Search finished: %d zones, %d orientation markers", len(result.zones), len(result.markers)
    )
    return result
