"""Feature discovery: categorized Overpass queries parsed into uniform records."""

import asyncio
import logging

from pydantic import BaseModel, ValidationError

from ..config import Settings
from ..models import Feature, FeatureCategory, GeoPoint, PointOfInterest
from .geo import bounding_box, distance_m
from .overpass import make_client, query_overpass

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 25

HIGHWAY_VALUES = frozenset({"motorway", "trunk", "primary", "secondary"})
MAJOR_ROAD_VALUES = frozenset({"tertiary", "unclassified", "residential"})
FOOT_ROAD_VALUES = frozenset({"footway", "path", "track", "cycleway", "pedestrian", "steps"})

HIGHWAY_LABELS = {
    "motorway": "Motorway",
    "trunk": "Trunk road",
    "primary": "Primary road",
    "secondary": "Secondary road",
    "tertiary": "City road",
    "unclassified": "Road",
    "residential": "Residential street",
    "service": "Service road",
    "footway": "Footway",
    "path": "Path",
    "track": "Dirt track",
    "cycleway": "Cycleway",
    "pedestrian": "Pedestrian zone",
    "steps": "Steps",
}

DEFAULT_NAMES: dict[FeatureCategory, str] = {
    FeatureCategory.HIGHWAY: "Road",
    FeatureCategory.MAJOR_ROAD: "Road",
    FeatureCategory.MINOR_ROAD: "Road",
    FeatureCategory.FOOT_ROAD: "Path",
    FeatureCategory.RIVER: "River/Stream",
    FeatureCategory.WATER: "Water body",
    FeatureCategory.WETLAND: "Wetland",
    FeatureCategory.MEADOW: "Meadow/Field",
    FeatureCategory.FOREST: "Forest",
}


class CategoryQuery(BaseModel):
    """One Overpass request; ``clauses`` are suffixed with the bbox filter."""
    name: str
    category: FeatureCategory
    clauses: list[str]
    for_roads: bool = False
    timeout_s: int = 25

    def build(self, bbox: str) -> str:
        body = "".join(f"{clause}({bbox});" for clause in self.clauses)
        return f"[out:json][timeout:{self.timeout_s}];({body});out center geom;"


CATEGORY_QUERIES: list[CategoryQuery] = [
    CategoryQuery(
        name="highways",
        category=FeatureCategory.HIGHWAY,
        clauses=['way["highway"~"motorway|trunk|primary|secondary"]'],
        for_roads=True,
        timeout_s=30,
    ),
    CategoryQuery(
        name="city_roads",
        category=FeatureCategory.MAJOR_ROAD,
        clauses=['way["highway"~"tertiary|unclassified|residential|service"]'],
        for_roads=True,
        timeout_s=30,
    ),
    CategoryQuery(
        name="foot_roads",
        category=FeatureCategory.FOOT_ROAD,
        clauses=['way["highway"~"footway|path|track|cycleway|pedestrian|steps"]'],
        for_roads=True,
    ),
    CategoryQuery(
        name="rivers",
        category=FeatureCategory.RIVER,
        clauses=['way["waterway"~"river|stream|brook|canal"]'],
    ),
    CategoryQuery(
        name="water",
        category=FeatureCategory.WATER,
        clauses=['way["natural"="water"]', 'way["water"]'],
    ),
    CategoryQuery(
        name="wetlands",
        category=FeatureCategory.WETLAND,
        clauses=['way["natural"~"wetland|marsh|swamp|bog"]'],
    ),
    CategoryQuery(
        name="meadows",
        category=FeatureCategory.MEADOW,
        clauses=['way["natural"="grassland"]', 'way["landuse"~"meadow|grass|farmland|field"]'],
    ),
    CategoryQuery(
        name="forests",
        category=FeatureCategory.FOREST,
        clauses=['way["natural"~"forest|wood"]', 'way["landuse"="forest"]'],
    ),
]


def expanded_radius(radius_m: float, for_roads: bool) -> float:
    """Query radius: roads look further out than natural features."""
    if for_roads:
        return min(radius_m * 2, 5000)
    return min(radius_m, 3000)


def classify_highway(value: str | None, default: FeatureCategory) -> FeatureCategory:
    if value is None:
        return default
    if value in HIGHWAY_VALUES:
        return FeatureCategory.HIGHWAY
    if value in MAJOR_ROAD_VALUES:
        return FeatureCategory.MAJOR_ROAD
    if value in FOOT_ROAD_VALUES:
        return FeatureCategory.FOOT_ROAD
    return FeatureCategory.MINOR_ROAD


def truncate_name(name: str) -> str:
    if len(name) > MAX_NAME_LENGTH:
        return name[:22] + "..."
    return name


def element_location(element: dict) -> GeoPoint | None:
    """Representative point of a node or way element, or None if it cannot be placed.

    Ways use the upstream ``center`` when present, otherwise the middle vertex of
    ``geometry``. Coordinates of exactly (0, 0) are treated as unset, which also
    drops genuine features at that spot.
    """
    center = element.get("center")
    if center:
        lat, lon = center["lat"], center["lon"]
    elif element.get("type") == "node":
        lat, lon = element["lat"], element["lon"]
    else:
        geometry = element.get("geometry") or []
        if not geometry:
            return None
        middle = geometry[len(geometry) // 2]
        lat, lon = middle["lat"], middle["lon"]

    if lat is None or lon is None:
        return None
    lat, lon = float(lat), float(lon)
    if lat == 0 and lon == 0:
        return None
    return GeoPoint(lat=lat, lon=lon)


def _feature_name(tags: dict, category: FeatureCategory, highway_type: str | None) -> str:
    if category.is_road:
        name = (
            tags.get("name")
            or tags.get("ref")
            or HIGHWAY_LABELS.get(highway_type or "")
            or DEFAULT_NAMES[category]
        )
    else:
        name = (
            tags.get("name")
            or tags.get("waterway")
            or tags.get("natural")
            or tags.get("landuse")
            or DEFAULT_NAMES[category]
        )
    return truncate_name(name)


def parse_feature(element: dict, center: GeoPoint, default_category: FeatureCategory) -> Feature | None:
    """Parse one Overpass element into a Feature; None when it must be dropped."""
    element_id = element.get("id")
    if element_id is None or element_id == "":
        return None

    try:
        location = element_location(element)
        if location is None:
            logger.debug("Dropping %s %s: no usable coordinates", element.get("type"), element_id)
            return None

        tags = element.get("tags") or {}
        highway_type = tags.get("highway") if default_category.is_road else None
        category = default_category
        if default_category.is_road and tags:
            category = classify_highway(highway_type, default_category)

        return Feature(
            name=_feature_name(tags, category, highway_type),
            category=category,
            location=location,
            distance_m=float(round(distance_m(center, location))),
            source_id=f"{element.get('type', 'element')}_{element_id}",
            highway_type=highway_type or "",
        )
    except (KeyError, TypeError, ValueError, ValidationError) as exc:
        logger.debug("Dropping malformed element %s: %s", element_id, exc)
        return None


def parse_features(elements: list, center: GeoPoint, default_category: FeatureCategory) -> list[Feature]:
    features = []
    for element in elements:
        if not isinstance(element, dict):
            continue
        feature = parse_feature(element, center, default_category)
        if feature is not None:
            features.append(feature)
    return features


# Points of interest used to anchor plausible routes. Lower is more important.
POI_QUERY_CLAUSES = [
    'node["amenity"]',
    'node["shop"]',
    'node["public_transport"]',
    'node["highway"="bus_stop"]',
    'node["railway"="station"]',
]

EMERGENCY_AMENITIES = frozenset({"hospital", "police", "fire_station"})
MEDICAL_AMENITIES = frozenset({"clinic", "doctors", "pharmacy"})
FOOD_AMENITIES = frozenset({"cafe", "restaurant", "fast_food", "fuel"})
MAJOR_SHOPS = frozenset({"supermarket", "convenience", "mall"})


def poi_priority(tags: dict) -> tuple[int, str]:
    """(priority, kind) for a POI's tags; 1 = hospital/police ... 7 = anything else."""
    amenity = tags.get("amenity")
    shop = tags.get("shop")
    if amenity in EMERGENCY_AMENITIES:
        return 1, amenity
    if amenity in MEDICAL_AMENITIES:
        return 2, amenity
    if (
        amenity == "bus_station"
        or tags.get("highway") == "bus_stop"
        or tags.get("railway") == "station"
        or "public_transport" in tags
    ):
        return 3, amenity or tags.get("highway") or tags.get("railway") or tags.get("public_transport")
    if shop in MAJOR_SHOPS:
        return 4, shop
    if amenity in FOOD_AMENITIES:
        return 5, amenity
    if shop:
        return 6, shop
    return 7, amenity or "place"


def parse_poi(element: dict, center: GeoPoint) -> PointOfInterest | None:
    element_id = element.get("id")
    if element_id is None:
        return None
    try:
        location = element_location(element)
        if location is None:
            return None
        tags = element.get("tags") or {}
        priority, kind = poi_priority(tags)
        return PointOfInterest(
            name=truncate_name(tags.get("name") or kind.replace("_", " ").capitalize()),
            kind=kind,
            location=location,
            distance_m=distance_m(center, location),
            priority=priority,
            source_id=f"{element.get('type', 'node')}_{element_id}",
        )
    except (KeyError, TypeError, ValueError, ValidationError) as exc:
        logger.debug("Dropping malformed POI %s: %s", element_id, exc)
        return None


class FeatureDiscovery:
    """Runs the categorized geodata queries for one search."""

    def __init__(self, settings: Settings, queries: list[CategoryQuery] | None = None):
        self.settings = settings
        self.queries = queries if queries is not None else CATEGORY_QUERIES

    async def discover_category(
        self, center: GeoPoint, radius_m: float, query: CategoryQuery, client=None
    ) -> list[Feature]:
        """Features for a single category; any failure yields an empty list."""
        try:
            bbox = bounding_box(center, expanded_radius(radius_m, query.for_roads))
            elements = await query_overpass(query.build(bbox.overpass_bbox()), self.settings, client)
            features = parse_features(elements, center, query.category)
        except Exception as exc:
            logger.warning("Discovery of %s failed: %s", query.name, exc)
            return []
        logger.info("Found %d %s (%d elements)", len(features), query.name, len(elements))
        return features

    async def discover(self, center: GeoPoint, radius_m: float) -> list[Feature]:
        """All categories, queried concurrently and merged in table order."""
        semaphore = asyncio.Semaphore(self.settings.max_concurrent_queries)

        async def run(query: CategoryQuery, client) -> list[Feature]:
            async with semaphore:
                return await self.discover_category(center, radius_m, query, client)

        async with make_client(self.settings) as client:
            results = await asyncio.gather(*(run(q, client) for q in self.queries))

        features = [feature for batch in results for feature in batch]
        logger.info("Total features found: %d", len(features))
        return features

    async def discover_pois(self, center: GeoPoint, radius_m: float, client=None) -> list[PointOfInterest]:
        """Points of interest inside the search radius, ranked by priority then distance."""
        bbox = bounding_box(center, radius_m).overpass_bbox()
        body = "".join(f"{clause}({bbox});" for clause in POI_QUERY_CLAUSES)
        query = f"[out:json][timeout:25];({body});out body;"
        elements = await query_overpass(query, self.settings, client)

        pois = []
        seen = set()
        for element in elements:
            if not isinstance(element, dict):
                continue
            poi = parse_poi(element, center)
            if poi is None or poi.distance_m > radius_m or poi.source_id in seen:
                continue
            seen.add(poi.source_id)
            pois.append(poi)
        pois.sort(key=lambda p: (p.priority, p.distance_m))
        logger.info("Found %d points of interest", len(pois))
        return pois

    async def discover_road_points(
        self, center: GeoPoint, radius_m: float, client=None
    ) -> list[tuple[GeoPoint, float]]:
        """Start, middle and end vertices of nearby road ways, in discovery order."""
        bbox = bounding_box(center, radius_m).overpass_bbox()
        query = f'[out:json][timeout:25];(way["highway"]({bbox}););out geom;'
        elements = await query_overpass(query, self.settings, client)

        points: list[tuple[GeoPoint, float]] = []
        seen = set()
        for element in elements:
            if not isinstance(element, dict) or element.get("id") is None:
                continue
            geometry = element.get("geometry") or []
            if not geometry:
                continue
            for vertex in (geometry[0], geometry[len(geometry) // 2], geometry[-1]):
                try:
                    lat, lon = float(vertex["lat"]), float(vertex["lon"])
                    if lat == 0 and lon == 0:
                        continue
                    point = GeoPoint(lat=lat, lon=lon)
                except (KeyError, TypeError, ValueError, ValidationError):
                    continue
                key = (round(point.lat, 5), round(point.lon, 5))
                if key in seen:
                    continue
                seen.add(key)
                points.append((point, distance_m(center, point)))
        logger.info("Found %d road points", len(points))
        return points
