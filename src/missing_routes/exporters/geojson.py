"""GeoJSON export of a search result and its routes."""

import json

from ..core.models import SearchResult
from ..models import GeoPoint, RouteCandidate


def _coords(points: list[GeoPoint]) -> list[list[float]]:
    return [[p.lon, p.lat] for p in points]


def build_feature_collection(search: SearchResult, routes: list[RouteCandidate]) -> dict:
    """FeatureCollection with the area, the search point, zones, markers and routes."""
    features = [
        {
            "type": "Feature",
            "geometry": {"type": "Polygon", "coordinates": [_coords(search.area_ring)]},
            "properties": {
                "kind": "search_area",
                "profile": search.profile.value,
                "radius_m": search.radius_m,
                **search.area_style.as_geojson_properties(),
            },
        },
        {
            "type": "Feature",
            "geometry": {"type": "Point", "coordinates": [search.center.lon, search.center.lat]},
            "properties": {"kind": "last_known_location", "name": "Last known location"},
        },
    ]

    for zone in search.zones:
        f = zone.feature
        features.append({
            "type": "Feature",
            "geometry": {"type": "Polygon", "coordinates": [_coords(zone.ring)]},
            "properties": {
                "kind": "zone",
                "id": f"zone_{f.source_id}",
                "name": f.name,
                "category": f.category.value,
                "distance_m": f.distance_m,
                **zone.style.as_geojson_properties(),
            },
        })

    for marker in search.markers:
        features.append({
            "type": "Feature",
            "geometry": {"type": "Point", "coordinates": [marker.location.lon, marker.location.lat]},
            "properties": {"kind": "orientation", "name": marker.name, "marker": marker.kind},
        })

    for route in routes:
        features.append({
            "type": "Feature",
            "geometry": {"type": "LineString", "coordinates": _coords(route.waypoints)},
            "properties": {"kind": "route", "name": route.name, "source": route.source},
        })

    collection = {"type": "FeatureCollection", "features": features}
    if search.notice:
        collection["notice"] = search.notice
    return collection


def export_geojson(search: SearchResult, routes: list[RouteCandidate], output_path: str) -> None:
    """Write the search result as a GeoJSON file."""
    collection = build_feature_collection(search, routes)
    with open(output_path, "w") as f:
        json.dump(collection, f, indent=2)
