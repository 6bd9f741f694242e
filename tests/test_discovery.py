"""Tests for feature discovery: query building, element parsing, partial failure."""
import logging

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from missing_routes.config import Settings
from missing_routes.models import FeatureCategory, GeoPoint

CENTER = GeoPoint(lat=61.6764, lon=50.8099)


def _way(id_, tags=None, center=None, geometry=None):
    element = {"type": "way", "id": id_, "tags": tags or {}}
    if center is not None:
        element["center"] = center
    if geometry is not None:
        element["geometry"] = geometry
    return element


class TestElementLocation:
    def test_node_uses_lat_lon(self):
        from missing_routes.core.discovery import element_location
        loc = element_location({"type": "node", "id": 1, "lat": 61.68, "lon": 50.81})
        assert loc == GeoPoint(lat=61.68, lon=50.81)

    def test_way_prefers_center(self):
        from missing_routes.core.discovery import element_location
        loc = element_location(_way(
            1, center={"lat": 61.7, "lon": 50.9},
            geometry=[{"lat": 61.0, "lon": 50.0}, {"lat": 61.1, "lon": 50.1}],
        ))
        assert loc == GeoPoint(lat=61.7, lon=50.9)

    def test_way_without_center_uses_middle_vertex(self):
        from missing_routes.core.discovery import element_location
        loc = element_location(_way(1, geometry=[
            {"lat": 61.0, "lon": 50.0},
            {"lat": 61.1, "lon": 50.1},
            {"lat": 61.2, "lon": 50.2},
        ]))
        assert loc == GeoPoint(lat=61.1, lon=50.1)

    def test_way_without_geometry_is_dropped(self):
        from missing_routes.core.discovery import element_location
        assert element_location(_way(1)) is None

    def test_zero_zero_is_treated_as_unset(self):
        """Known blind spot: a real feature at exactly (0, 0) is dropped too."""
        from missing_routes.core.discovery import element_location
        assert element_location({"type": "node", "id": 1, "lat": 0.0, "lon": 0.0}) is None

    def test_equator_alone_is_kept(self):
        from missing_routes.core.discovery import element_location
        assert element_location({"type": "node", "id": 1, "lat": 0.0, "lon": 12.5}) is not None


class TestParseFeature:
    def test_missing_id_is_dropped(self):
        from missing_routes.core.discovery import parse_feature
        element = {"type": "node", "lat": 61.68, "lon": 50.81}
        assert parse_feature(element, CENTER, FeatureCategory.RIVER) is None

    def test_malformed_center_is_dropped(self):
        from missing_routes.core.discovery import parse_feature
        element = _way(5, center={"lat": "north"})
        assert parse_feature(element, CENTER, FeatureCategory.FOREST) is None

    def test_out_of_range_coordinates_are_dropped(self):
        from missing_routes.core.discovery import parse_feature
        element = {"type": "node", "id": 3, "lat": 95.0, "lon": 50.0}
        assert parse_feature(element, CENTER, FeatureCategory.WATER) is None

    def test_source_id_and_distance(self):
        from missing_routes.core.discovery import parse_feature
        from missing_routes.core.geo import distance_m
        element = _way(42, tags={"name": "Vychegda", "waterway": "river"},
                       center={"lat": 61.68, "lon": 50.82})
        feature = parse_feature(element, CENTER, FeatureCategory.RIVER)
        assert feature.source_id == "way_42"
        assert feature.name == "Vychegda"
        assert feature.category == FeatureCategory.RIVER
        assert feature.distance_m == round(distance_m(CENTER, GeoPoint(lat=61.68, lon=50.82)))

    @pytest.mark.parametrize("highway,expected", [
        ("motorway", FeatureCategory.HIGHWAY),
        ("secondary", FeatureCategory.HIGHWAY),
        ("residential", FeatureCategory.MAJOR_ROAD),
        ("service", FeatureCategory.MINOR_ROAD),
        ("footway", FeatureCategory.FOOT_ROAD),
        ("steps", FeatureCategory.FOOT_ROAD),
    ])
    def test_road_category_follows_highway_tag(self, highway, expected):
        from missing_routes.core.discovery import parse_feature
        element = _way(1, tags={"highway": highway}, center={"lat": 61.68, "lon": 50.81})
        feature = parse_feature(element, CENTER, FeatureCategory.MAJOR_ROAD)
        assert feature.category == expected
        assert feature.highway_type == highway

    def test_untagged_road_keeps_query_category(self):
        from missing_routes.core.discovery import parse_feature
        element = {"type": "way", "id": 9, "center": {"lat": 61.68, "lon": 50.81}}
        feature = parse_feature(element, CENTER, FeatureCategory.FOOT_ROAD)
        assert feature.category == FeatureCategory.FOOT_ROAD
        assert feature.name == "Path"

    def test_road_name_fallbacks(self):
        from missing_routes.core.discovery import parse_feature
        ref = parse_feature(_way(1, tags={"highway": "trunk", "ref": "R-176"},
                                 center={"lat": 61.68, "lon": 50.81}), CENTER, FeatureCategory.HIGHWAY)
        label = parse_feature(_way(2, tags={"highway": "track"},
                                   center={"lat": 61.68, "lon": 50.81}), CENTER, FeatureCategory.FOOT_ROAD)
        assert ref.name == "R-176"
        assert label.name == "Dirt track"

    def test_natural_name_fallbacks(self):
        from missing_routes.core.discovery import parse_feature
        tagged = parse_feature(_way(1, tags={"natural": "wetland"},
                                    center={"lat": 61.68, "lon": 50.81}), CENTER, FeatureCategory.WETLAND)
        untagged = parse_feature(_way(2, center={"lat": 61.68, "lon": 50.81}), CENTER, FeatureCategory.MEADOW)
        assert tagged.name == "wetland"
        assert untagged.name == "Meadow/Field"

    def test_long_names_are_truncated(self):
        from missing_routes.core.discovery import parse_feature
        element = _way(1, tags={"name": "A" * 40}, center={"lat": 61.68, "lon": 50.81})
        feature = parse_feature(element, CENTER, FeatureCategory.FOREST)
        assert feature.name == "A" * 22 + "..."
        assert len(feature.name) == 25


def test_expanded_radius():
    from missing_routes.core.discovery import expanded_radius
    assert expanded_radius(1000, for_roads=True) == 2000
    assert expanded_radius(3000, for_roads=True) == 5000
    assert expanded_radius(2000, for_roads=False) == 2000
    assert expanded_radius(4000, for_roads=False) == 3000


def test_category_query_build():
    from missing_routes.core.discovery import CATEGORY_QUERIES
    forests = next(q for q in CATEGORY_QUERIES if q.name == "forests")
    query = forests.build("1.0,2.0,3.0,4.0")
    assert query.startswith("[out:json][timeout:25];(")
    assert 'way["natural"~"forest|wood"](1.0,2.0,3.0,4.0);' in query
    assert 'way["landuse"="forest"](1.0,2.0,3.0,4.0);' in query
    assert query.endswith("out center geom;")


def test_query_table_covers_every_category():
    from missing_routes.core.discovery import CATEGORY_QUERIES
    covered = {q.category for q in CATEGORY_QUERIES}
    # minor roads come from tag classification of the city road query
    assert covered | {FeatureCategory.MINOR_ROAD} == set(FeatureCategory)


@pytest.mark.parametrize("tags,priority", [
    ({"amenity": "hospital"}, 1),
    ({"amenity": "police"}, 1),
    ({"amenity": "pharmacy"}, 2),
    ({"highway": "bus_stop"}, 3),
    ({"shop": "supermarket"}, 4),
    ({"amenity": "cafe"}, 5),
    ({"shop": "florist"}, 6),
    ({"amenity": "bench"}, 7),
])
def test_poi_priority(tags, priority):
    from missing_routes.core.discovery import poi_priority
    assert poi_priority(tags)[0] == priority


@pytest.mark.anyio
async def test_failed_category_does_not_abort_discovery(caplog):
    """One failing category yields nothing for that category only."""
    from missing_routes.core.discovery import FeatureDiscovery

    async def fake_query(query, settings, client=None):
        if "waterway" in query:
            raise RuntimeError("boom")
        if "forest" in query:
            return [_way(11, tags={"name": "Pine wood"}, center={"lat": 61.677, "lon": 50.81})]
        return []

    with caplog.at_level(logging.WARNING, logger="missing_routes.core.discovery"):
        with patch("missing_routes.core.discovery.query_overpass", side_effect=fake_query):
            with patch("httpx.AsyncClient") as mock_client_cls:
                mock_client = AsyncMock()
                mock_client.__aenter__ = AsyncMock(return_value=mock_client)
                mock_client.__aexit__ = AsyncMock(return_value=False)
                mock_client_cls.return_value = mock_client
                features = await FeatureDiscovery(Settings()).discover(CENTER, 1000)

    assert [f.source_id for f in features] == ["way_11"]
    assert any("rivers" in r.message for r in caplog.records)


@pytest.mark.anyio
async def test_discover_issues_one_query_per_category():
    from missing_routes.core.discovery import CATEGORY_QUERIES, FeatureDiscovery

    queries = []

    async def fake_query(query, settings, client=None):
        queries.append(query)
        return []

    with patch("missing_routes.core.discovery.query_overpass", side_effect=fake_query):
        with patch("httpx.AsyncClient") as mock_client_cls:
            mock_client = AsyncMock()
            mock_client.__aenter__ = AsyncMock(return_value=mock_client)
            mock_client.__aexit__ = AsyncMock(return_value=False)
            mock_client_cls.return_value = mock_client
            features = await FeatureDiscovery(Settings()).discover(CENTER, 1000)

    assert features == []
    assert len(queries) == len(CATEGORY_QUERIES)


@pytest.mark.anyio
async def test_discover_pois_ranks_by_priority_then_distance():
    from missing_routes.core.discovery import FeatureDiscovery

    elements = [
        {"type": "node", "id": 1, "lat": 61.6800, "lon": 50.8099, "tags": {"shop": "florist"}},
        {"type": "node", "id": 2, "lat": 61.6850, "lon": 50.8099, "tags": {"amenity": "police", "name": "Police"}},
        {"type": "node", "id": 3, "lat": 61.6780, "lon": 50.8099, "tags": {"amenity": "hospital"}},
        {"type": "node", "id": 4, "lat": 61.9000, "lon": 50.8099, "tags": {"amenity": "hospital"}},
    ]
    with patch("missing_routes.core.discovery.query_overpass", AsyncMock(return_value=elements)):
        pois = await FeatureDiscovery(Settings()).discover_pois(CENTER, 1000, client=MagicMock())

    assert [p.source_id for p in pois] == ["node_3", "node_2", "node_1"]
    assert pois[0].name == "Hospital"


@pytest.mark.anyio
async def test_discover_road_points_collects_start_middle_end():
    from missing_routes.core.discovery import FeatureDiscovery

    geometry = [
        {"lat": 61.677, "lon": 50.810},
        {"lat": 61.678, "lon": 50.811},
        {"lat": 61.679, "lon": 50.812},
        {"lat": 61.680, "lon": 50.813},
    ]
    elements = [
        {"type": "way", "id": 1, "geometry": geometry},
        {"type": "way", "id": 2},
        {"type": "way", "geometry": geometry},
    ]
    with patch("missing_routes.core.discovery.query_overpass", AsyncMock(return_value=elements)):
        points = await FeatureDiscovery(Settings()).discover_road_points(CENTER, 1000, client=MagicMock())

    assert [p.lat for p, _ in points] == [61.677, 61.679, 61.680]
    assert all(d > 0 for _, d in points)
