"""Tests for domain models."""
import pytest
from pydantic import ValidationError


class TestGeoPoint:
    def test_valid(self):
        from missing_routes.models import GeoPoint
        p = GeoPoint(lat=61.6764, lon=50.8099)
        assert p.lat == 61.6764

    @pytest.mark.parametrize("lat,lon", [(91, 0), (-91, 0), (0, 181), (0, -181)])
    def test_out_of_range(self, lat, lon):
        from missing_routes.models import GeoPoint
        with pytest.raises(ValidationError):
            GeoPoint(lat=lat, lon=lon)

    def test_immutable_and_hashable(self):
        from missing_routes.models import GeoPoint
        p = GeoPoint(lat=1.0, lon=2.0)
        with pytest.raises(ValidationError):
            p.lat = 3.0
        assert {p, GeoPoint(lat=1.0, lon=2.0)} == {p}


class TestRouteCandidate:
    def test_needs_two_waypoints(self):
        from missing_routes.models import GeoPoint, RouteCandidate
        with pytest.raises(ValidationError):
            RouteCandidate(name="x", waypoints=[GeoPoint(lat=1.0, lon=2.0)])

    def test_start_and_end(self):
        from missing_routes.models import GeoPoint, RouteCandidate
        a, b = GeoPoint(lat=1.0, lon=2.0), GeoPoint(lat=1.5, lon=2.5)
        route = RouteCandidate(name="To school", waypoints=[a, b])
        assert route.start == a
        assert route.end == b
        assert route.source == "synthetic"


class TestFeature:
    def test_negative_distance_rejected(self):
        from missing_routes.models import Feature, FeatureCategory, GeoPoint
        with pytest.raises(ValidationError):
            Feature(name="x", category=FeatureCategory.WATER, location=GeoPoint(lat=1.0, lon=1.0),
                    distance_m=-1, source_id="node_1")

    def test_category_wire_names(self):
        from missing_routes.models import FeatureCategory
        assert FeatureCategory("road") is FeatureCategory.FOOT_ROAD
        assert FeatureCategory("major_road") is FeatureCategory.MAJOR_ROAD


class TestBoundingBox:
    def test_north_must_not_be_below_south(self):
        from missing_routes.models import BoundingBox
        with pytest.raises(ValidationError):
            BoundingBox(south=62.0, west=50.0, north=61.0, east=51.0)

    def test_center(self):
        from missing_routes.models import BoundingBox
        box = BoundingBox(south=61.0, west=50.0, north=62.0, east=51.0)
        assert box.center.lat == pytest.approx(61.5)
        assert box.center.lon == pytest.approx(50.5)


class TestZoneStyle:
    def test_from_argb(self):
        from missing_routes.core.styles import ZoneStyle
        style = ZoneStyle.from_argb((255, 0, 128, 255), (0, 255, 255, 255), 2.0)
        assert style.fill == "#0080FF"
        assert style.fill_opacity == 1.0
        assert style.stroke_opacity == 0.0

    def test_invalid_hex_rejected(self):
        from missing_routes.core.styles import ZoneStyle
        with pytest.raises(ValidationError):
            ZoneStyle(fill="red", fill_opacity=0.5, stroke="#000000", stroke_opacity=1, stroke_width=1)

    def test_every_category_has_a_style(self):
        from missing_routes.core.styles import CATEGORY_STYLES
        from missing_routes.models import FeatureCategory
        assert set(CATEGORY_STYLES) == set(FeatureCategory)
