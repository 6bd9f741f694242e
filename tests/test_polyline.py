"""Tests for the encoded polyline codec."""
import pytest

from missing_routes.models import GeoPoint

# Reference example from the polyline algorithm documentation
ENCODED = "_p~iF~ps|U_ulLnnqC_mqNvxq`@"
POINTS = [(38.5, -120.2), (40.7, -120.95), (43.252, -126.453)]


def test_decode_reference_polyline():
    from missing_routes.core.polyline import decode_polyline
    decoded = decode_polyline(ENCODED)
    assert [(p.lat, p.lon) for p in decoded] == [pytest.approx(p, abs=1e-5) for p in POINTS]


def test_encode_reference_polyline():
    from missing_routes.core.polyline import encode_polyline
    assert encode_polyline([GeoPoint(lat=lat, lon=lon) for lat, lon in POINTS]) == ENCODED


def test_round_trip_within_precision():
    from missing_routes.core.polyline import decode_polyline, encode_polyline
    points = [
        GeoPoint(lat=61.6764, lon=50.8099),
        GeoPoint(lat=61.676412, lon=50.809987),
        GeoPoint(lat=-33.86785, lon=151.20732),
        GeoPoint(lat=0.0, lon=-0.00001),
    ]
    decoded = decode_polyline(encode_polyline(points))
    assert len(decoded) == len(points)
    for original, back in zip(points, decoded):
        assert back.lat == pytest.approx(original.lat, abs=1e-5)
        assert back.lon == pytest.approx(original.lon, abs=1e-5)


def test_empty_polyline():
    from missing_routes.core.polyline import decode_polyline, encode_polyline
    assert decode_polyline("") == []
    assert encode_polyline([]) == ""


def test_truncated_polyline_raises():
    from missing_routes.core.polyline import decode_polyline
    with pytest.raises(ValueError):
        decode_polyline(ENCODED[:-1])
