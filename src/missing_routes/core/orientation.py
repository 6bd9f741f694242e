"""Deterministic compass markers used when discovery finds little or nothing."""

import math

from ..models import GeoPoint
from .models import OrientationMarker
from .geo import destination

# Fewer kept features than this adds the intermediate markers.
SMALL_RESULT_THRESHOLD = 5

BASIC_DIRECTIONS = [
    ("North", 0.0),
    ("East", math.pi / 2),
    ("South", math.pi),
    ("West", 3 * math.pi / 2),
]

INTERMEDIATE_DIRECTIONS = [
    ("North-east", math.pi / 4),
    ("South-east", 3 * math.pi / 4),
    ("South-west", 5 * math.pi / 4),
    ("North-west", 7 * math.pi / 4),
]


def basic_markers(center: GeoPoint, radius_m: float) -> list[OrientationMarker]:
    return [
        OrientationMarker(
            name=f"Direction: {label}",
            location=destination(center, angle, radius_m * 0.6),
            bearing_rad=angle,
            kind="basic",
        )
        for label, angle in BASIC_DIRECTIONS
    ]


def additional_markers(center: GeoPoint, radius_m: float) -> list[OrientationMarker]:
    return [
        OrientationMarker(
            name=f"Direction: {label}",
            location=destination(center, angle, radius_m * 0.4),
            bearing_rad=angle,
            kind="additional",
        )
        for label, angle in INTERMEDIATE_DIRECTIONS
    ]


def orientation_markers(center: GeoPoint, radius_m: float, feature_count: int) -> list[OrientationMarker]:
    """Markers for a result set of ``feature_count`` kept features."""
    if feature_count == 0:
        return basic_markers(center, radius_m)
    if feature_count < SMALL_RESULT_THRESHOLD:
        return additional_markers(center, radius_m)
    return []
