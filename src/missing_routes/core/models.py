"""Pydantic result models for the search pipeline."""

from typing import Literal

from pydantic import BaseModel, Field

from ..models import BoundingBox, Feature, GeoPoint, SubjectCategory
from .styles import ZoneStyle


class OrientationMarker(BaseModel):
    name: str
    location: GeoPoint
    bearing_rad: float
    kind: Literal["basic", "additional"]


class FeatureZone(BaseModel):
    """Small circular zone drawn around a kept feature."""
    feature: Feature
    ring: list[GeoPoint] = Field(min_length=4)
    style: ZoneStyle


class SearchResult(BaseModel):
    """Everything one search hands back to the presentation layer."""
    center: GeoPoint
    profile: SubjectCategory
    radius_m: int = Field(gt=0)
    area_ring: list[GeoPoint] = Field(min_length=4)
    area_style: ZoneStyle
    zoom_rect: BoundingBox
    recommended_zoom: int
    features: list[Feature] = []
    zones: list[FeatureZone] = []
    markers: list[OrientationMarker] = []
    notice: str | None = None

    def counts_by_category(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for feature in self.features:
            counts[feature.category.value] = counts.get(feature.category.value, 0) + 1
        return counts
