"""Pydantic domain models for search areas, discovered features and routes."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class GeoPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)


class SubjectCategory(str, Enum):
    CHILD = "child"
    ADULT = "adult"
    ELDERLY = "elderly"


class FeatureCategory(str, Enum):
    """Closed set of discoverable terrain/road categories.

    Values are the wire names used in fixtures and exports.
    """

    HIGHWAY = "highway"
    MAJOR_ROAD = "major_road"
    MINOR_ROAD = "minor_road"
    FOOT_ROAD = "road"
    RIVER = "river"
    WATER = "water"
    FOREST = "forest"
    MEADOW = "meadow"
    WETLAND = "wetland"

    @property
    def priority(self) -> int:
        return CATEGORY_PRIORITIES[self]

    @property
    def is_road(self) -> bool:
        return self in ROAD_CATEGORIES


CATEGORY_PRIORITIES: dict[FeatureCategory, int] = {
    FeatureCategory.HIGHWAY: 10,
    FeatureCategory.MAJOR_ROAD: 9,
    FeatureCategory.MINOR_ROAD: 8,
    FeatureCategory.FOOT_ROAD: 7,
    FeatureCategory.RIVER: 6,
    FeatureCategory.WATER: 5,
    FeatureCategory.FOREST: 4,
    FeatureCategory.MEADOW: 3,
    FeatureCategory.WETLAND: 2,
}

ROAD_CATEGORIES = frozenset({
    FeatureCategory.HIGHWAY,
    FeatureCategory.MAJOR_ROAD,
    FeatureCategory.MINOR_ROAD,
    FeatureCategory.FOOT_ROAD,
})


class Feature(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    category: FeatureCategory
    location: GeoPoint
    distance_m: float = Field(ge=0)
    source_id: str
    highway_type: str = ""


class PointOfInterest(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    kind: str
    location: GeoPoint
    distance_m: float = Field(ge=0)
    priority: int = Field(ge=1, le=7)
    source_id: str


class RouteCandidate(BaseModel):
    name: str
    waypoints: list[GeoPoint] = Field(min_length=2)
    source: str = "synthetic"

    @property
    def start(self) -> GeoPoint:
        return self.waypoints[0]

    @property
    def end(self) -> GeoPoint:
        return self.waypoints[-1]


class BoundingBox(BaseModel):
    south: float = Field(ge=-90, le=90)
    # west/east may run past ±180 for areas touching the antimeridian
    west: float
    north: float = Field(ge=-90, le=90)
    east: float

    @model_validator(mode="after")
    def check_north_gt_south(self) -> "BoundingBox":
        if self.north < self.south:
            raise ValueError(f"north ({self.north}) must not be less than south ({self.south})")
        return self

    @property
    def lat_range(self) -> float:
        return self.north - self.south

    @property
    def lon_range(self) -> float:
        return self.east - self.west

    @property
    def center(self) -> GeoPoint:
        return GeoPoint(lat=(self.north + self.south) / 2, lon=(self.east + self.west) / 2)

    def overpass_bbox(self) -> str:
        """Format as Overpass ``south,west,north,east`` with a '.' decimal separator."""
        return ",".join(f"{v:.7f}" for v in (self.south, self.west, self.north, self.east))
