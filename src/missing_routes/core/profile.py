"""Search-profile calculator: subject category -> radius, styling, zoom and area."""

from pydantic import BaseModel, ConfigDict, Field

from ..models import BoundingBox, GeoPoint, SubjectCategory
from .geo import bounding_box, circle_polygon
from .styles import PROFILE_BORDER, PROFILE_FILL, ZoneStyle

PROFILE_RADII_M: dict[SubjectCategory, int] = {
    SubjectCategory.CHILD: 1000,
    SubjectCategory.ADULT: 2000,
    SubjectCategory.ELDERLY: 1500,
}

PROFILE_LABELS: dict[SubjectCategory, str] = {
    SubjectCategory.CHILD: "Child",
    SubjectCategory.ADULT: "Adult",
    SubjectCategory.ELDERLY: "Elderly person",
}

# The zoom rectangle is padded so the whole circle stays visible.
ZOOM_RECT_PADDING = 1.2


class SearchArea(BaseModel):
    """Circle around the last known location; recomputed for every search."""
    model_config = ConfigDict(frozen=True)

    center: GeoPoint
    radius_m: int = Field(gt=0)

    def polygon(self, segments: int = 36) -> list[GeoPoint]:
        return circle_polygon(self.center, self.radius_m, segments)

    def bounding_box(self) -> BoundingBox:
        return bounding_box(self.center, self.radius_m)


def parse_subject_category(value: str | SubjectCategory) -> SubjectCategory:
    """Accept an enum member, its value or its label (case-insensitive)."""
    if isinstance(value, SubjectCategory):
        return value
    key = value.strip().lower()
    for category in SubjectCategory:
        if key in (category.value, PROFILE_LABELS[category].lower()):
            return category
    choices = ", ".join(c.value for c in SubjectCategory)
    raise ValueError(f"Unknown subject profile '{value}'. Choose one of: {choices}.")


class SearchProfile:
    """Derived search parameters for the current subject profile."""

    def __init__(self, category: SubjectCategory = SubjectCategory.ADULT):
        self.set_profile(category)

    def set_profile(self, category: SubjectCategory | str) -> None:
        self.category = parse_subject_category(category)
        self.radius_m = PROFILE_RADII_M[self.category]

    @property
    def radius_km(self) -> float:
        return self.radius_m / 1000.0

    @property
    def label(self) -> str:
        return PROFILE_LABELS[self.category]

    def search_area(self, center: GeoPoint) -> SearchArea:
        return SearchArea(center=center, radius_m=self.radius_m)

    def polygon(self, center: GeoPoint, segments: int = 36) -> list[GeoPoint]:
        return self.search_area(center).polygon(segments)

    def zoom_rect(self, center: GeoPoint) -> BoundingBox:
        return bounding_box(center, self.radius_m * ZOOM_RECT_PADDING)

    def recommended_zoom(self) -> int:
        if self.radius_km > 3:
            return 13
        if self.radius_km > 1.5:
            return 14
        return 15

    def border_width(self) -> float:
        if self.radius_km > 1.8:
            return 3.0
        if self.radius_km > 1.3:
            return 2.5
        return 2.0

    def area_style(self) -> ZoneStyle:
        return ZoneStyle.from_argb(
            PROFILE_FILL[self.category],
            PROFILE_BORDER[self.category],
            self.border_width(),
            label=self.label,
        )

    def display_text(self) -> str:
        return f"Current search radius: {self.radius_m} m ({self.radius_km:.1f} km)"

    def marker_tooltip(self, center: GeoPoint) -> str:
        return (
            "Last known location\n"
            f"{self.label}\n"
            f"Search radius: {self.radius_m} m\n"
            f"Coordinates: {center.lat:.5f}, {center.lon:.5f}"
        )
