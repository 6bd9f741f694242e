"""Styling tables for profiles and feature categories.

Colors are (alpha, red, green, blue) with 0-255 channels, converted to
``#RRGGBB`` plus an opacity for renderers.
"""

import re

from pydantic import BaseModel, Field, field_validator

from ..models import FeatureCategory, SubjectCategory


def _argb_to_hex(argb: tuple[int, int, int, int]) -> tuple[str, float]:
    a, r, g, b = argb
    return f"#{r:02X}{g:02X}{b:02X}", round(a / 255.0, 3)


class ZoneStyle(BaseModel):
    fill: str
    fill_opacity: float = Field(ge=0, le=1)
    stroke: str
    stroke_opacity: float = Field(ge=0, le=1)
    stroke_width: float = Field(gt=0)
    label: str = ""

    @field_validator("fill", "stroke")
    @classmethod
    def validate_hex(cls, v: str) -> str:
        if not re.match(r"^#[0-9A-F]{6}$", v):
            raise ValueError(f"Invalid hex color '{v}'. Must be #RRGGBB format.")
        return v

    @classmethod
    def from_argb(
        cls,
        fill: tuple[int, int, int, int],
        stroke: tuple[int, int, int, int],
        stroke_width: float,
        label: str = "",
    ) -> "ZoneStyle":
        fill_hex, fill_opacity = _argb_to_hex(fill)
        stroke_hex, stroke_opacity = _argb_to_hex(stroke)
        return cls(
            fill=fill_hex,
            fill_opacity=fill_opacity,
            stroke=stroke_hex,
            stroke_opacity=stroke_opacity,
            stroke_width=stroke_width,
            label=label,
        )

    def as_geojson_properties(self) -> dict:
        return {
            "fill": self.fill,
            "fill-opacity": self.fill_opacity,
            "stroke": self.stroke,
            "stroke-opacity": self.stroke_opacity,
            "stroke-width": self.stroke_width,
        }


PROFILE_FILL: dict[SubjectCategory, tuple[int, int, int, int]] = {
    SubjectCategory.CHILD: (60, 255, 255, 100),
    SubjectCategory.ADULT: (80, 255, 100, 100),
    SubjectCategory.ELDERLY: (70, 255, 200, 100),
}

PROFILE_BORDER: dict[SubjectCategory, tuple[int, int, int, int]] = {
    SubjectCategory.CHILD: (200, 0, 180, 0),
    SubjectCategory.ADULT: (200, 255, 0, 0),
    SubjectCategory.ELDERLY: (200, 255, 140, 0),
}

_ROADS_AND_RIVERS = ZoneStyle.from_argb(
    (100, 50, 255, 50), (200, 0, 200, 0), 2.0, label="Road/Path/River"
)
_FOREST_AND_MEADOW = ZoneStyle.from_argb(
    (100, 255, 180, 80), (200, 255, 140, 40), 2.0, label="Forest/Meadow/Field"
)
_WETLAND_AND_WATER = ZoneStyle.from_argb(
    (100, 255, 100, 100), (200, 255, 50, 50), 2.0, label="Wetland/Water body"
)

CATEGORY_STYLES: dict[FeatureCategory, ZoneStyle] = {
    FeatureCategory.HIGHWAY: _ROADS_AND_RIVERS,
    FeatureCategory.MAJOR_ROAD: _ROADS_AND_RIVERS,
    FeatureCategory.MINOR_ROAD: _ROADS_AND_RIVERS,
    FeatureCategory.FOOT_ROAD: _ROADS_AND_RIVERS,
    FeatureCategory.RIVER: _ROADS_AND_RIVERS,
    FeatureCategory.FOREST: _FOREST_AND_MEADOW,
    FeatureCategory.MEADOW: _FOREST_AND_MEADOW,
    FeatureCategory.WETLAND: _WETLAND_AND_WATER,
    FeatureCategory.WATER: _WETLAND_AND_WATER,
}
