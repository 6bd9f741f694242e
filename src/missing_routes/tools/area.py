"""Area tools: set_search_point, set_profile, get_search_area."""

import json

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import ValidationError

from ..state import state
from ..core.profile import parse_subject_category
from ..models import GeoPoint
from ._prereqs import require_state


def register_area_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def set_search_point(lat: float, lon: float) -> str:
        """Set the missing person's last known location.

        Clears any previous search result and routes.
        **Next:** optionally set_profile, then discover_features and propose_routes.

        Args:
            lat: Latitude in decimal degrees (-90..90).
            lon: Longitude in decimal degrees (-180..180).
        """
        try:
            point = GeoPoint(lat=lat, lon=lon)
        except ValidationError:
            return f"Error: ({lat}, {lon}) is not a valid coordinate."
        if abs(point.lat) >= 89.0:
            return "Error: Search points closer than 1 degree to a pole are not supported."

        state.center = point
        state.clear_results()
        profile = state.profile
        return (
            f"Search point set: {point.lat:.5f}, {point.lon:.5f}. "
            f"{profile.display_text()} (profile: {profile.label})"
        )

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def set_profile(category: str) -> str:
        """Choose the subject profile, which decides the search radius.

        child = 1000 m, adult = 2000 m, elderly = 1500 m.
        Clears any previous search result and routes.

        Args:
            category: One of 'child', 'adult', 'elderly'.
        """
        try:
            state.profile_category = parse_subject_category(category)
        except ValueError as e:
            return f"Error: {e}"
        state.clear_results()
        profile = state.profile
        return f"Profile set to {profile.label}. {profile.display_text()}"

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def get_search_area(segments: int = 36) -> str:
        """Return the search circle, zoom rectangle and styling as JSON.

        **Requires:** set_search_point first.

        Args:
            segments: Number of points on the circle (3-360, default 36).
        """
        try:
            require_state(state, center=True)
        except ValueError as e:
            return f"Error: {e}"

        segments = max(3, min(360, segments))
        profile = state.profile
        center = state.center
        rect = profile.zoom_rect(center)
        return json.dumps({
            "center": center.model_dump(),
            "profile": profile.category.value,
            "radius_m": profile.radius_m,
            "polygon": [[p.lon, p.lat] for p in profile.polygon(center, segments)],
            "zoom_rect": rect.model_dump(),
            "recommended_zoom": profile.recommended_zoom(),
            "style": profile.area_style().model_dump(),
            "tooltip": profile.marker_tooltip(center),
        }, indent=2)
