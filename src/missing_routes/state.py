"""Session state for the missing-routes MCP server.

Holds the single active search: last known location, subject profile, the
latest search result and proposed routes.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from missing_routes.config import Settings
from missing_routes.core.models import SearchResult
from missing_routes.core.profile import SearchProfile
from missing_routes.models import GeoPoint, RouteCandidate, SubjectCategory


class SessionState(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    center: Optional[GeoPoint] = None
    profile_category: SubjectCategory = SubjectCategory.ADULT
    search: Optional[SearchResult] = None
    routes: list[RouteCandidate] = []
    settings: Settings = Field(default_factory=Settings.from_env)

    @property
    def profile(self) -> SearchProfile:
        return SearchProfile(self.profile_category)

    def clear_results(self) -> None:
        self.search = None
        self.routes = []

    def summary(self) -> dict:
        profile = self.profile
        return {
            "search_point": {
                "set": True,
                "lat": self.center.lat,
                "lon": self.center.lon,
            } if self.center is not None else {"set": False},
            "profile": {
                "category": profile.category.value,
                "radius_m": profile.radius_m,
                "recommended_zoom": profile.recommended_zoom(),
            },
            "search": {
                "run": self.search is not None,
                "feature_counts": self.search.counts_by_category() if self.search else {},
                "zones": len(self.search.zones) if self.search else 0,
                "orientation_markers": len(self.search.markers) if self.search else 0,
                "notice": self.search.notice if self.search else None,
            },
            "routes": [
                {"name": r.name, "source": r.source, "waypoints": len(r.waypoints)}
                for r in self.routes
            ],
            "services": {
                "overpass_servers": len(self.settings.overpass_servers),
                "osrm_url": self.settings.osrm_url,
                "commercial_routing": self.settings.commercial_routing_available,
            },
        }


# Global session state, one per MCP server process
state = SessionState()
