"""Runtime configuration for external services."""

import os

from pydantic import BaseModel, Field, field_validator

DEFAULT_OVERPASS_SERVERS = [
    "https://overpass.kumi.systems/api/interpreter",
    "https://overpass-api.de/api/interpreter",
    "https://overpass.openstreetmap.ru/api/interpreter",
]

# Values shipped in sample configs that must never be sent to the directions API.
PLACEHOLDER_API_KEYS = frozenset({"YOUR_API_KEY", "YOUR_GOOGLE_API_KEY", "CHANGE_ME", "CHANGEME", "API_KEY"})

ENV_PREFIX = "MISSING_ROUTES_"


class Settings(BaseModel):
    overpass_servers: list[str] = Field(default_factory=lambda: list(DEFAULT_OVERPASS_SERVERS), min_length=1)
    osrm_url: str = "https://router.project-osrm.org"
    google_api_key: str | None = None
    request_timeout_s: float = Field(default=15.0, gt=0, le=60)
    max_concurrent_queries: int = Field(default=2, ge=1, le=9)
    user_agent: str = "missing-routes/1.0"

    @field_validator("osrm_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def commercial_routing_available(self) -> bool:
        key = (self.google_api_key or "").strip()
        return bool(key) and key.upper() not in PLACEHOLDER_API_KEYS

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        """Build settings from MISSING_ROUTES_* environment variables."""
        env = os.environ if environ is None else environ
        values: dict = {}
        servers = env.get(f"{ENV_PREFIX}OVERPASS_SERVERS")
        if servers:
            values["overpass_servers"] = [s.strip() for s in servers.split(",") if s.strip()]
        if env.get(f"{ENV_PREFIX}OSRM_URL"):
            values["osrm_url"] = env[f"{ENV_PREFIX}OSRM_URL"]
        if env.get(f"{ENV_PREFIX}GOOGLE_API_KEY"):
            values["google_api_key"] = env[f"{ENV_PREFIX}GOOGLE_API_KEY"]
        if env.get(f"{ENV_PREFIX}TIMEOUT_S"):
            values["request_timeout_s"] = env[f"{ENV_PREFIX}TIMEOUT_S"]
        if env.get(f"{ENV_PREFIX}MAX_CONCURRENT_QUERIES"):
            values["max_concurrent_queries"] = env[f"{ENV_PREFIX}MAX_CONCURRENT_QUERIES"]
        return cls(**values)
