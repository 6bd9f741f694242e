"""Route tool: propose_routes."""

import random

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..state import state
from ..core.routes import RouteSynthesizer
from ._prereqs import require_state

MAX_ROUTES_LIMIT = 12


def register_route_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False, openWorldHint=True))
    async def propose_routes(max_routes: int = 3, seed: int | None = None) -> str:
        """Propose likely routes away from the search point.

        Routes lead to nearby points of interest or roads when they can be found,
        otherwise they are curved guesses in evenly spaced compass directions.
        These are heuristics, not shortest paths.
        **Requires:** set_search_point first.

        Args:
            max_routes: Number of routes (1-12, default 3).
            seed: Optional seed for reproducible synthetic curves.
        """
        try:
            require_state(state, center=True)
        except ValueError as e:
            return f"Error: {e}"
        if max_routes < 1 or max_routes > MAX_ROUTES_LIMIT:
            return f"Error: max_routes must be between 1 and {MAX_ROUTES_LIMIT}."

        synthesizer = RouteSynthesizer(state.settings, rng=random.Random(seed))
        routes = await synthesizer.propose_routes(state.center, state.profile.radius_m, max_routes)
        state.routes = routes

        lines = [f"Proposed {len(routes)} route(s):"]
        for route in routes:
            lines.append(f"- {route.name} [{route.source}, {len(route.waypoints)} points]")
        return "\n".join(lines)
