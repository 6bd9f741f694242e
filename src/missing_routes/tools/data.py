"""Discovery tool: discover_features."""

import logging

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..state import state
from ..core.search import run_search
from ._prereqs import require_state

logger = logging.getLogger(__name__)


def register_data_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False, openWorldHint=True))
    async def discover_features(per_category_cap: int = 10) -> str:
        """Find roads, water, wetland, meadow and forest around the search point.

        Queries OpenStreetMap via Overpass, keeps the closest features of each
        category and adds compass markers when little is found.
        **Requires:** set_search_point first.
        **Next:** propose_routes, export_geojson.

        Args:
            per_category_cap: Maximum features kept per category (1-50, default 10).
        """
        try:
            require_state(state, center=True)
        except ValueError as e:
            return f"Error: {e}"

        per_category_cap = max(1, min(50, per_category_cap))
        result = await run_search(
            state.center, state.profile, state.settings, per_category_cap=per_category_cap,
        )
        state.search = result

        if result.notice:
            logger.debug("discover_features found nothing around %s", state.center)
            return f"{result.notice} ({len(result.markers)} markers)"

        counts = result.counts_by_category()
        extra = f", plus {len(result.markers)} orientation markers" if result.markers else ""
        return f"Features found: {counts}{extra}"
