"""Status tool: get_status."""

import json
from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..state import SessionState, state


def next_step(session: SessionState) -> str:
    if session.center is None:
        return "set_search_point"
    if session.search is None:
        return "discover_features"
    if not session.routes:
        return "propose_routes"
    return "export_geojson"


def register_status_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def get_status() -> str:
        """Return a summary of the current search session.

        Shows the search point, subject profile, discovered feature counts,
        proposed routes and the suggested next tool to call.
        """
        summary = state.summary()
        summary["next_step"] = next_step(state)
        return json.dumps(summary, indent=2)
