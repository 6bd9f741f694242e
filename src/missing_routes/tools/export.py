"""Export tool: export_geojson."""

import logging
from pathlib import Path

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..state import state
from ..exporters.geojson import export_geojson as do_export_geojson
from ._prereqs import require_state

logger = logging.getLogger(__name__)


def _validate_output_path(output_path: str) -> None:
    """Raise ValueError if output_path resolves outside the user's home directory."""
    resolved = Path(output_path).resolve()
    home = Path.home().resolve()
    try:
        resolved.relative_to(home)
    except ValueError:
        raise ValueError(
            f"Output path {output_path!r} is outside the home directory. "
            "Use a path within your home directory."
        )


def register_export_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=True))
    def export_geojson(output_path: str) -> str:
        """Export the search area, feature zones, orientation markers and routes as GeoJSON.

        **Requires:** discover_features first (propose_routes is optional).

        Args:
            output_path: Destination .geojson file inside your home directory.
        """
        try:
            require_state(state, search=True)
            _validate_output_path(output_path)
        except ValueError as e:
            return f"Error: {e}"

        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        try:
            do_export_geojson(state.search, state.routes, output_path)
        except OSError as e:
            logger.warning("GeoJSON export to %s failed: %s", output_path, e)
            return f"Error writing {output_path}: {e}"

        return (
            f"Exported {len(state.search.zones)} zones, {len(state.search.markers)} markers "
            f"and {len(state.routes)} routes to {output_path}"
        )
