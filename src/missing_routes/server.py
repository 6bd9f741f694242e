"""MCP server for missing-routes.

Registers all tools and runs via stdio transport.
"""

from mcp.server.fastmcp import FastMCP

from .tools.area import register_area_tools
from .tools.data import register_data_tools
from .tools.routes import register_route_tools
from .tools.export import register_export_tools
from .tools.status import register_status_tools

mcp = FastMCP(
    "missing-routes",
    instructions=(
        "Explore the area around a missing person's last known location: search radius by "
        "age profile, nearby roads, water, wetland, meadow and forest, and possible routes"
    ),
)

# Register all tool groups
register_area_tools(mcp)
register_data_tools(mcp)
register_route_tools(mcp)
register_export_tools(mcp)
register_status_tools(mcp)


def main():
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
