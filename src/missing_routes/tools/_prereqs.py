"""Prerequisite checking helpers for MCP tools."""


def require_state(state, *, center: bool = False, search: bool = False) -> None:
    """Raise ValueError with a descriptive message if required state is not set.

    Usage in a tool:
        try:
            require_state(state, center=True)
        except ValueError as e:
            return f"Error: {e}"
    """
    if center and state.center is None:
        raise ValueError(
            "Set the last known location first with set_search_point."
        )
    if search and state.search is None:
        raise ValueError(
            "Run a search first with discover_features."
        )
