"""Search-area and route-candidate engine for missing person searches."""
