"""Feature filter/ranker: dedup, per-category distance cutoff, cap, priority order."""

import logging
from collections import defaultdict

from ..models import Feature, FeatureCategory

logger = logging.getLogger(__name__)

DISTANCE_MULTIPLIERS: dict[FeatureCategory, float] = {
    FeatureCategory.HIGHWAY: 2.0,
    FeatureCategory.MAJOR_ROAD: 1.5,
    FeatureCategory.MINOR_ROAD: 1.3,
    FeatureCategory.FOOT_ROAD: 1.2,
    FeatureCategory.RIVER: 1.0,
    FeatureCategory.WATER: 1.0,
    FeatureCategory.FOREST: 1.0,
    FeatureCategory.MEADOW: 1.0,
    FeatureCategory.WETLAND: 1.0,
}


def dedup_key(feature: Feature) -> tuple:
    return (feature.category, round(feature.location.lat, 5), round(feature.location.lon, 5))


def deduplicate(features: list[Feature]) -> list[Feature]:
    """Keep the closest feature per (category, rounded location), in first-seen order."""
    best: dict[tuple, Feature] = {}
    for feature in features:
        key = dedup_key(feature)
        current = best.get(key)
        if current is None or feature.distance_m < current.distance_m:
            best[key] = feature
    return list(best.values())


def within_cutoff(feature: Feature, radius_m: float) -> bool:
    return feature.distance_m <= radius_m * DISTANCE_MULTIPLIERS[feature.category]


def filter_features(features: list[Feature], radius_m: float, per_category_cap: int = 10) -> list[Feature]:
    """Reduce discovered features to the bounded display set.

    The result is ordered by descending category priority, then ascending
    distance; ties keep discovery order.
    """
    if not features:
        return []

    logger.debug("Features before filtering: %d", len(features))
    unique = deduplicate(features)
    logger.debug("After removing duplicates: %d", len(unique))
    nearby = [f for f in unique if within_cutoff(f, radius_m)]
    logger.debug("After distance filter: %d", len(nearby))

    groups: dict[FeatureCategory, list[Feature]] = defaultdict(list)
    for feature in nearby:
        groups[feature.category].append(feature)

    result: list[Feature] = []
    for category in sorted(groups, key=lambda c: c.priority, reverse=True):
        kept = sorted(groups[category], key=lambda f: f.distance_m)[:per_category_cap]
        logger.debug("  %s: %d features", category.value, len(kept))
        result.extend(kept)

    logger.info("Selected %d of %d features", len(result), len(features))
    return result
