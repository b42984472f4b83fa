"""
Recommendation engine - commitment-tier threshold rules (deterministic)
"""
from typing import List, Mapping, Optional

from analysis.models import Cluster, Recommendation, RecommendationKind

# Commitment tiers of a dedicated cluster, GB/day
TIER_LADDER = (500, 1000, 2000, 5000)

# Upgrade when observed volume exceeds this multiple of the current tier
UPGRADE_FACTOR = 2
REMOVAL_THRESHOLD_GB = 500
CREATION_THRESHOLD_GB = 500


def next_tier(capacity: int) -> Optional[int]:
    """Smallest tier above `capacity`, None at the top of the ladder"""
    for tier in TIER_LADDER:
        if tier > capacity:
            return tier
    return None


def _cluster_recommendations(region: str, cluster: Cluster, volume: float) -> List[Recommendation]:
    recs = []
    # Both rules are checked independently
    if volume > UPGRADE_FACTOR * cluster.capacity_tier:
        recs.append(Recommendation(
            kind=RecommendationKind.UPGRADE_CLUSTER,
            region=region,
            subject_id=cluster.id,
            observed_volume=volume,
            capacity=cluster.capacity_tier,
            target_capacity=next_tier(cluster.capacity_tier),
        ))
    if volume < REMOVAL_THRESHOLD_GB:
        recs.append(Recommendation(
            kind=RecommendationKind.REMOVE_CLUSTER,
            region=region,
            subject_id=cluster.id,
            observed_volume=volume,
            capacity=cluster.capacity_tier,
        ))
    return recs


def recommend(clusters: Mapping[str, Cluster],
              volumes: Mapping[str, float],
              proposed_volumes: Mapping[str, float]) -> List[Recommendation]:
    """Apply the tier rules: existing clusters first, then proposed regions, in mapping order."""
    recommendations: List[Recommendation] = []

    for region, cluster in clusters.items():
        recommendations.extend(_cluster_recommendations(region, cluster, volumes.get(region, 0.0)))

    for region, volume in proposed_volumes.items():
        if volume > CREATION_THRESHOLD_GB:
            recommendations.append(Recommendation(
                kind=RecommendationKind.CREATE_CLUSTER,
                region=region,
                subject_id=region,
                observed_volume=volume,
                target_capacity=TIER_LADDER[0],
            ))

    return recommendations
