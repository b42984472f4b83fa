"""Human-readable rendering of clusterization results."""
from typing import Iterable, List

from analysis.clusterization import ClusterizationResult
from analysis.models import Recommendation, RecommendationKind


def _gb(value) -> str:
    return f"{value:.2f} GB/day" if value is not None else "n/a"


def format_recommendation(rec: Recommendation) -> str:
    if rec.kind == RecommendationKind.UPGRADE_CLUSTER:
        target = f"{rec.target_capacity} GB/day" if rec.target_capacity else "a tier above the largest commitment tier"
        return (f"[{rec.region}] Upgrade cluster {rec.subject_id} from {rec.capacity} GB/day to {target} "
                f"(observed {_gb(rec.observed_volume)})")
    if rec.kind == RecommendationKind.REMOVE_CLUSTER:
        return (f"[{rec.region}] Remove cluster {rec.subject_id}: observed {_gb(rec.observed_volume)} "
                f"is below the smallest commitment tier (capacity {rec.capacity} GB/day)")
    if rec.kind == RecommendationKind.CREATE_CLUSTER:
        return (f"[{rec.region}] Create a cluster: unclustered workspaces ingest {_gb(rec.observed_volume)}")
    if rec.target_id:
        return f"[{rec.region}] Reassign workspace {rec.subject_id} to cluster {rec.target_id}"
    return f"[{rec.region}] Reassign workspace {rec.subject_id}: region has no cluster"


def render_report(results: Iterable[ClusterizationResult]) -> List[str]:
    lines: List[str] = []
    for result in results:
        if not result.recommendations:
            continue
        sub = result.subscription
        lines.append(f"Subscription {sub.name or sub.id} ({sub.id}):")
        lines.extend(f"  - {format_recommendation(rec)}" for rec in result.recommendations)
    return lines
