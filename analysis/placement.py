"""
Placement classification - is every workspace in the cluster of its region?
Also accumulates the volume of unclustered workspaces per cluster-less region.
"""
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Tuple

from analysis import usage_sampler
from analysis.cluster_inventory import ClusterInventory
from analysis.models import Recommendation, RecommendationKind, Subscription, Workspace
from metrics import discovery

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Placement:
    recommendations: Tuple[Recommendation, ...]
    proposed_volumes: Mapping[str, float]


def _reassign(workspace: Workspace, region: str, target_id=None) -> Recommendation:
    return Recommendation(
        kind=RecommendationKind.REASSIGN_WORKSPACE,
        region=region,
        subject_id=workspace.id,
        target_id=target_id,
    )


def classify(credential, subscription: Subscription, inventory: ClusterInventory) -> Placement:
    """Classify every workspace of `subscription` against `inventory`.

    - region has a cluster, workspace unclustered -> reassign (join that cluster)
    - region has a cluster, workspace clustered -> correctly placed
    - region has no cluster, workspace clustered -> reassign (association points at a
      cluster the inventory does not know for this region)
    - region has no cluster, workspace unclustered -> usage added to the proposed volume
    """
    recommendations: List[Recommendation] = []
    proposed: Dict[str, float] = {}

    for workspace in discovery.list_workspaces(credential, subscription):
        region = workspace.normalized_region
        if inventory.has_cluster(region):
            cluster = inventory.cluster_for(region)
            if not workspace.is_clustered:
                logger.info(f"[{subscription.id}] workspace {workspace.name} should join cluster {cluster.name}")
                recommendations.append(_reassign(workspace, region, target_id=cluster.id))
            continue

        if workspace.is_clustered:
            logger.info(
                f"[{subscription.id}] workspace {workspace.name} is associated with "
                f"{workspace.cluster_id} but {region} has no cluster"
            )
            recommendations.append(_reassign(workspace, region))
            continue

        volume = usage_sampler.sample_daily_volume(credential, workspace.ref)
        proposed[region] = proposed.get(region, 0.0) + volume

    return Placement(recommendations=tuple(recommendations), proposed_volumes=MappingProxyType(proposed))
