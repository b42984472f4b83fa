"""
Cluster inventory - region -> (dedicated cluster, aggregated daily volume)
"""
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from analysis import usage_sampler
from analysis.models import Cluster, Subscription
from metrics import discovery

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClusterInventory:
    clusters: Mapping[str, Cluster]
    volumes: Mapping[str, float]

    def has_cluster(self, region: str) -> bool:
        return region in self.clusters

    def cluster_for(self, region: str) -> Optional[Cluster]:
        return self.clusters.get(region)


def build_inventory(credential, subscription: Subscription) -> ClusterInventory:
    """Aggregate sampled usage of every cluster's associated workspaces, keyed by normalized region.

    A cluster without workspaces is kept with volume 0. Any sampling failure propagates;
    no partial inventory is returned.
    """
    clusters: Dict[str, Cluster] = {}
    volumes: Dict[str, float] = {}

    for cluster in discovery.list_clusters(credential, subscription):
        region = cluster.normalized_region
        volume = 0.0
        for ref in cluster.workspaces:
            volume += usage_sampler.sample_daily_volume(credential, ref)

        if region in clusters:
            # One cluster per region is assumed; the later one replaces the earlier
            logger.warning(
                f"[{subscription.id}] clusters {clusters[region].id} and {cluster.id} "
                f"share region {region}; keeping {cluster.id}"
            )
        clusters[region] = cluster
        volumes[region] = volume
        logger.info(
            f"[{subscription.id}] cluster {cluster.name} ({region}, {cluster.capacity_tier} GB/day): "
            f"{len(cluster.workspaces)} workspace(s), {volume:.2f} GB/day"
        )

    return ClusterInventory(clusters=MappingProxyType(clusters), volumes=MappingProxyType(volumes))
