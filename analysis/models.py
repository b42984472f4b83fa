"""
Plain records shared by the clusterization core.
Populated by the adapters in metrics/; the core never sees Azure SDK models.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from normalize.region import normalize_region


@dataclass(frozen=True)
class Subscription:
    id: str
    name: str = ""


@dataclass(frozen=True)
class WorkspaceRef:
    """Reference to a workspace as listed in a cluster's association list."""
    id: str
    name: str = ""
    customer_id: str = ""


@dataclass(frozen=True)
class Workspace:
    id: str
    name: str
    region: str
    customer_id: str = ""
    cluster_id: Optional[str] = None

    @property
    def normalized_region(self) -> str:
        return normalize_region(self.region)

    @property
    def is_clustered(self) -> bool:
        return bool(self.cluster_id)

    @property
    def ref(self) -> WorkspaceRef:
        return WorkspaceRef(id=self.id, name=self.name, customer_id=self.customer_id)


@dataclass(frozen=True)
class Cluster:
    id: str
    name: str
    region: str
    capacity_tier: int
    workspaces: Tuple[WorkspaceRef, ...] = ()

    @property
    def normalized_region(self) -> str:
        return normalize_region(self.region)


class RecommendationKind(str, Enum):
    CREATE_CLUSTER = "CreateCluster"
    UPGRADE_CLUSTER = "UpgradeCluster"
    REMOVE_CLUSTER = "RemoveCluster"
    REASSIGN_WORKSPACE = "ReassignWorkspace"


@dataclass(frozen=True)
class Recommendation:
    """One clusterization recommendation with its numeric evidence.

    subject_id is the cluster id (upgrade/remove), the workspace id (reassign)
    or the region itself (create, no cluster exists yet).
    """
    kind: RecommendationKind
    region: str
    subject_id: str
    observed_volume: Optional[float] = None
    capacity: Optional[int] = None
    target_capacity: Optional[int] = None
    target_id: Optional[str] = None
