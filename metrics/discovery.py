"""Control-plane enumeration: Azure SDK models in, plain records out."""
import logging
from typing import Any, List, Optional

from azure.core.exceptions import AzureError, ClientAuthenticationError
from azure.mgmt.loganalytics import LogAnalyticsManagementClient
from azure.mgmt.resource import SubscriptionClient

from analysis.models import Cluster, Subscription, Workspace, WorkspaceRef
from metrics.auth import AuthenticationError

logger = logging.getLogger(__name__)


class ListingError(Exception):
    pass


def _cluster_capacity(cluster: Any) -> int:
    sku = getattr(cluster, 'sku', None)
    capacity = getattr(sku, 'capacity', None) if sku is not None else None
    if capacity is None:
        logger.warning(f"Cluster {cluster.id} reports no SKU capacity; treating its commitment tier as 0")
        return 0
    return int(capacity)


def _cluster_workspaces(cluster: Any) -> List[WorkspaceRef]:
    refs = []
    for assoc in getattr(cluster, 'associated_workspaces', None) or []:
        refs.append(WorkspaceRef(
            id=getattr(assoc, 'resource_id', None) or '',
            name=getattr(assoc, 'workspace_name', None) or '',
            customer_id=getattr(assoc, 'workspace_id', None) or '',
        ))
    return refs


def _workspace_cluster_id(workspace: Any) -> Optional[str]:
    features = getattr(workspace, 'features', None)
    if features is None:
        return None
    return getattr(features, 'cluster_resource_id', None) or None


def _to_cluster(cluster: Any) -> Cluster:
    return Cluster(
        id=cluster.id,
        name=cluster.name or '',
        region=cluster.location or '',
        capacity_tier=_cluster_capacity(cluster),
        workspaces=tuple(_cluster_workspaces(cluster)),
    )


def _to_workspace(workspace: Any) -> Workspace:
    return Workspace(
        id=workspace.id,
        name=workspace.name or '',
        region=workspace.location or '',
        customer_id=getattr(workspace, 'customer_id', None) or '',
        cluster_id=_workspace_cluster_id(workspace),
    )


def list_subscriptions(credential) -> List[Subscription]:
    """Every subscription visible to the credential."""
    client = SubscriptionClient(credential)
    try:
        return [
            Subscription(id=s.subscription_id, name=s.display_name or '')
            for s in client.subscriptions.list()
        ]
    except ClientAuthenticationError as e:
        raise AuthenticationError(f"subscription listing not authorized: {e}")
    except AzureError as e:
        raise ListingError(f"subscription listing failed: {e}")


def list_clusters(credential, subscription: Subscription) -> List[Cluster]:
    """Dedicated Log Analytics clusters of `subscription` with their associated workspaces."""
    client = LogAnalyticsManagementClient(credential, subscription.id)
    try:
        return [_to_cluster(c) for c in client.clusters.list()]
    except ClientAuthenticationError as e:
        raise AuthenticationError(f"[{subscription.id}] cluster listing not authorized: {e}")
    except AzureError as e:
        raise ListingError(f"[{subscription.id}] cluster listing failed: {e}")


def list_workspaces(credential, subscription: Subscription) -> List[Workspace]:
    """Log Analytics workspaces of `subscription` with their current cluster association."""
    client = LogAnalyticsManagementClient(credential, subscription.id)
    try:
        return [_to_workspace(w) for w in client.workspaces.list()]
    except ClientAuthenticationError as e:
        raise AuthenticationError(f"[{subscription.id}] workspace listing not authorized: {e}")
    except AzureError as e:
        raise ListingError(f"[{subscription.id}] workspace listing failed: {e}")
