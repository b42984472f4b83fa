"""Record builders and an in-memory cloud shared by the tests"""
from analysis.models import Cluster, Workspace
from metrics import usage_client


def make_workspace(name, region, cluster_id=None):
    """Workspace record whose customer id is derived from its name"""
    return Workspace(
        id=f"/subscriptions/sub-1/resourceGroups/rg/providers/Microsoft.OperationalInsights/workspaces/{name}",
        name=name,
        region=region,
        customer_id=f"cid-{name}",
        cluster_id=cluster_id,
    )


def make_cluster(name, region, capacity, workspaces=()):
    return Cluster(
        id=f"/subscriptions/sub-1/resourceGroups/rg/providers/Microsoft.OperationalInsights/clusters/{name}",
        name=name,
        region=region,
        capacity_tier=capacity,
        workspaces=tuple(w.ref if isinstance(w, Workspace) else w for w in workspaces),
    )


class FakeCloud:
    """In-memory stand-in for the control plane and the usage query API.

    `daily_usage` maps customer id -> GB/day; the fake query returns the 30-day total in GB.
    """

    def __init__(self):
        self.clusters = []
        self.workspaces = []
        self.daily_usage = {}
        self.failing = set()
        self.queried = []

    def query_billable_usage(self, credential, ref, window_days=30):
        self.queried.append(ref.customer_id)
        if ref.customer_id in self.failing:
            raise usage_client.UsageQueryError(f"query failed for {ref.customer_id}")
        if ref.customer_id not in self.daily_usage:
            return None
        return self.daily_usage[ref.customer_id] * window_days
