import pytest

from analysis.cluster_inventory import build_inventory
from metrics.usage_client import UsageQueryError
from factories import make_cluster, make_workspace


def test_cluster_volume_is_sum_of_associated_workspaces(fake_cloud, credential, subscription):
    a = make_workspace("a", "eastus")
    b = make_workspace("b", "eastus")
    fake_cloud.clusters = [make_cluster("c1", "East US", 500, [a, b])]
    fake_cloud.daily_usage = {"cid-a": 600.0, "cid-b": 500.0}

    inv = build_inventory(credential, subscription)

    assert list(inv.clusters) == ["eastus"]
    assert inv.clusters["eastus"].name == "c1"
    assert inv.volumes["eastus"] == pytest.approx(1100.0)
    assert inv.has_cluster("eastus")
    assert not inv.has_cluster("westus")


def test_cluster_without_workspaces_has_zero_volume(fake_cloud, credential, subscription):
    fake_cloud.clusters = [make_cluster("empty", "westus2", 1000)]

    inv = build_inventory(credential, subscription)

    assert inv.volumes["westus2"] == 0.0
    assert fake_cloud.queried == []


def test_duplicate_region_last_seen_wins(fake_cloud, credential, subscription):
    a = make_workspace("a", "eastus")
    b = make_workspace("b", "eastus")
    fake_cloud.clusters = [
        make_cluster("first", "eastus", 500, [a]),
        make_cluster("second", " EASTUS", 1000, [b]),
    ]
    fake_cloud.daily_usage = {"cid-a": 700.0, "cid-b": 50.0}

    inv = build_inventory(credential, subscription)

    assert len(inv.clusters) == 1
    assert inv.clusters["eastus"].name == "second"
    assert inv.volumes["eastus"] == pytest.approx(50.0)


def test_inventory_mappings_are_read_only(fake_cloud, credential, subscription):
    fake_cloud.clusters = [make_cluster("c1", "eastus", 500)]
    inv = build_inventory(credential, subscription)
    with pytest.raises(TypeError):
        inv.volumes["eastus"] = 1.0


def test_sampling_failure_aborts_build(fake_cloud, credential, subscription):
    a = make_workspace("a", "eastus")
    fake_cloud.clusters = [make_cluster("c1", "eastus", 500, [a])]
    fake_cloud.failing = {"cid-a"}

    with pytest.raises(UsageQueryError):
        build_inventory(credential, subscription)
