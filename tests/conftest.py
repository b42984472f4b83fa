"""
Test fixtures and configuration for pytest
"""
import pytest
from unittest.mock import MagicMock

from analysis.models import Subscription, WorkspaceRef
from metrics import discovery
from metrics import usage_client
from factories import FakeCloud


@pytest.fixture
def subscription():
    return Subscription(id="sub-1", name="Production")


@pytest.fixture
def credential():
    cred = MagicMock()
    cred.get_token.return_value.token = "test-token"
    return cred


@pytest.fixture
def fake_cloud(monkeypatch):
    """Control-plane listings and usage queries served from a FakeCloud"""
    cloud = FakeCloud()
    monkeypatch.setattr(discovery, 'list_clusters', lambda cred, sub: list(cloud.clusters))
    monkeypatch.setattr(discovery, 'list_workspaces', lambda cred, sub: list(cloud.workspaces))
    monkeypatch.setattr(usage_client, 'query_billable_usage', cloud.query_billable_usage)
    return cloud


@pytest.fixture
def mock_query_response():
    """Mock Log Analytics query API response"""
    return {
        "tables": [
            {
                "name": "PrimaryResult",
                "columns": [{"name": "BillableDataGB", "type": "real"}],
                "rows": [[18000.0]]
            }
        ]
    }


@pytest.fixture
def workspace_ref():
    return WorkspaceRef(id="/subscriptions/sub-1/workspaces/ws-a", name="ws-a", customer_id="cid-ws-a")
