from typing import Any, Dict, List, Optional
import requests

from config import LOG_ANALYTICS_ENDPOINT, LOG_ANALYTICS_SCOPE, USAGE_QUERY_TIMEOUT_SECONDS
from analysis.models import WorkspaceRef
from metrics.auth import get_access_token


class UsageQueryError(Exception):
    pass


def build_usage_query(window_days: int = 30) -> str:
    """
    KQL returning the billable ingestion of the trailing window in GB.
    Quantity is reported in MB, hence the division by 1000.
    """
    return (
        "Usage\n"
        f"| where TimeGenerated > ago({window_days}d)\n"
        f"| where StartTime >= ago({window_days}d)\n"
        "| where IsBillable == true\n"
        "| summarize BillableDataGB = sum(Quantity) / 1000."
    )


def query_workspace(customer_id: str, kql: str, token: str, timespan: Optional[str] = None) -> Dict[str, Any]:
    """
    POST a KQL query to `/v1/workspaces/{customer_id}/query` and return the parsed JSON payload.
    """
    url = f"{LOG_ANALYTICS_ENDPOINT.rstrip('/')}/v1/workspaces/{customer_id}/query"
    body: Dict[str, Any] = {"query": kql}
    if timespan:
        body["timespan"] = timespan
    headers = {"Authorization": f"Bearer {token}"}
    try:
        r = requests.post(url, json=body, headers=headers, timeout=USAGE_QUERY_TIMEOUT_SECONDS)
    except requests.RequestException as e:
        raise UsageQueryError(f"request failed: {e}")
    if r.status_code != 200:
        raise UsageQueryError(f"log analytics returned status {r.status_code}: {r.text}")
    try:
        return r.json()
    except ValueError as e:
        raise UsageQueryError(f"log analytics returned invalid JSON: {e}")


def first_cell(payload: Dict[str, Any]) -> Optional[Any]:
    """First column of the first row of the primary table, or None when the table is empty.

    Raises UsageQueryError when the payload is not shaped like a query API response.
    """
    if not isinstance(payload, dict):
        raise UsageQueryError(f"unexpected payload shape: {type(payload).__name__}")
    tables: List[Dict[str, Any]] = payload.get("tables") or []
    if not isinstance(tables, list):
        raise UsageQueryError(f"unexpected payload shape: tables is {type(tables).__name__}")
    if not tables:
        return None
    if not isinstance(tables[0], dict):
        raise UsageQueryError(f"unexpected payload shape: table is {type(tables[0]).__name__}")
    rows = tables[0].get("rows") or []
    if not isinstance(rows, list) or not isinstance(rows[0] if rows else [], list):
        raise UsageQueryError("unexpected payload shape: rows are not a list of lists")
    if not rows or not rows[0]:
        return None
    return rows[0][0]


def query_billable_usage(credential, workspace: WorkspaceRef, window_days: int = 30) -> Optional[Any]:
    """
    Billable ingestion (GB) of `workspace` over the trailing `window_days`, as returned by the service.
    Returns the raw cell value; the caller is responsible for numeric validation.
    """
    if not workspace.customer_id:
        raise UsageQueryError(f"workspace {workspace.id} has no customer id to query")
    token = get_access_token(credential, LOG_ANALYTICS_SCOPE)
    payload = query_workspace(
        workspace.customer_id,
        build_usage_query(window_days),
        token,
        timespan=f"P{window_days}D",
    )
    return first_cell(payload)
