"""
Usage sampling - trailing average daily billable ingestion per workspace
"""
import logging
import math

from metrics import usage_client
from metrics.usage_client import UsageQueryError

logger = logging.getLogger(__name__)

USAGE_WINDOW_DAYS = 30


class NoUsageDataError(UsageQueryError):
    """The usage query returned no row or a non-numeric value"""
    pass


def sample_daily_volume(credential, workspace) -> float:
    """Average daily billable ingestion (GB/day) of `workspace` over the last 30 days.

    One query, no retry: (sum of Quantity) / 1000 / 30.
    """
    raw = usage_client.query_billable_usage(credential, workspace, window_days=USAGE_WINDOW_DAYS)
    if raw is None or isinstance(raw, bool):
        raise NoUsageDataError(f"no usage data for workspace {workspace.id}")
    try:
        total_gb = float(raw)
    except (TypeError, ValueError):
        raise NoUsageDataError(f"non-numeric usage value {raw!r} for workspace {workspace.id}")
    if not math.isfinite(total_gb):
        raise NoUsageDataError(f"non-finite usage value {raw!r} for workspace {workspace.id}")

    daily = total_gb / USAGE_WINDOW_DAYS
    logger.debug(f"Workspace {workspace.name or workspace.id}: {daily:.2f} GB/day")
    return daily
