"""Orchestrator: authenticate -> list subscriptions -> clusterization per subscription -> report.
Recommendations are advisory only; nothing is applied. A non-empty report exits non-zero.
"""
import logging
from typing import List

from config import (
    setup_logging, validate_config, ConfigValidationError,
    SUBSCRIPTIONS_INCLUDE, SUBSCRIPTIONS_EXCLUDE,
)
from metrics import auth
from metrics import discovery as discovery_mod
from metrics.auth import AuthenticationError
from metrics.discovery import ListingError
from analysis.clusterization import ClusterizationResult, run_clusterization
from analysis.models import Subscription
from report import render_report

# Configure logging
logger = logging.getLogger(__name__)


def _selected(subscription: Subscription, include: List[str], exclude: List[str]) -> bool:
    keys = {subscription.id, subscription.name}
    if include and not keys & set(include):
        return False
    return not keys & set(exclude)


def select_subscriptions(subscriptions: List[Subscription],
                         include: List[str] = None,
                         exclude: List[str] = None) -> List[Subscription]:
    """Apply include/exclude filters (matched on id or display name), preserving order"""
    include = SUBSCRIPTIONS_INCLUDE if include is None else include
    exclude = SUBSCRIPTIONS_EXCLUDE if exclude is None else exclude
    return [s for s in subscriptions if _selected(s, include, exclude)]


def run_all(credential, subscriptions: List[Subscription]) -> List[ClusterizationResult]:
    """Run subscriptions one by one; stop at the first failed run and return results so far."""
    results: List[ClusterizationResult] = []
    for subscription in subscriptions:
        logger.info("=" * 60)
        logger.info(f"Processing subscription: {subscription.name or subscription.id}")
        logger.info("=" * 60)
        result = run_clusterization(credential, subscription)
        results.append(result)
        if not result.ok:
            break
    return results


def main() -> int:
    # Setup logging first
    setup_logging()

    # Validate configuration
    try:
        validate_config()
        logger.info("Configuration validated successfully")
    except ConfigValidationError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    try:
        credential = auth.get_credential()
        auth.get_access_token(credential)
        subscriptions = select_subscriptions(discovery_mod.list_subscriptions(credential))
    except AuthenticationError as e:
        logger.error(f"Authentication failed: {e}")
        return 1
    except ListingError as e:
        logger.error(f"Subscription listing failed: {e}")
        return 1

    logger.info(f"Starting workspace clusterization audit of {len(subscriptions)} subscription(s)")
    results = run_all(credential, subscriptions)

    failed = [r for r in results if not r.ok]
    if failed:
        r = failed[0]
        logger.error(f"Aborting: subscription {r.subscription.id} failed with {r.error_kind.value}: {r.error_message}")
        return 1

    lines = render_report(results)
    if lines:
        count = sum(len(r.recommendations) for r in results)
        print(f"Clusterization recommendations ({count}):")
        for line in lines:
            print(line)
        return 1

    print("All workspaces are efficiently clusterized; no recommendations.")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
