"""Clusterization run for one subscription: inventory -> placement -> recommendations.
Failures are returned as data; an errored result never carries recommendations.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from analysis import cluster_inventory as inventory_mod
from analysis import placement as placement_mod
from analysis import recommendations as engine
from analysis.models import Recommendation, Subscription
from metrics.auth import AuthenticationError
from metrics.discovery import ListingError
from metrics.usage_client import UsageQueryError

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    AUTHENTICATION_FAILURE = "AuthenticationFailure"
    LISTING_FAILURE = "ListingFailure"
    QUERY_FAILURE = "QueryFailure"


@dataclass(frozen=True)
class ClusterizationResult:
    subscription: Subscription
    recommendations: Tuple[Recommendation, ...] = ()
    error_kind: Optional[ErrorKind] = None
    error_message: str = ""

    @property
    def ok(self) -> bool:
        return self.error_kind is None


def _failed(subscription: Subscription, kind: ErrorKind, exc: Exception) -> ClusterizationResult:
    logger.error(f"[{subscription.id}] clusterization failed ({kind.value}): {exc}")
    return ClusterizationResult(subscription=subscription, error_kind=kind, error_message=str(exc))


def run_clusterization(credential, subscription: Subscription) -> ClusterizationResult:
    """Reassignments first (workspace listing order), then tier recommendations."""
    logger.info(f"[{subscription.id}] clusterization of {subscription.name or subscription.id}")
    try:
        inventory = inventory_mod.build_inventory(credential, subscription)
        placement = placement_mod.classify(credential, subscription, inventory)
    except AuthenticationError as e:
        return _failed(subscription, ErrorKind.AUTHENTICATION_FAILURE, e)
    except ListingError as e:
        return _failed(subscription, ErrorKind.LISTING_FAILURE, e)
    except UsageQueryError as e:
        return _failed(subscription, ErrorKind.QUERY_FAILURE, e)

    tier_recs = engine.recommend(inventory.clusters, inventory.volumes, placement.proposed_volumes)
    recommendations = placement.recommendations + tuple(tier_recs)
    logger.info(f"[{subscription.id}] {len(recommendations)} recommendation(s)")
    return ClusterizationResult(subscription=subscription, recommendations=recommendations)
