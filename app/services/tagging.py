"""
Subscription tags.

derive_tags turns subscription summaries into the tags we put on orders and
customers:
    seal_sub_id_<id>                 one per subscription
    seal_min_cycles_<n>              one per distinct billing_min_cycles

apply_tags / write_tags push them to Shopify. Writes to the order and to the
customer are independent: a failure on one is recorded, never raised.
"""
import logging
from typing import Iterable, List, Dict, Any

from ..models.order import SubscriptionSummary
from .shopify_client import ShopifyClient

logger = logging.getLogger(__name__)

SUB_ID_TAG = 'seal_sub_id_{}'
MIN_CYCLES_TAG = 'seal_min_cycles_{}'


def _sorted_unique(values: Iterable[str]) -> List[str]:
    return sorted(set(values))


def derive_tags(summaries: Iterable[SubscriptionSummary]) -> List[str]:
    """
    Build the de-duplicated tag list for a customer's subscriptions.

    The result depends only on which subscriptions are given, not their
    order: id tags come first, then min-cycle tags, each group sorted.
    """
    summaries = list(summaries)

    id_tags = _sorted_unique(SUB_ID_TAG.format(s.id) for s in summaries)
    min_cycle_tags = _sorted_unique(
        MIN_CYCLES_TAG.format(s.billing_min_cycles)
        for s in summaries
        if s.billing_min_cycles is not None
    )

    return id_tags + min_cycle_tags


def apply_tags(shopify_client: ShopifyClient, target_gid: str, tags: List[str]) -> Dict[str, Any]:
    """
    Add tags to an order or customer.

    No tags means no call: a 'skipped' result is returned instead.
    """
    if not tags:
        return {'skipped': 'no tags to add'}

    return shopify_client.tags_add(target_gid, list(dict.fromkeys(tags)))


def write_tags(shopify_client: ShopifyClient, target: str, target_gid: str,
               tags: List[str]) -> Dict[str, Any]:
    """apply_tags, with any failure turned into an {'error': ...} result."""
    try:
        return apply_tags(shopify_client, target_gid, tags)
    except Exception as e:
        logger.warning(f"Tagging {target} {target_gid} failed: {e}")
        return {'error': str(e) or f'{target} tagging failed'}
