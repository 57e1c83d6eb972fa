"""
Order context completion.

Flow does not always send every identifier we need. Missing ones are looked
up in the Admin API, one step at a time, and only when they are needed:

1. everything present           -> no calls
2. no order id, but a name      -> look the order up by name
3. order id, something missing  -> fetch the order by id

Looked-up values only fill fields that are still unknown, except the order
name found by a name lookup, which is Shopify's canonical form.
"""
import logging
from dataclasses import replace

from ..models.order import OrderContext
from .shopify_client import ShopifyClient

logger = logging.getLogger(__name__)


def _customer(order: dict) -> dict:
    return order.get('customer') or {}


def ensure_order_context(partial: OrderContext, shopify_client: ShopifyClient) -> OrderContext:
    """
    Complete an order context from the Admin API.

    The returned context may still lack an order id or email; callers decide
    whether that is fatal. Admin API errors propagate.
    """
    if partial.is_complete:
        return partial

    context = partial

    if context.order_id is None and context.order_name is not None:
        found = shopify_client.find_order_by_name(context.order_name)
        if found:
            context = context.fill_missing(
                order_id=found.get('id'),
                customer_id=_customer(found).get('id'),
                email=found.get('email'),
            )
            # Shopify's name ('#1001') replaces whatever form Flow sent
            canonical_name = (found.get('name') or '').strip()
            if canonical_name:
                context = replace(context, order_name=canonical_name)
        else:
            logger.info(f"No order named {context.order_name} on {context.shop_domain}")

    missing_details = context.email is None or context.customer_id is None or context.order_name is None
    if context.order_id is not None and missing_details:
        order = shopify_client.get_order_by_id(context.order_id)
        if order:
            context = context.fill_missing(
                email=order.get('email') or _customer(order).get('email'),
                customer_id=_customer(order).get('id'),
                order_name=order.get('name'),
            )
        else:
            logger.info(f"Order {context.order_id} not found on {context.shop_domain}")

    return context
