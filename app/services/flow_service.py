"""
Shopify Flow order-created handling.

Sequences one webhook after authentication has passed:

    check credentials -> resolve order context -> require order id + email
    -> search Seal -> fetch details -> derive tags
    -> tag order -> tag customer (only if one is known) -> result

Two operating modes, chosen by PROXY_MODE:
- full:        the sequence above
- search-only: no Admin API calls at all; search Seal by the email Flow
               sent and return the raw search results
"""
import logging
from typing import Dict, Any, Optional

from ..models.order import OrderContext, SubscriptionSummary
from ..models.region import Region
from ..utils.exceptions import ConfigurationError, MissingFieldError
from .order_context import ensure_order_context
from .seal_client import SealClient
from .shopify_client import ShopifyClient
from .tagging import derive_tags, write_tags

logger = logging.getLogger(__name__)

MODE_FULL = 'full'
MODE_SEARCH_ONLY = 'search-only'


class FlowOrderService:
    """
    Service for the Flow order-created webhook.

    Usage:
        service = FlowOrderService.for_region(region, current_app.config)
        result = service.process(order_context)
    """

    def __init__(self, region: Region, seal_client: Optional[SealClient],
                 shopify_client: Optional[ShopifyClient], mode: str = MODE_FULL):
        self.region = region
        self.seal_client = seal_client
        self.shopify_client = shopify_client
        self.mode = mode

    @classmethod
    def for_region(cls, region: Region, config) -> 'FlowOrderService':
        """Build the service and its API clients from app config."""
        timeout = config.get('HTTP_TIMEOUT', 10.0)

        seal_client = None
        if region.seal_token:
            seal_client = SealClient(
                region.seal_token,
                base_url=config.get('SEAL_API_BASE_URL'),
                timeout=timeout,
                max_workers=config.get('SEAL_MAX_WORKERS', 8)
            )

        shopify_client = None
        if region.shopify_token:
            shopify_client = ShopifyClient(
                region.shop,
                region.shopify_token,
                api_version=config.get('SHOPIFY_ADMIN_API_VERSION', '2025-07'),
                timeout=timeout
            )

        return cls(region, seal_client, shopify_client, config.get('PROXY_MODE', MODE_FULL))

    def check_credentials(self) -> None:
        if self.seal_client is None:
            raise ConfigurationError('Seal token not configured for shop')
        if self.mode == MODE_FULL and self.shopify_client is None:
            raise ConfigurationError('Shopify token not configured for shop')

    def process(self, context: OrderContext) -> Dict[str, Any]:
        """Run the webhook for one order and return the response body."""
        self.check_credentials()

        if self.mode == MODE_SEARCH_ONLY:
            return self._search_only(context)
        return self._full(context)

    def _search_only(self, context: OrderContext) -> Dict[str, Any]:
        if context.email is None:
            raise MissingFieldError('email', 'email required (send via Flow)')

        stubs = self.seal_client.search_subscriptions_by_email(context.email)

        return {
            'ok': True,
            'shopDomain': context.shop_domain,
            'email': context.email,
            'subscriptions': stubs
        }

    def _full(self, context: OrderContext) -> Dict[str, Any]:
        ensured = ensure_order_context(context, self.shopify_client)

        if ensured.order_id is None:
            raise MissingFieldError('order_id', 'orderId (gid) required or resolvable')
        if ensured.email is None:
            raise MissingFieldError('email', 'email required (send via Flow or resolvable from order)')

        stubs = self.seal_client.search_subscriptions_by_email(ensured.email)
        details = self.seal_client.get_subscription_details(stubs)

        summaries = [
            SubscriptionSummary.from_detail(detail, fallback_id=stub['id'])
            for stub, detail in zip(stubs, details)
        ]
        tags = derive_tags(summaries)

        tag_results = {
            'order': write_tags(self.shopify_client, 'order', ensured.order_id, tags),
            'customer': None
        }
        if ensured.customer_id is not None:
            tag_results['customer'] = write_tags(
                self.shopify_client, 'customer', ensured.customer_id, tags
            )

        logger.info(
            f"Order {ensured.order_name or ensured.order_id} on {ensured.shop_domain}: "
            f"{len(summaries)} subscription(s), tags={tags}"
        )

        return {
            'ok': True,
            **ensured.to_dict(),
            'subscriptions': [s.to_dict() for s in summaries],
            'tags': tags,
            'tagResults': tag_results
        }
