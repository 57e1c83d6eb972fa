"""
Shopify Admin API client.
Handles order lookups and tagging for the Flow proxy.
"""
import logging
import httpx
from typing import Optional, Dict, Any, List

from ..utils.exceptions import ShopifyError

logger = logging.getLogger(__name__)

ORDER_BY_NAME_QUERY = """
query findOrderByName($q: String!) {
    orders(first: 1, query: $q) {
        nodes {
            id
            name
            email
            customer {
                id
                email
            }
        }
    }
}
"""

ORDER_BY_ID_QUERY = """
query getOrder($id: ID!) {
    order(id: $id) {
        id
        name
        email
        customer {
            id
            email
        }
    }
}
"""

TAGS_ADD_MUTATION = """
mutation tagsAdd($id: ID!, $tags: [String!]!) {
    tagsAdd(id: $id, tags: $tags) {
        node {
            id
        }
        userErrors {
            field
            message
        }
    }
}
"""


class ShopifyClient:
    """
    Client for Shopify Admin GraphQL API.

    Supports:
    - Order lookup by name or global id
    - Adding tags to orders and customers
    """

    def __init__(self, shop_domain: str, access_token: str, api_version: str = '2025-07',
                 timeout: float = 10.0):
        self.shop_domain = shop_domain.replace('https://', '').replace('http://', '').rstrip('/')
        self.access_token = access_token
        self.api_version = api_version
        self.timeout = timeout
        self.graphql_url = f'https://{self.shop_domain}/admin/api/{api_version}/graphql.json'

    def _execute_query(self, query: str, variables: Optional[Dict] = None) -> Dict[str, Any]:
        """Execute a GraphQL query."""
        headers = {
            'X-Shopify-Access-Token': self.access_token,
            'Content-Type': 'application/json'
        }

        payload = {'query': query}
        if variables:
            payload['variables'] = variables

        try:
            with httpx.Client() as client:
                response = client.post(
                    self.graphql_url,
                    headers=headers,
                    json=payload,
                    timeout=self.timeout
                )
        except httpx.HTTPError as e:
            raise ShopifyError(f"Shopify GraphQL request failed: {e}", original_error=e) from e

        try:
            result = response.json()
        except ValueError:
            result = None

        if not response.is_success or not isinstance(result, dict) or result.get('errors'):
            if isinstance(result, dict) and result.get('errors'):
                msg = str(result['errors'])
            else:
                msg = f'status {response.status_code}'
            raise ShopifyError(
                f"Shopify GraphQL failed: {msg}",
                status=response.status_code,
                body=response.text[:300]
            )

        return result.get('data') or {}

    def find_order_by_name(self, order_name: str) -> Optional[Dict[str, Any]]:
        """
        Find an order by its human-readable name.

        Args:
            order_name: Order name such as '#1001' (the '#' is added if missing)

        Returns:
            Order dict (id, name, email, customer) or None if no match
        """
        name = order_name if order_name.startswith('#') else f'#{order_name}'

        result = self._execute_query(ORDER_BY_NAME_QUERY, {'q': f'name:{name}'})
        nodes = (result.get('orders') or {}).get('nodes') or []

        return nodes[0] if nodes else None

    def get_order_by_id(self, order_id: str) -> Optional[Dict[str, Any]]:
        """
        Get an order by global id.

        Args:
            order_id: Shopify order GID

        Returns:
            Order dict or None if not found
        """
        result = self._execute_query(ORDER_BY_ID_QUERY, {'id': order_id})
        return result.get('order')

    def tags_add(self, gid: str, tags: List[str]) -> Dict[str, Any]:
        """
        Add tags to any taggable resource (order, customer, ...).

        Field-level user errors are returned, not raised.

        Args:
            gid: Global id of the resource
            tags: Tags to add (duplicates are dropped before sending)

        Returns:
            Dict with success flag, the tagged node and any userErrors
        """
        unique_tags = list(dict.fromkeys(tags))

        result = self._execute_query(TAGS_ADD_MUTATION, {'id': gid, 'tags': unique_tags})

        mutation_result = result.get('tagsAdd') or {}
        user_errors = mutation_result.get('userErrors') or []

        if user_errors:
            logger.warning(f"tagsAdd on {gid} returned user errors: {user_errors}")
        elif not mutation_result:
            logger.warning(f"tagsAdd on {gid} returned no result")

        return {
            'success': bool(mutation_result) and not user_errors,
            'node': mutation_result.get('node'),
            'tags': unique_tags,
            'userErrors': user_errors
        }
