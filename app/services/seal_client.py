"""
Seal Subscriptions merchant API client.

Looks up a customer's subscriptions by email and fetches each one's detail
record. Detail fetches fan out over a small thread pool; a single failure
fails the whole lookup because tags must be built from complete data.

API Documentation: https://www.sealsubscriptions.com/articles/merchant-api-documentation
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Any, List

import requests

from ..utils.exceptions import SealAPIError

logger = logging.getLogger(__name__)

ERROR_BODY_LIMIT = 300


def _parse_json(response: requests.Response):
    """Decode a response body, treating anything unparseable as an empty object."""
    try:
        return response.json()
    except ValueError:
        return {}


class SealClient:
    """
    Seal Subscriptions integration.

    Usage:
        client = SealClient(region.seal_token)
        stubs = client.search_subscriptions_by_email('a@b.com')
        details = client.get_subscription_details(stubs)
    """

    BASE_URL = "https://app.sealsubscriptions.com/shopify/merchant/api"

    def __init__(self, token: str, base_url: str = None, timeout: float = 10.0,
                 max_workers: int = 8):
        self.token = token
        self.base_url = (base_url or self.BASE_URL).rstrip('/')
        self.timeout = timeout
        self.max_workers = max(1, max_workers)

    def _get_headers(self) -> Dict[str, str]:
        """Get API request headers."""
        return {
            'X-Seal-Token': self.token,
            'Accept': 'application/json'
        }

    def _get(self, path: str, params: Dict[str, Any], what: str) -> Any:
        try:
            response = requests.get(
                f'{self.base_url}/{path}',
                headers=self._get_headers(),
                params=params,
                timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            raise SealAPIError(f"Seal {what} failed: {e}", original_error=e) from e

        if not response.ok:
            body = response.text[:ERROR_BODY_LIMIT]
            raise SealAPIError(
                f"Seal {what} failed {response.status_code}: {body}",
                status=response.status_code,
                body=body
            )

        return _parse_json(response)

    def search_subscriptions_by_email(self, email: str) -> List[Dict[str, Any]]:
        """
        Search subscriptions by customer email (first page only).

        Args:
            email: Customer email, sent as the free-text query

        Returns:
            List of subscription stubs, each with at least an 'id'
        """
        data = self._get(
            'subscriptions',
            {'query': email, 'active-only': 'false', 'page': 1},
            'search'
        )

        if isinstance(data, list):
            stubs = data
        elif isinstance(data, dict):
            stubs = data.get('payload') or []
        else:
            stubs = []

        return [s for s in stubs if isinstance(s, dict) and s.get('id') is not None]

    def get_subscription(self, subscription_id) -> Dict[str, Any]:
        """
        Get the full subscription record.

        Some responses wrap the record in {success, payload}; the payload is
        returned when present, the whole body otherwise.

        Raises:
            SealAPIError: the record is not a JSON object
        """
        data = self._get('subscription', {'id': subscription_id}, f'get ({subscription_id})')

        if isinstance(data, dict) and data.get('payload'):
            data = data['payload']

        if not isinstance(data, dict):
            raise SealAPIError(
                f"Seal get ({subscription_id}) returned {type(data).__name__}, expected an object",
                body=str(data)[:300]
            )
        return data

    def get_subscription_details(self, stubs: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Fetch details for every stub concurrently.

        Results keep the order of the stubs. If any fetch fails its error is
        raised and the whole lookup fails.
        """
        if not stubs:
            return []

        ids = [stub['id'] for stub in stubs]
        workers = min(self.max_workers, len(ids))

        with ThreadPoolExecutor(max_workers=workers) as executor:
            details = list(executor.map(self.get_subscription, ids))

        logger.info(f"Fetched {len(details)} Seal subscription detail(s)")
        return details
