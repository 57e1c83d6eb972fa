"""
Shared fixtures for the Seal Flow proxy tests.

The testing config ships three regions:
- shop-uk.myshopify.com  secret 'S', fully configured
- shop-eu.myshopify.com  no secret, fully configured
- shop-us.myshopify.com  no Seal token
"""
import json
import pytest
from unittest.mock import MagicMock

from app import create_app


UK_SHOP = 'shop-uk.myshopify.com'
EU_SHOP = 'shop-eu.myshopify.com'
US_SHOP = 'shop-us.myshopify.com'
UK_SECRET = 'S'


@pytest.fixture
def app():
    app = create_app('testing')
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def registry(app):
    return app.extensions['region_registry']


@pytest.fixture
def flow_headers():
    return {
        'Content-Type': 'application/json',
        'X-Flow-Secret': UK_SECRET
    }


@pytest.fixture
def full_order_payload():
    return {
        'shopDomain': UK_SHOP,
        'orderId': 'gid://Order/1',
        'orderName': '#1001',
        'customerId': 'gid://Customer/9',
        'email': 'a@b.com'
    }


def post_flow(client, payload, headers=None):
    """POST a Flow webhook body to /flow/order-created."""
    return client.post(
        '/flow/order-created',
        data=json.dumps(payload),
        headers=headers or {'Content-Type': 'application/json'}
    )


def seal_response(body, status_code=200):
    """Fake requests.Response for the Seal client."""
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.text = body if isinstance(body, str) else json.dumps(body)
    if isinstance(body, str):
        response.json.side_effect = ValueError('not json')
    else:
        response.json.return_value = body
    return response


def shopify_response(body, status_code=200):
    """Fake httpx.Response for the Shopify client."""
    response = MagicMock()
    response.status_code = status_code
    response.is_success = 200 <= status_code < 300
    response.text = body if isinstance(body, str) else json.dumps(body)
    if isinstance(body, str):
        response.json.side_effect = ValueError('not json')
    else:
        response.json.return_value = body
    return response


def fake_seal_get(subscriptions):
    """
    side_effect for requests.get that serves a Seal account.

    Args:
        subscriptions: list of full subscription records returned by search
    """
    by_id = {str(s['id']): s for s in subscriptions}

    def _get(url, headers=None, params=None, timeout=None):
        if url.endswith('/subscriptions'):
            return seal_response({'success': True, 'payload': [{'id': s['id']} for s in subscriptions]})
        if url.endswith('/subscription'):
            record = by_id.get(str(params['id']))
            if record is None:
                return seal_response('not found', 404)
            return seal_response({'success': True, 'payload': record})
        raise AssertionError(f'Unexpected Seal URL {url}')

    return _get
