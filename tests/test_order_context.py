"""
Tests for order context parsing and completion.

Tests cover:
- Building contexts from Flow payloads
- Gap-filling merge (known values are never overwritten)
- Admin API lookups only when something is missing
"""
from unittest.mock import MagicMock

import pytest

from app.models.order import OrderContext
from app.services.order_context import ensure_order_context
from app.utils.exceptions import ShopifyError

SHOP = 'shop-uk.myshopify.com'


@pytest.fixture
def shopify_client():
    return MagicMock()


class TestOrderContextModel:

    def test_from_payload_camel_case(self):
        context = OrderContext.from_payload({
            'shopDomain': SHOP,
            'orderId': 'gid://shopify/Order/1',
            'orderName': '#1001',
            'customerId': 'gid://shopify/Customer/9',
            'email': 'a@b.com'
        })
        assert context.is_complete
        assert context.order_name == '#1001'

    def test_from_payload_blank_values_are_unknown(self):
        context = OrderContext.from_payload({
            'shopDomain': SHOP,
            'orderId': '',
            'customerId': '   ',
            'email': None
        })
        assert context.order_id is None
        assert context.customer_id is None
        assert context.email is None
        assert context.order_name is None

    def test_from_payload_keeps_shop_domain_as_sent(self):
        context = OrderContext.from_payload({'shopDomain': f' {SHOP}\n', 'email': ' a@b.com '})
        assert context.shop_domain == f' {SHOP}\n'
        assert context.email == 'a@b.com'

    def test_from_payload_snake_case_fallback(self):
        context = OrderContext.from_payload({'shop_domain': SHOP, 'order_id': 'gid://shopify/Order/1'})
        assert context.shop_domain == SHOP
        assert context.order_id == 'gid://shopify/Order/1'

    def test_fill_missing_keeps_known_values(self):
        context = OrderContext(shop_domain=SHOP, email='flow@b.com')
        filled = context.fill_missing(email='admin@b.com', customer_id='gid://shopify/Customer/9')
        assert filled.email == 'flow@b.com'
        assert filled.customer_id == 'gid://shopify/Customer/9'

    def test_fill_missing_ignores_blank_lookups(self):
        context = OrderContext(shop_domain=SHOP)
        assert context.fill_missing(email='', order_name=None) is context


class TestEnsureOrderContext:

    def test_complete_context_makes_no_calls(self, shopify_client):
        context = OrderContext(SHOP, 'gid://shopify/Order/1', '#1001', 'gid://shopify/Customer/9', 'a@b.com')

        result = ensure_order_context(context, shopify_client)

        assert result == context
        shopify_client.find_order_by_name.assert_not_called()
        shopify_client.get_order_by_id.assert_not_called()

    def test_lookup_by_name_fills_everything(self, shopify_client):
        shopify_client.find_order_by_name.return_value = {
            'id': 'gid://shopify/Order/1',
            'name': '#1001',
            'email': 'a@b.com',
            'customer': {'id': 'gid://shopify/Customer/9'}
        }
        context = OrderContext(SHOP, order_name='1001')

        result = ensure_order_context(context, shopify_client)

        shopify_client.find_order_by_name.assert_called_once_with('1001')
        shopify_client.get_order_by_id.assert_not_called()
        assert result.order_id == 'gid://shopify/Order/1'
        assert result.order_name == '#1001'
        assert result.customer_id == 'gid://shopify/Customer/9'
        assert result.email == 'a@b.com'

    def test_lookup_by_name_without_name_keeps_flow_name(self, shopify_client):
        shopify_client.find_order_by_name.return_value = {
            'id': 'gid://shopify/Order/1',
            'name': None,
            'email': 'a@b.com',
            'customer': {'id': 'gid://shopify/Customer/9'}
        }
        context = OrderContext(SHOP, order_name='1001')

        result = ensure_order_context(context, shopify_client)

        assert result.order_name == '1001'

    def test_lookup_by_name_does_not_overwrite_flow_values(self, shopify_client):
        shopify_client.find_order_by_name.return_value = {
            'id': 'gid://shopify/Order/1',
            'name': '#1001',
            'email': 'admin@b.com',
            'customer': {'id': 'gid://shopify/Customer/1'}
        }
        context = OrderContext(SHOP, order_name='#1001', customer_id='gid://shopify/Customer/9',
                               email='flow@b.com')

        result = ensure_order_context(context, shopify_client)

        assert result.order_id == 'gid://shopify/Order/1'
        assert result.email == 'flow@b.com'
        assert result.customer_id == 'gid://shopify/Customer/9'

    def test_lookup_by_name_then_by_id_when_still_missing(self, shopify_client):
        shopify_client.find_order_by_name.return_value = {
            'id': 'gid://shopify/Order/1',
            'name': '#1001',
            'email': None,
            'customer': None
        }
        shopify_client.get_order_by_id.return_value = {
            'id': 'gid://shopify/Order/1',
            'name': '#1001',
            'email': None,
            'customer': {'id': 'gid://shopify/Customer/9', 'email': 'cust@b.com'}
        }
        context = OrderContext(SHOP, order_name='#1001')

        result = ensure_order_context(context, shopify_client)

        shopify_client.get_order_by_id.assert_called_once_with('gid://shopify/Order/1')
        assert result.customer_id == 'gid://shopify/Customer/9'
        assert result.email == 'cust@b.com'

    def test_name_not_found(self, shopify_client):
        shopify_client.find_order_by_name.return_value = None
        context = OrderContext(SHOP, order_name='#9999', email='a@b.com')

        result = ensure_order_context(context, shopify_client)

        assert result.order_id is None
        shopify_client.get_order_by_id.assert_not_called()

    def test_fetch_by_id_prefers_order_email(self, shopify_client):
        shopify_client.get_order_by_id.return_value = {
            'id': 'gid://shopify/Order/1',
            'name': '#1001',
            'email': 'order@b.com',
            'customer': {'id': 'gid://shopify/Customer/9', 'email': 'cust@b.com'}
        }
        context = OrderContext(SHOP, order_id='gid://shopify/Order/1')

        result = ensure_order_context(context, shopify_client)

        shopify_client.find_order_by_name.assert_not_called()
        assert result.email == 'order@b.com'
        assert result.order_name == '#1001'
        assert result.customer_id == 'gid://shopify/Customer/9'

    def test_fetch_by_id_keeps_flow_order_name(self, shopify_client):
        shopify_client.get_order_by_id.return_value = {
            'id': 'gid://shopify/Order/1',
            'name': '#1001-renamed',
            'email': 'order@b.com',
            'customer': None
        }
        context = OrderContext(SHOP, order_id='gid://shopify/Order/1', order_name='#1001')

        result = ensure_order_context(context, shopify_client)

        assert result.order_name == '#1001'
        assert result.customer_id is None

    def test_nothing_to_look_up(self, shopify_client):
        context = OrderContext(SHOP, email='a@b.com', customer_id='gid://shopify/Customer/9')

        result = ensure_order_context(context, shopify_client)

        assert result.order_id is None
        shopify_client.find_order_by_name.assert_not_called()
        shopify_client.get_order_by_id.assert_not_called()

    def test_admin_api_errors_propagate(self, shopify_client):
        shopify_client.get_order_by_id.side_effect = ShopifyError('Shopify GraphQL failed: status 503')
        context = OrderContext(SHOP, order_id='gid://shopify/Order/1')

        with pytest.raises(ShopifyError):
            ensure_order_context(context, shopify_client)
