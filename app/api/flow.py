"""
Shopify Flow API Routes.

ACTIONS (POST endpoints):
- POST /flow/order-created - Tag an order and its customer with their Seal subscriptions

Flow body (configure in the Flow "Send HTTP request" action):
    {
        "shopDomain": "{{shop.domain}}",
        "orderId": "{{order.id}}",
        "orderName": "{{order.name}}",
        "customerId": "{{order.customer.id}}",
        "email": "{{order.email}}"
    }

Headers:
    Content-Type: application/json
    X-Flow-Secret: <region-specific secret>
"""
from flask import Blueprint, jsonify, g, current_app

from ..middleware.flow_auth import require_flow_auth
from ..services.flow_service import FlowOrderService
from ..utils.errors import internal_error, describe_exception
from ..utils.exceptions import ProxyError

flow_bp = Blueprint('flow', __name__)


@flow_bp.route('/order-created', methods=['POST'])
@require_flow_auth
def order_created():
    """
    Flow Action: tag a new order with the customer's Seal subscriptions.

    Returns:
        ok, shopDomain, orderId, orderName, customerId, email,
        subscriptions, tags, tagResults {order, customer}
    """
    try:
        service = FlowOrderService.for_region(g.region, current_app.config)
        result = service.process(g.order_context)
        return jsonify(result), 200

    except ProxyError:
        raise

    except Exception as e:
        current_app.logger.exception(f'flow/order-created error for {g.shop}: {e}')
        return internal_error(details=describe_exception(e))
