"""
Shopify Flow request authentication.

Flow posts the order payload with the shop domain in the body and, per
region, a shared secret in the X-Flow-Secret header. Authentication runs
before anything touches a remote API:

1. shopDomain must be a *.myshopify.com domain        -> 400
2. the shop must have a configured region              -> 400
3. if the region has a secret, the header must match   -> 401
"""
import hmac
import re
from functools import wraps
from typing import Optional

from flask import request, g, current_app

from ..extensions import regions
from ..models.order import OrderContext
from ..models.region import Region
from ..services.region_registry import RegionRegistry
from ..utils.exceptions import (
    InvalidShopDomainError,
    ShopNotConfiguredError,
    AuthenticationError,
)

FLOW_SECRET_HEADER = 'X-Flow-Secret'

SHOP_DOMAIN_PATTERN = re.compile(r'^[a-z0-9-]+\.myshopify\.com$')


def is_valid_shop_domain(shop_domain) -> bool:
    return isinstance(shop_domain, str) and bool(SHOP_DOMAIN_PATTERN.match(shop_domain))


def secrets_match(provided: Optional[str], expected: str) -> bool:
    """
    Timing-safe comparison of the X-Flow-Secret header against the region secret.

    A missing header never matches. Lengths of the UTF-8 encodings are
    compared before the contents.
    """
    if provided is None or expected is None:
        return False

    provided_bytes = provided.encode('utf-8')
    expected_bytes = expected.encode('utf-8')
    if len(provided_bytes) != len(expected_bytes):
        return False

    return hmac.compare_digest(provided_bytes, expected_bytes)


def authenticate_flow_request(
    registry: RegionRegistry,
    shop_domain: Optional[str],
    secret_header: Optional[str]
) -> Region:
    """
    Validate the shop domain, resolve its region and check the shared secret.

    Returns:
        The region the request belongs to

    Raises:
        InvalidShopDomainError: shop domain missing or malformed
        ShopNotConfiguredError: well-formed domain with no region
        AuthenticationError: secret required and not matched
    """
    if not is_valid_shop_domain(shop_domain):
        raise InvalidShopDomainError(shop_domain)

    region = registry.resolve(shop_domain)
    if region is None:
        raise ShopNotConfiguredError(shop_domain)

    if region.requires_secret and not secrets_match(secret_header, region.flow_secret):
        current_app.logger.warning(f'Bad {FLOW_SECRET_HEADER} for {shop_domain}')
        raise AuthenticationError()

    return region


def require_flow_auth(f):
    """
    Authenticate Shopify Flow requests.

    Stores on flask.g:
        g.order_context - OrderContext built from the body
        g.region - the authenticated Region
        g.shop - the shop domain
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            payload = {}

        context = OrderContext.from_payload(payload)

        region = authenticate_flow_request(
            regions.registry,
            context.shop_domain,
            request.headers.get(FLOW_SECRET_HEADER)
        )

        g.order_context = context
        g.region = region
        g.shop = region.shop

        return f(*args, **kwargs)

    return decorated_function
