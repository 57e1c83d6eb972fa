"""
Middleware package for the Flow proxy.
"""
from .flow_auth import (
    require_flow_auth,
    authenticate_flow_request,
    is_valid_shop_domain,
    secrets_match,
    FLOW_SECRET_HEADER,
)
