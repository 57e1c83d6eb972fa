"""
Business logic services for the Seal Flow proxy.
"""
from .region_registry import RegionRegistry
from .seal_client import SealClient
from .shopify_client import ShopifyClient
from .order_context import ensure_order_context
from .tagging import derive_tags, apply_tags, write_tags
from .flow_service import FlowOrderService

__all__ = [
    'RegionRegistry',
    'SealClient',
    'ShopifyClient',
    'ensure_order_context',
    'derive_tags',
    'apply_tags',
    'write_tags',
    'FlowOrderService'
]
