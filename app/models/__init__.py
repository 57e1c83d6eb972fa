"""
Models for the Seal Flow proxy.
Regions are loaded once at startup; order models live for one request.
"""
from .region import Region, REGION_CODES
from .order import OrderContext, SubscriptionSummary
