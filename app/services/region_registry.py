"""
Region registry.

Static shop domain -> Region table, built once when the app starts and only
read afterwards, so request threads share it without locking.
"""
import logging
from types import MappingProxyType
from typing import Optional, Iterable, List, Dict

from ..models.region import Region
from ..utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class RegionRegistry:
    """
    Read-only lookup of configured regions by shop domain.

    Usage:
        registry = RegionRegistry.from_config(app.config)
        region = registry.resolve('shop-uk.myshopify.com')
    """

    def __init__(self, regions: Iterable[Region]):
        by_shop = {}
        for region in regions:
            if not region.shop:
                continue
            if region.shop in by_shop:
                raise ConfigurationError(
                    f"Shop {region.shop} is configured for both "
                    f"{by_shop[region.shop].code} and {region.code}"
                )
            by_shop[region.shop] = region
        self._by_shop = MappingProxyType(by_shop)

    @classmethod
    def from_config(cls, config) -> 'RegionRegistry':
        registry = cls(config.get('REGIONS') or [])
        logger.info(f"Loaded {len(registry)} region(s): {', '.join(registry.shops) or 'none'}")
        return registry

    def __len__(self) -> int:
        return len(self._by_shop)

    @property
    def regions(self) -> List[Region]:
        return list(self._by_shop.values())

    @property
    def shops(self) -> List[str]:
        return list(self._by_shop.keys())

    def resolve(self, shop: str) -> Optional[Region]:
        """Region for a shop domain, or None if the shop is not configured."""
        return self._by_shop.get(shop)

    def health_summary(self) -> Dict[str, object]:
        return {
            'shops': self.shops,
            'sealConfigured': {r.code: r.seal_configured for r in self.regions},
            'shopifyConfigured': {r.code: r.shopify_configured for r in self.regions},
        }
