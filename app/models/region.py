"""
Region model.

A region is one storefront the proxy serves, together with the credentials
used on its behalf.
"""
from dataclasses import dataclass
from typing import Optional

REGION_CODES = ('UK', 'EU', 'US')


@dataclass(frozen=True)
class Region:
    code: str
    shop: str
    seal_token: Optional[str] = None
    flow_secret: Optional[str] = None
    shopify_token: Optional[str] = None

    @property
    def seal_configured(self) -> bool:
        return bool(self.seal_token)

    @property
    def shopify_configured(self) -> bool:
        return bool(self.shopify_token)

    @property
    def requires_secret(self) -> bool:
        return bool(self.flow_secret)
